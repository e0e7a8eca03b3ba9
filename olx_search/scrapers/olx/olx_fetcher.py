"""
Page retrieval with a direct HTTP client and a real-browser fallback.
"""

from typing import Optional

import requests
import structlog
from seleniumbase import SB

from olx_search.core.exceptions.scraping_errors import TransportError
from olx_search.shared.config.olx_settings import OlxSearchConfig, get_olx_config
from olx_search.shared.logging.log_setup import get_logger


class OlxPageFetcher:
    """
    Fetches page bodies from OLX.
    
    The direct client is tried first. Any failure (network, timeout,
    non-2xx) is followed by exactly one attempt through an undetected
    Chrome session, which presents a genuine browser fingerprint. There is
    no retry beyond that substitution.
    """
    
    def __init__(
        self,
        config: Optional[OlxSearchConfig] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ):
        """
        Initialize fetcher.
        
        Args:
            config: OLX configuration, defaults to the cached one
            logger: Logger to report through, defaults to the module logger
        """
        self.config = config or get_olx_config()
        self.headers = self.config.browser_headers
        self.logger = logger if logger is not None else get_logger(__name__)
    
    def fetch(self, url: str, timeout: float) -> str:
        """
        Fetch a page body.
        
        Args:
            url: Page URL
            timeout: Timeout in seconds for each transport attempt
            
        Returns:
            Page body as text
            
        Raises:
            TransportError: If both transports failed
        """
        try:
            return self._fetch_direct(url, timeout)
        except TransportError as e:
            if not self.config.USE_BROWSER_FALLBACK:
                raise
            self.logger.warning(
                "direct_fetch_failed",
                url=url,
                status_code=e.status_code,
                error=str(e),
            )
        
        self.logger.info("fallback_transport_used", url=url)
        return self._fetch_with_browser(url, timeout)
    
    def _fetch_direct(self, url: str, timeout: float) -> str:
        """
        Fetch through requests.
        
        Args:
            url: Page URL
            timeout: Timeout in seconds
            
        Returns:
            Body decoded as UTF-8
            
        Raises:
            TransportError: On network errors, timeouts and error statuses
        """
        try:
            response = requests.get(
                url,
                headers=self.headers,
                timeout=timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            status_code = getattr(e.response, "status_code", None) if hasattr(e, "response") else None
            raise TransportError(url, str(e), status_code)
        
        self.logger.debug("page_fetched", url=url, transport="requests", bytes=len(response.content))
        return response.content.decode("utf-8", errors="replace")
    
    def _fetch_with_browser(self, url: str, timeout: float) -> str:
        """
        Fetch through a SeleniumBase undetected Chrome session.
        
        Args:
            url: Page URL
            timeout: Page load timeout in seconds
            
        Returns:
            Page source
            
        Raises:
            TransportError: If the browser fails or returns an empty page
        """
        try:
            with SB(uc=True, headless=self.config.IS_HEADLESS_FALLBACK) as sb:
                sb.driver.set_page_load_timeout(timeout)
                sb.open(url)
                html = sb.get_page_source()
        except Exception as e:
            self.logger.error("browser_fetch_failed", url=url, error=str(e))
            raise TransportError(url, f"browser fallback failed: {e}")
        
        if not html or not html.strip():
            raise TransportError(url, "browser fallback returned an empty page")
        
        self.logger.debug("page_fetched", url=url, transport="browser", chars=len(html))
        return html
