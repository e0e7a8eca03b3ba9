"""
OLX-specific configuration settings.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OlxSearchConfig(BaseSettings):
    """
    Configuration for the OLX search pipeline.
    
    Attributes:
        OLX_DOMAIN: Marketplace host queried by the scraper
        DEFAULT_LIMIT: Default maximum number of results
        REQUEST_TIMEOUT: Per-request timeout in seconds
        DETAIL_CONCURRENCY: Detail pages fetched in parallel per batch
        MAX_PAGES: Page budget per region
        DEFAULT_PAGE_SIZE: Page size assumed when upstream does not report one
        USE_BROWSER_FALLBACK: Retry failed requests through a real browser
        IS_HEADLESS_FALLBACK: Whether the fallback browser runs headless
        USER_AGENT: User agent sent with every request
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    OLX_DOMAIN: str = Field(default="www.olx.com.br", description="OLX marketplace host")
    DEFAULT_LIMIT: int = Field(default=20, ge=1, le=1000)
    REQUEST_TIMEOUT: float = Field(default=15.0, gt=0, le=300)
    DETAIL_CONCURRENCY: int = Field(default=5, ge=1, le=50)
    MAX_PAGES: int = Field(default=20, ge=1, le=100)
    DEFAULT_PAGE_SIZE: int = Field(default=50, ge=1)
    USE_BROWSER_FALLBACK: bool = Field(default=True)
    IS_HEADLESS_FALLBACK: bool = Field(default=True)
    USER_AGENT: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
        ),
    )
    
    @field_validator("OLX_DOMAIN")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        """
        Validates the marketplace host.
        
        Args:
            v: Host name
            
        Returns:
            Host without scheme or trailing slash
            
        Raises:
            ValueError: If the host is empty or not an OLX host
        """
        v = v.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
        if "olx" not in v:
            raise ValueError("Domain must be an OLX host")
        return v
    
    @property
    def browser_headers(self) -> dict[str, str]:
        """Header set mimicking a desktop Chrome navigation."""
        return {
            "User-Agent": self.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
            "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
            "Accept-Encoding": "gzip, deflate",
            "Sec-Ch-Ua": '"Chromium";v="131", "Not_A Brand";v="24", "Google Chrome";v="131"',
            "Sec-Ch-Ua-Mobile": "?0",
            "Sec-Ch-Ua-Platform": '"Windows"',
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Sec-Fetch-User": "?1",
            "Upgrade-Insecure-Requests": "1",
        }


@lru_cache()
def get_olx_config() -> OlxSearchConfig:
    """
    Get cached OLX configuration.
    
    Returns:
        OLX search configuration instance
    """
    return OlxSearchConfig()
