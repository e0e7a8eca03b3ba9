"""
Sequential page walking for one region/category scope.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import structlog
from pydantic import BaseModel, Field

from olx_search.core.exceptions.scraping_errors import ExtractionError, TransportError
from olx_search.core.models.item import Item
from olx_search.core.models.search_request import SortOrder
from olx_search.shared.config.olx_settings import OlxSearchConfig, get_olx_config
from olx_search.shared.logging.log_setup import get_logger, log_scraping_progress

from .olx_extractor import OlxExtractor
from .olx_fetcher import OlxPageFetcher
from .olx_parser import OlxParser

SORT_PARAMS = {
    SortOrder.PRICE_ASC: ("sp", "1"),
    SortOrder.PRICE_DESC: ("sp", "2"),
    SortOrder.DATE: ("sf", "1"),
}


def build_search_url(
    query: str,
    domain: str,
    page: int = 1,
    region: Optional[str] = None,
    category: Optional[str] = None,
    sort: SortOrder = SortOrder.RELEVANCE,
) -> str:
    """
    Build an OLX search URL.
    
    Args:
        query: Search query
        domain: Marketplace host
        page: 1-based page number
        region: Region code (UF)
        category: Category slug
        sort: Requested order
        
    Returns:
        Complete search URL
    """
    segments = []
    if category:
        segments.append(category)
    if region:
        segments.append(f"estado-{region.lower()}")
    path = "/" + "/".join(segments) if segments else "/brasil"
    
    params = {"q": query}
    if page > 1:
        params["o"] = str(page)
    if sort in SORT_PARAMS:
        key, value = SORT_PARAMS[sort]
        params[key] = value
    
    return f"https://{domain}{path}?{urlencode(params)}"


class PageWalk(BaseModel):
    """
    Items gathered by walking the pages of one scope.
    
    Attributes:
        items: Unique items in upstream order, not truncated
        url: First page URL
        total: Upstream reported total
        page_size: Upstream page size
        pages_fetched: Pages successfully processed
        stop_reason: Why the walk ended
        capped: Stopped before exhausting upstream results
        category: Category code selected by upstream
    """
    
    items: List[Item] = Field(default_factory=list)
    url: str
    total: int = 0
    page_size: int
    pages_fetched: int = 1
    stop_reason: str
    capped: bool = False
    category: Optional[str] = None


class OlxPaginator:
    """
    Walks search result pages until enough items are gathered.
    
    Page N+1 is requested only after page N is processed. The walk stops
    when the limit is reached, upstream is exhausted, the page budget is
    spent, or a page brings nothing new. Failures on the first page are
    fatal; failures on later pages end the walk with partial results.
    """
    
    def __init__(
        self,
        fetcher: Optional[OlxPageFetcher] = None,
        parser: Optional[OlxParser] = None,
        config: Optional[OlxSearchConfig] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ):
        """
        Initialize paginator.
        
        Args:
            fetcher: Page fetcher
            parser: Listing parser
            config: OLX configuration
            logger: Logger to report through
        """
        self.config = config or get_olx_config()
        self.logger = logger if logger is not None else get_logger(__name__)
        self.fetcher = fetcher or OlxPageFetcher(self.config, self.logger)
        self.parser = parser or OlxParser()
    
    def _url(self, query: str, page: int, region, category, sort) -> str:
        return build_search_url(
            query,
            self.config.OLX_DOMAIN,
            page=page,
            region=region,
            category=category,
            sort=sort,
        )
    
    def fetch_first_page(
        self,
        query: str,
        timeout: float,
        sort: SortOrder = SortOrder.RELEVANCE,
        region: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch page 1 and return its raw pageProps.
        
        Args:
            query: Search query
            timeout: Per-request timeout in seconds
            sort: Requested order
            region: Region code
            category: Category slug
            
        Returns:
            Raw pageProps object
            
        Raises:
            TransportError: If the page could not be fetched
            ExtractionError: If the page carries no embedded data
        """
        url = self._url(query, 1, region, category, sort)
        html = self.fetcher.fetch(url, timeout)
        page_props = OlxExtractor.extract_next_data(html)
        if page_props is None:
            raise ExtractionError(url, "Could not extract page data from OLX.")
        return page_props
    
    def paginate(
        self,
        query: str,
        limit: int,
        timeout: float,
        sort: SortOrder = SortOrder.RELEVANCE,
        region: Optional[str] = None,
        category: Optional[str] = None,
    ) -> PageWalk:
        """
        Gather at least `limit` unique items when upstream has them.
        
        Args:
            query: Search query
            limit: Number of unique items wanted
            timeout: Per-request timeout in seconds
            sort: Requested order, passed upstream
            region: Region code
            category: Category slug
            
        Returns:
            Page walk with all gathered items
            
        Raises:
            TransportError: If the first page could not be fetched
            ExtractionError: If the first page carries no search results
        """
        max_pages = self.config.MAX_PAGES
        first_url = self._url(query, 1, region, category, sort)
        self.logger.info("search_started", url=first_url, limit=limit, region=region)
        
        html = self.fetcher.fetch(first_url, timeout)
        first_page = OlxExtractor.extract_next_data(html)
        if first_page is None or not isinstance(first_page.get("ads"), list):
            raise ExtractionError(first_url)
        
        reported_total = first_page.get("totalOfAds")
        total = reported_total if isinstance(reported_total, int) else None
        page_size = first_page.get("pageSize")
        if not isinstance(page_size, int) or page_size < 1:
            page_size = self.config.DEFAULT_PAGE_SIZE
        
        seen_ids = set()
        items: List[Item] = []
        
        def accumulate(page_items: List[Item]) -> int:
            added = 0
            for item in page_items:
                if item.id:
                    if item.id in seen_ids:
                        continue
                    seen_ids.add(item.id)
                items.append(item)
                added += 1
            return added
        
        accumulate(self.parser.parse_ads(first_page["ads"]))
        log_scraping_progress(
            self.logger, "page_parsed", page=1, total_pages=max_pages,
            items_found=len(items), region=region,
        )
        
        current_page = 1
        while True:
            if len(items) >= limit:
                stop_reason = "limit"
                break
            if total is not None and current_page * page_size >= total:
                stop_reason = "exhausted"
                break
            if current_page >= max_pages:
                stop_reason = "max_pages"
                break
            
            page_url = self._url(query, current_page + 1, region, category, sort)
            try:
                page_html = self.fetcher.fetch(page_url, timeout)
            except TransportError as e:
                self.logger.warning("page_fetch_failed", page=current_page + 1, error=str(e))
                stop_reason = "page_failed"
                break
            
            page_props = OlxExtractor.extract_next_data(page_html)
            if page_props is None or not isinstance(page_props.get("ads"), list):
                self.logger.warning("page_extraction_failed", page=current_page + 1, url=page_url)
                stop_reason = "page_failed"
                break
            
            current_page += 1
            added = accumulate(self.parser.parse_ads(page_props["ads"]))
            log_scraping_progress(
                self.logger, "page_parsed", page=current_page, total_pages=max_pages,
                items_found=len(items), region=region,
            )
            if added == 0:
                stop_reason = "empty_page"
                break
        
        selected_category = first_page.get("selectedCategoryCode")
        more_remaining = total is None or current_page * page_size < total
        capped = len(items) > limit or (
            stop_reason in ("limit", "max_pages", "page_failed") and more_remaining
        )
        
        self.logger.info(
            "pagination_finished",
            region=region,
            pages=current_page,
            items=len(items),
            stop_reason=stop_reason,
            capped=capped,
        )
        
        return PageWalk(
            items=items,
            url=first_url,
            total=total or len(items),
            page_size=page_size,
            pages_fetched=current_page,
            stop_reason=stop_reason,
            capped=capped,
            category=str(selected_category) if selected_category else None,
        )
