"""
Search pipeline orchestration: pagination, region fan-out, filtering,
shaping and detail enrichment.
"""

from typing import Any, Dict, Optional

import structlog

from olx_search.core.models.search_request import SearchRequest
from olx_search.core.models.search_result import Pagination, QueryEcho, SearchResult
from olx_search.core.utils.query_matcher import QueryMatcher
from olx_search.core.utils.result_shaper import ResultShaper
from olx_search.shared.config.olx_settings import OlxSearchConfig, get_olx_config
from olx_search.shared.logging.log_setup import get_logger

from .olx_aggregator import OlxRegionAggregator
from .olx_catalog import validate_category, validate_regions
from .olx_enricher import OlxDetailEnricher
from .olx_fetcher import OlxPageFetcher
from .olx_paginator import OlxPaginator
from .olx_parser import OlxParser


class OlxSearch:
    """
    Main OLX search pipeline.
    
    Flow: paginator (one region) or region aggregator (several regions),
    then the optional strict filter, sorting and truncation, and finally
    detail enrichment of the surviving items.
    """
    
    def __init__(
        self,
        config: Optional[OlxSearchConfig] = None,
        fetcher: Optional[OlxPageFetcher] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ):
        """
        Initialize the pipeline and its components.
        
        Args:
            config: OLX configuration
            fetcher: Page fetcher shared by every component
            logger: Logger injected into every component
        """
        self.config = config or get_olx_config()
        self.logger = logger if logger is not None else get_logger(__name__)
        self.fetcher = fetcher or OlxPageFetcher(self.config, self.logger)
        self.parser = OlxParser()
        self.paginator = OlxPaginator(self.fetcher, self.parser, self.config, self.logger)
        self.aggregator = OlxRegionAggregator(self.paginator, self.logger)
        self.enricher = OlxDetailEnricher(self.fetcher, self.parser, self.logger)
    
    @staticmethod
    def validate(request: SearchRequest) -> None:
        """
        Check category and regions against the static catalog.
        
        Raises:
            UnknownCategoryError: If the category slug is unknown
            UnknownRegionError: If a region code is unknown
        """
        validate_category(request.category)
        validate_regions(request.regions)
    
    def search(self, request: SearchRequest) -> SearchResult:
        """
        Run a search.
        
        Args:
            request: Validated request
            
        Returns:
            Shaped and enriched result
            
        Raises:
            ValidationError: If the category or a region is unknown
            TransportError: If the first page of a single-region search failed
            ExtractionError: If the first page of a single-region search had no data
        """
        self.validate(request)
        
        if request.is_multi_region:
            result = self._search_regions(request)
        else:
            result = self._search_single(request)
        
        self.enricher.enrich(result.items, request.concurrency, request.timeout)
        
        self.logger.info(
            "search_completed",
            query=request.query,
            items=len(result.items),
            total=result.pagination.total,
            capped=result.pagination.capped,
        )
        return result
    
    def _pagination(self, request: SearchRequest, total: int, page_size: int, capped: bool) -> Pagination:
        max_pages = self.config.MAX_PAGES
        return Pagination(
            total=total,
            page_size=page_size,
            limit=request.limit,
            max_pages=max_pages,
            results_limit=max_pages * page_size,
            capped=capped,
        )
    
    def _search_single(self, request: SearchRequest) -> SearchResult:
        walk = self.paginator.paginate(
            request.query,
            request.limit,
            request.timeout,
            sort=request.sort,
            region=request.region,
            category=request.category,
        )
        
        items = walk.items
        if request.strict:
            items = QueryMatcher(request.query).filter(items)
        items = ResultShaper.shape(items, request.sort, request.limit)
        
        return SearchResult(
            items=items,
            query=QueryEcho(
                text=request.query,
                sort=request.sort.value,
                region=request.region,
                regions=list(request.regions),
                category=walk.category or request.category,
                strict=request.strict,
                url=walk.url,
            ),
            pagination=self._pagination(request, walk.total, walk.page_size, walk.capped),
        )
    
    def _search_regions(self, request: SearchRequest) -> SearchResult:
        merge = self.aggregator.aggregate(request)
        
        items = merge.items
        if request.strict:
            items = QueryMatcher(request.query).filter(items)
        capped = merge.capped or len(items) > request.limit
        items = ResultShaper.shape(items, request.sort, request.limit)
        
        first = merge.first_walk
        if first is None:
            self.logger.error("all_regions_failed", regions=list(request.regions))
        
        return SearchResult(
            items=items,
            query=QueryEcho(
                text=request.query,
                sort=request.sort.value,
                region=",".join(request.regions),
                regions=list(request.regions),
                category=(first.category if first else None) or request.category,
                strict=request.strict,
                url=first.url if first else None,
            ),
            pagination=self._pagination(
                request,
                merge.total,
                first.page_size if first else self.config.DEFAULT_PAGE_SIZE,
                capped,
            ),
        )
    
    def search_raw(self, request: SearchRequest) -> Dict[str, Any]:
        """
        Fetch the unprocessed pageProps of the first result page.
        
        Only the first requested region is used.
        
        Args:
            request: Validated request
            
        Returns:
            Raw pageProps object
            
        Raises:
            ValidationError: If the category or a region is unknown
            TransportError: If the page could not be fetched
            ExtractionError: If the page had no embedded data
        """
        self.validate(request)
        return self.paginator.fetch_first_page(
            request.query,
            request.timeout,
            sort=request.sort,
            region=request.regions[0] if request.regions else None,
            category=request.category,
        )


def search(query: str, **options: Any) -> SearchResult:
    """
    Search OLX with keyword options.
    
    Args:
        query: Search query
        **options: SearchRequest fields (limit, timeout, sort, concurrency,
            regions, category, strict)
        
    Returns:
        Search result
    """
    return OlxSearch().search(SearchRequest.from_options(query, **options))


def search_raw(query: str, **options: Any) -> Dict[str, Any]:
    """
    Fetch the raw pageProps for a query.
    
    Args:
        query: Search query
        **options: SearchRequest fields (timeout, sort, regions, category)
        
    Returns:
        Raw pageProps object
    """
    return OlxSearch().search_raw(SearchRequest.from_options(query, **options))
