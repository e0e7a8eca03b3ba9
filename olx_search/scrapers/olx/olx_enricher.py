"""
Detail page enrichment in bounded parallel batches.
"""

from functools import partial
from typing import List, Optional, Sequence

import structlog

from olx_search.core.exceptions.scraping_errors import EnrichmentSkip
from olx_search.core.models.item import Item
from olx_search.shared.logging.log_setup import get_logger

from .olx_fetcher import OlxPageFetcher
from .olx_parser import DetailEnrichment, OlxParser
from .olx_tasks import run_all_settled


class OlxDetailEnricher:
    """
    Fetches listing detail pages and merges their data into items.
    
    Items are processed in batches of `concurrency`: fetches within a
    batch run in parallel, batches run one after another. A failed detail
    page leaves its item untouched.
    """
    
    def __init__(
        self,
        fetcher: OlxPageFetcher,
        parser: Optional[OlxParser] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ):
        """
        Initialize enricher.
        
        Args:
            fetcher: Page fetcher for detail pages
            parser: Detail page parser
            logger: Logger to report through
        """
        self.fetcher = fetcher
        self.parser = parser or OlxParser()
        self.logger = logger if logger is not None else get_logger(__name__)
    
    def fetch_detail(self, item: Item, timeout: float) -> DetailEnrichment:
        """
        Fetch and parse one detail page.
        
        Args:
            item: Item with a permalink
            timeout: Per-request timeout in seconds
            
        Returns:
            Recovered detail fields
            
        Raises:
            TransportError: If the page could not be fetched
            EnrichmentSkip: If the page carries no usable data
        """
        html = self.fetcher.fetch(item.permalink, timeout)
        return self.parser.parse_detail(html, item.permalink)
    
    def enrich(self, items: Sequence[Item], concurrency: int, timeout: float) -> List[Item]:
        """
        Enrich items that have a permalink, in place.
        
        Args:
            items: Final, already truncated items
            concurrency: Batch size (at least 1)
            timeout: Per-request timeout in seconds
            
        Returns:
            The items that were enriched
        """
        batch_size = max(1, concurrency)
        queue = [item for item in items if item.permalink]
        enriched = []
        
        for start in range(0, len(queue), batch_size):
            batch = queue[start:start + batch_size]
            outcomes = run_all_settled(
                [partial(self.fetch_detail, item, timeout) for item in batch],
                max_workers=len(batch),
            )
            for item, outcome in zip(batch, outcomes):
                if outcome.ok:
                    outcome.value.apply_to(item)
                    enriched.append(item)
                    continue
                skip = outcome.error
                if not isinstance(skip, EnrichmentSkip):
                    skip = EnrichmentSkip(item.permalink, str(outcome.error))
                self.logger.debug("detail_enrichment_skipped", item_id=item.id, reason=str(skip))
            
            self.logger.info(
                "detail_batch_completed",
                batch=start // batch_size + 1,
                size=len(batch),
                enriched=len(enriched),
            )
        
        return enriched
