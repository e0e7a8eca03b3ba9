"""
Parallel multi-region search with round-robin merging.
"""

from functools import partial
from typing import List, Optional, Sequence

import structlog
from pydantic import BaseModel, Field

from olx_search.core.models.item import Item
from olx_search.core.models.search_request import SearchRequest
from olx_search.shared.logging.log_setup import get_logger

from .olx_paginator import OlxPaginator, PageWalk
from .olx_tasks import run_all_settled

# strict filtering discards items, so each region over-fetches
STRICT_OVERFETCH_FACTOR = 3


class RegionMerge(BaseModel):
    """
    Merged outcome of a multi-region search.
    
    Attributes:
        items: Deduplicated items in round-robin order
        total: Upstream totals summed over successful regions
        first_walk: Walk of the first successful region in request order
        failed_regions: Regions whose search raised
        capped: Some region stopped before exhausting its results
    """
    
    items: List[Item] = Field(default_factory=list)
    total: int = 0
    first_walk: Optional[PageWalk] = None
    failed_regions: List[str] = Field(default_factory=list)
    capped: bool = False


class OlxRegionAggregator:
    """Runs one paginator per region concurrently and merges the results."""
    
    def __init__(
        self,
        paginator: OlxPaginator,
        logger: Optional[structlog.BoundLogger] = None,
    ):
        """
        Initialize aggregator.
        
        Args:
            paginator: Paginator shared by the region tasks (it holds no walk state)
            logger: Logger to report through
        """
        self.paginator = paginator
        self.logger = logger if logger is not None else get_logger(__name__)
    
    @staticmethod
    def merge_round_robin(streams: Sequence[Sequence[Item]]) -> List[Item]:
        """
        Interleave result lists by rank and drop repeated ids.
        
        Rank 0 of every stream comes first (in stream order), then rank 1,
        and so on; exhausted streams simply drop out. Items without an id
        are never treated as duplicates.
        
        Args:
            streams: Per-region item lists in request order
            
        Returns:
            Merged items
        """
        seen_ids = set()
        merged = []
        longest = max((len(stream) for stream in streams), default=0)
        for rank in range(longest):
            for stream in streams:
                if rank >= len(stream):
                    continue
                item = stream[rank]
                if item.id:
                    if item.id in seen_ids:
                        continue
                    seen_ids.add(item.id)
                merged.append(item)
        return merged
    
    def aggregate(self, request: SearchRequest) -> RegionMerge:
        """
        Search every requested region and merge the results.
        
        A region that fails contributes nothing; the others are unaffected.
        
        Args:
            request: Validated request with two or more regions
            
        Returns:
            Merged items and region totals
        """
        region_limit = request.limit * STRICT_OVERFETCH_FACTOR if request.strict else request.limit
        tasks = [
            partial(
                self.paginator.paginate,
                request.query,
                region_limit,
                request.timeout,
                sort=request.sort,
                region=region,
                category=request.category,
            )
            for region in request.regions
        ]
        
        self.logger.info("region_fanout_started", regions=list(request.regions), region_limit=region_limit)
        outcomes = run_all_settled(tasks, max_workers=len(tasks))
        
        walks: List[PageWalk] = []
        failed = []
        for region, outcome in zip(request.regions, outcomes):
            if outcome.ok:
                walks.append(outcome.value)
            else:
                failed.append(region)
                self.logger.warning(
                    "region_search_failed",
                    region=region,
                    error=str(outcome.error),
                    error_type=type(outcome.error).__name__,
                )
        
        merged = self.merge_round_robin([walk.items for walk in walks])
        self.logger.info(
            "regions_merged",
            succeeded=len(walks),
            failed=len(failed),
            merged=len(merged),
        )
        
        return RegionMerge(
            items=merged,
            total=sum(walk.total for walk in walks),
            first_walk=walks[0] if walks else None,
            failed_regions=failed,
            capped=any(walk.capped for walk in walks),
        )
