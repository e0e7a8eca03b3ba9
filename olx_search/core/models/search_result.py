"""
Result object returned by the search pipeline.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .item import Item


class QueryEcho(BaseModel):
    """Normalized request as it was executed, plus the resolved URL."""
    
    text: str
    sort: Optional[str] = None
    region: Optional[str] = None
    regions: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    strict: bool = False
    url: Optional[str] = None


class Pagination(BaseModel):
    """
    Pagination metadata.
    
    Attributes:
        total: Upstream total (summed across regions)
        page_size: Items per upstream page
        limit: Requested limit
        max_pages: Page budget per region
        results_limit: Most items reachable within the page budget
        capped: Stopped before exhausting upstream results
    """
    
    total: int = 0
    page: int = 1
    page_size: int
    limit: int
    max_pages: int
    results_limit: int
    capped: bool = False


class SearchResult(BaseModel):
    """Items plus query echo and pagination metadata."""
    
    items: List[Item] = Field(default_factory=list)
    query: QueryEcho
    pagination: Pagination
