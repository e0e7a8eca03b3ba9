"""
Validated search configuration handed to the search pipeline.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from olx_search.core.exceptions.base import InvalidOptionError
from olx_search.shared.config.olx_settings import get_olx_config


class SortOrder(str, Enum):
    """Result ordering requested by the caller."""
    
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DATE = "date"
    RELEVANCE = "relevance"


class SearchRequest(BaseModel):
    """
    Model representing one search invocation.
    
    Attributes:
        query: Free text search query
        limit: Maximum number of items in the result
        timeout: Per-request timeout in seconds
        sort: Requested ordering
        concurrency: Detail pages fetched in parallel per batch
        regions: Region codes (UF) in request order, without duplicates
        category: Category slug, checked against the category registry
        strict: Keep only items containing every significant query term
    """
    
    model_config = ConfigDict(frozen=True)
    
    query: str = Field(..., min_length=1)
    limit: int = Field(default_factory=lambda: get_olx_config().DEFAULT_LIMIT, ge=1)
    timeout: float = Field(default_factory=lambda: get_olx_config().REQUEST_TIMEOUT, gt=0)
    sort: SortOrder = SortOrder.RELEVANCE
    concurrency: int = Field(default_factory=lambda: get_olx_config().DETAIL_CONCURRENCY, ge=1)
    regions: Tuple[str, ...] = ()
    category: Optional[str] = None
    strict: bool = False
    
    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Strips surrounding whitespace and rejects blank queries."""
        v = v.strip()
        if not v:
            raise ValueError("Search query cannot be blank")
        return v
    
    @field_validator("sort", mode="before")
    @classmethod
    def default_sort(cls, v: Any) -> Any:
        """Treats a missing sort order as relevance."""
        return SortOrder.RELEVANCE if v is None else v
    
    @field_validator("regions", mode="before")
    @classmethod
    def split_regions(cls, v: Any) -> Tuple[str, ...]:
        """
        Normalizes region input.
        
        Args:
            v: Comma separated string ("sp,rj") or an iterable of codes
            
        Returns:
            Lowercased codes in first-seen order
        """
        if v is None:
            return ()
        parts = v.split(",") if isinstance(v, str) else list(v)
        regions = []
        for part in parts:
            code = str(part).strip().lower()
            if code and code not in regions:
                regions.append(code)
        return tuple(regions)
    
    @field_validator("category", mode="before")
    @classmethod
    def blank_category(cls, v: Any) -> Any:
        """Treats an empty category as no category."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v
    
    @property
    def region(self) -> Optional[str]:
        """Single region code when exactly one was requested."""
        return self.regions[0] if len(self.regions) == 1 else None
    
    @property
    def is_multi_region(self) -> bool:
        return len(self.regions) > 1
    
    @classmethod
    def from_options(cls, query: str, **options: Any) -> "SearchRequest":
        """
        Build a request from loose keyword options.
        
        Options whose value is None fall back to the configured defaults.
        
        Args:
            query: Search query
            **options: Any SearchRequest field
            
        Returns:
            Validated request
            
        Raises:
            InvalidOptionError: If an option fails validation
        """
        values = {k: v for k, v in options.items() if v is not None}
        try:
            return cls(query=query, **values)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error.get("loc", ())) or "request"
            raise InvalidOptionError(field=field, value=error.get("input"), message=error["msg"])
