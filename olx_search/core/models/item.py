"""
Pydantic model for a normalized OLX listing.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class ImageRef(BaseModel):
    """Listing image with an optional alternate (webp) rendition."""
    
    url: str
    url_alt: Optional[str] = None


class ItemProperty(BaseModel):
    """Named attribute attached to a listing."""
    
    name: str
    value: Optional[str] = None


class LocationDetails(BaseModel):
    """Structured location of a listing."""
    
    municipality: Optional[str] = None
    uf: Optional[str] = None
    neighbourhood: Optional[str] = None


class Item(BaseModel):
    """
    Model representing one OLX listing.
    
    Attributes:
        id: Upstream listing id, used as the deduplication key
        title: Listing title
        price: Asking price in BRL
        old_price: Price before a reduction, if any
        discount_percent: Whole-number discount derived from old_price and price
        posted_at: Publication time as epoch seconds
        permalink: Detail page URL, drives detail enrichment
        properties: Structured attributes from the search page
        description: Detail page description (enrichment)
        attributes: Detail page attributes (enrichment)
        seller_name: Seller display name (enrichment)
    """
    
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    price: Optional[Decimal] = None
    currency: str = "BRL"
    old_price: Optional[Decimal] = None
    discount_percent: Optional[int] = None
    location: Optional[str] = None
    location_details: Optional[LocationDetails] = None
    posted_at: Optional[int] = None
    thumbnail: Optional[str] = None
    images: Optional[List[ImageRef]] = None
    image_count: int = 0
    video_count: int = 0
    permalink: Optional[str] = None
    category: Optional[str] = None
    category_id: Optional[str] = None
    properties: Optional[List[ItemProperty]] = None
    is_professional_seller: bool = False
    has_payment_integration: bool = False
    has_delivery_integration: bool = False
    is_featured: bool = False
    has_price_reduction: bool = False
    
    # filled in by detail enrichment
    description: Optional[str] = None
    attributes: Optional[List[ItemProperty]] = None
    seller_name: Optional[str] = None
    
    @computed_field
    @property
    def date(self) -> Optional[str]:
        """ISO-8601 rendering of posted_at."""
        if self.posted_at is None:
            return None
        moment = datetime.fromtimestamp(self.posted_at, tz=timezone.utc)
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
