"""
Loosely typed views of the records embedded in OLX pages.

Upstream payloads are heterogeneous, so every field is optional and
unknown keys are ignored. Records are decoded once here and converted to
`Item` by the parser.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class RawModel(BaseModel):
    """Base for upstream records: tolerate unknown keys and malformed values."""
    
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    
    @field_validator("*", mode="wrap")
    @classmethod
    def drop_malformed(cls, value: Any, handler: Any) -> Any:
        """A value of unexpected shape becomes None instead of failing the record."""
        try:
            return handler(value)
        except ValidationError:
            return None


class RawImage(RawModel):
    original: Optional[str] = None
    original_webp: Optional[str] = Field(None, alias="originalWebp")


class RawProperty(RawModel):
    name: Optional[str] = None
    label: Optional[str] = None
    value: Optional[Any] = None


class RawLocationDetails(RawModel):
    municipality: Optional[str] = None
    uf: Optional[str] = None
    neighbourhood: Optional[str] = None


class RawIntegration(RawModel):
    enabled: Optional[bool] = None


class RawListing(RawModel):
    """One entry of `pageProps.ads` on a search page."""
    
    list_id: Optional[Union[int, str]] = Field(None, alias="listId")
    subject: Optional[str] = None
    title: Optional[str] = None
    price_value: Optional[Any] = Field(None, alias="priceValue")
    price: Optional[Any] = None
    old_price: Optional[Any] = Field(None, alias="oldPrice")
    images: Optional[List[RawImage]] = None
    properties: Optional[List[RawProperty]] = None
    location: Optional[str] = None
    location_details: Optional[RawLocationDetails] = Field(None, alias="locationDetails")
    url: Optional[str] = None
    friendly_url: Optional[str] = Field(None, alias="friendlyUrl")
    date: Optional[int] = None
    orig_list_time: Optional[int] = Field(None, alias="origListTime")
    professional_ad: Optional[Any] = Field(None, alias="professionalAd")
    olx_pay: Optional[RawIntegration] = Field(None, alias="olxPay")
    olx_delivery: Optional[RawIntegration] = Field(None, alias="olxDelivery")
    category_name: Optional[str] = Field(None, alias="categoryName")
    category: Optional[str] = None
    listing_category_id: Optional[Union[int, str]] = Field(None, alias="listingCategoryId")
    search_category_level_one: Optional[Union[int, str]] = Field(None, alias="searchCategoryLevelOne")
    is_featured: Optional[Any] = Field(None, alias="isFeatured")
    price_reduction_badge: Optional[Any] = Field(None, alias="priceReductionBadge")
    image_count: Optional[int] = Field(None, alias="imageCount")
    video_count: Optional[int] = Field(None, alias="videoCount")
    
    @field_validator("images", mode="before")
    @classmethod
    def image_entries(cls, v: Any) -> Any:
        """Accepts bare URL strings as images and drops entries of other shapes."""
        if not isinstance(v, list):
            return v
        return [
            {"original": entry} if isinstance(entry, str) else entry
            for entry in v
            if isinstance(entry, (str, dict))
        ]
    
    @field_validator("properties", mode="before")
    @classmethod
    def property_entries(cls, v: Any) -> Any:
        return [entry for entry in v if isinstance(entry, dict)] if isinstance(v, list) else v


class RawAdDetail(RawModel):
    seller_name: Optional[str] = Field(None, alias="sellerName")


class RawDetail(RawModel):
    """
    Data recovered from a listing detail page.
    
    `description` and `image` come from the ld+json block, `ad_properties`
    and `ad_detail` from the object that carries the "adProperties" key.
    """
    
    description: Optional[str] = None
    image: Optional[List[Any]] = None
    ad_properties: Optional[List[RawProperty]] = Field(None, alias="adProperties")
    ad_detail: Optional[RawAdDetail] = Field(None, alias="adDetail")
    
    @field_validator("ad_properties", mode="before")
    @classmethod
    def property_entries(cls, v: Any) -> Any:
        return [entry for entry in v if isinstance(entry, dict)] if isinstance(v, list) else v
