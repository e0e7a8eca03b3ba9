"""
Conversion of OLX page records into Item models.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel

from olx_search.core.exceptions.scraping_errors import EnrichmentSkip
from olx_search.core.models.item import ImageRef, Item, ItemProperty, LocationDetails
from olx_search.core.models.raw_listing import RawDetail, RawListing, RawProperty
from olx_search.shared.logging.log_setup import get_logger

from .olx_extractor import OlxExtractor

logger = get_logger(__name__)

# pseudo-attribute carrying the category, never shown as a property
CATEGORY_PROPERTY = "category"


class DetailEnrichment(BaseModel):
    """Fields recovered from a listing detail page."""
    
    description: Optional[str] = None
    images: Optional[List[ImageRef]] = None
    attributes: Optional[List[ItemProperty]] = None
    seller_name: Optional[str] = None
    
    def apply_to(self, item: Item) -> Item:
        """
        Merge the recovered fields into an item in place.
        
        Only fields that were actually found are written; images replace the
        listing images only when the detail page had some.
        
        Args:
            item: Item to enrich
            
        Returns:
            The same item
        """
        if self.description is not None:
            item.description = self.description
        if self.images:
            item.images = self.images
        if self.attributes:
            item.attributes = self.attributes
        if self.seller_name:
            item.seller_name = self.seller_name
        return item


class OlxParser:
    """Parser for OLX search records and detail pages."""
    
    @staticmethod
    def parse_price(price_text: Any) -> Optional[Decimal]:
        """
        Parse a Brazilian formatted price.
        
        Args:
            price_text: Price string (e.g. "R$ 3.899", "R$ 1.200,50")
            
        Returns:
            Price as Decimal, or None if not parseable
        """
        if not price_text or not isinstance(price_text, str):
            return None
        
        # "." groups thousands, "," marks decimals
        cleaned = re.sub(r"[^\d.,]", "", price_text).replace(".", "").replace(",", ".", 1)
        match = re.match(r"\d*\.?\d+", cleaned)
        if not match:
            return None
        try:
            return Decimal(match.group(0))
        except InvalidOperation:
            return None
    
    @staticmethod
    def calculate_discount(price: Optional[Decimal], old_price: Optional[Decimal]) -> Optional[int]:
        """
        Whole-number discount percentage, rounded half up.
        
        Args:
            price: Current price
            old_price: Price before the reduction
            
        Returns:
            Discount percentage, or None unless old_price > price > 0
        """
        if not price or not old_price or old_price <= price:
            return None
        percent = (old_price - price) / old_price * 100
        return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    
    @staticmethod
    def _convert_properties(raw_properties: Optional[List[RawProperty]]) -> List[ItemProperty]:
        """Drop the category pseudo-attribute and prefer display labels."""
        properties = []
        for prop in raw_properties or []:
            if prop.name == CATEGORY_PROPERTY:
                continue
            properties.append(
                ItemProperty(
                    name=prop.label or prop.name or "",
                    value=str(prop.value) if prop.value is not None else None,
                )
            )
        return properties
    
    def parse_ad(self, ad: Any) -> Optional[Item]:
        """
        Normalize one raw `pageProps.ads` entry.
        
        Args:
            ad: Raw record
            
        Returns:
            Item, or None when the record is unusable or has no title
        """
        if not isinstance(ad, dict):
            return None
        
        # malformed optional fields decode to None, only the title decides
        raw = RawListing.model_validate(ad)
        
        title = raw.subject or raw.title
        if not title:
            return None
        
        price = self.parse_price(raw.price_value or raw.price)
        old_price = self.parse_price(raw.old_price)
        
        images = [
            ImageRef(url=img.original or img.original_webp, url_alt=img.original_webp)
            for img in raw.images or []
            if img.original or img.original_webp
        ]
        properties = self._convert_properties(raw.properties)
        
        location_details = None
        if raw.location_details:
            location_details = LocationDetails(
                municipality=raw.location_details.municipality or None,
                uf=raw.location_details.uf or None,
                neighbourhood=raw.location_details.neighbourhood or None,
            )
        
        category_id = raw.listing_category_id or raw.search_category_level_one
        posted_at = raw.date or raw.orig_list_time
        
        return Item(
            id=str(raw.list_id) if raw.list_id else None,
            title=title,
            price=price,
            old_price=old_price,
            discount_percent=self.calculate_discount(price, old_price),
            location=raw.location or None,
            location_details=location_details,
            posted_at=posted_at or None,
            thumbnail=images[0].url if images else None,
            images=images or None,
            image_count=raw.image_count or len(images),
            video_count=raw.video_count or 0,
            permalink=raw.url or raw.friendly_url or None,
            category=raw.category_name or raw.category,
            category_id=str(category_id) if category_id else None,
            properties=properties or None,
            is_professional_seller=bool(raw.professional_ad),
            has_payment_integration=bool(raw.olx_pay and raw.olx_pay.enabled),
            has_delivery_integration=bool(raw.olx_delivery and raw.olx_delivery.enabled),
            is_featured=bool(raw.is_featured),
            has_price_reduction=bool(raw.price_reduction_badge),
        )
    
    def parse_ads(self, ads: List[Any]) -> List[Item]:
        """
        Normalize a page of raw records, skipping unusable ones.
        
        Args:
            ads: Raw `pageProps.ads` list
            
        Returns:
            Items in upstream order
        """
        items = []
        for index, ad in enumerate(ads):
            item = self.parse_ad(ad)
            if item:
                items.append(item)
            else:
                logger.debug("listing_skipped", index=index)
        return items
    
    @staticmethod
    def clean_description(description: str) -> str:
        """
        Turn an HTML description into plain text.
        
        Args:
            description: Description possibly containing <br> and other tags
            
        Returns:
            Text with line breaks as newlines, tags removed, trimmed
        """
        with_newlines = re.sub(r"<br\s*/?>", "\n", description, flags=re.IGNORECASE)
        return BeautifulSoup(with_newlines, "html.parser").get_text().strip()
    
    @staticmethod
    def _image_url(image: Any) -> Optional[str]:
        """URL of an ld+json image entry (ImageObject or plain string)."""
        if isinstance(image, str):
            return image or None
        if isinstance(image, dict):
            return image.get("contentUrl") or image.get("url") or None
        return None
    
    def parse_detail(self, html: str, url: str) -> DetailEnrichment:
        """
        Extract enrichment fields from a detail page.
        
        Args:
            html: Detail page HTML
            url: Detail page URL, for error reporting
            
        Returns:
            Recovered fields
            
        Raises:
            EnrichmentSkip: If the page carries no usable embedded data
        """
        ld_json = OlxExtractor.extract_ld_json(html) or {}
        ad_data = OlxExtractor.extract_enclosing_object(html) or {}
        if not ld_json and not ad_data:
            raise EnrichmentSkip(url, "no embedded detail data")
        
        image = ld_json.get("image")
        if isinstance(image, (dict, str)):
            image = [image]
        payload: Dict[str, Any] = {
            "description": ld_json.get("description") if isinstance(ld_json.get("description"), str) else None,
            "image": image if isinstance(image, list) else None,
            "adProperties": ad_data.get("adProperties"),
            "adDetail": ad_data.get("adDetail"),
        }
        raw = RawDetail.model_validate(payload)
        
        images = []
        for entry in raw.image or []:
            image_url = self._image_url(entry)
            if image_url:
                images.append(ImageRef(url=image_url))
        
        return DetailEnrichment(
            description=self.clean_description(raw.description) if raw.description else None,
            images=images or None,
            attributes=self._convert_properties(raw.ad_properties) or None,
            seller_name=raw.ad_detail.seller_name if raw.ad_detail else None,
        )
