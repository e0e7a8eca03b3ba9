"""
Shared fixtures and page builders for OLX scraper tests.
"""

import json
from typing import Any, Dict, List, Optional

import pytest

from olx_search.shared.config.olx_settings import OlxSearchConfig


def make_ad(list_id: Optional[int], title: str = "Item", price: Optional[str] = "R$ 100", **extra: Any) -> Dict[str, Any]:
    """Build a raw ad record as found in pageProps.ads."""
    ad = {
        "listId": list_id,
        "subject": title,
        "priceValue": price,
        "url": f"https://sp.olx.com.br/anuncio/{list_id}" if list_id else None,
    }
    ad.update(extra)
    return ad


def make_ads(start: int, count: int, prefix: str = "Item") -> List[Dict[str, Any]]:
    """Build `count` ads with consecutive ids."""
    return [make_ad(i, f"{prefix} {i}") for i in range(start, start + count)]


def search_page(ads: List[Dict[str, Any]], total: Optional[int] = None, page_size: int = 50, **extra: Any) -> str:
    """Wrap ads in a search page with a __NEXT_DATA__ block."""
    page_props = {"ads": ads, "pageSize": page_size}
    if total is not None:
        page_props["totalOfAds"] = total
    page_props.update(extra)
    payload = json.dumps({"props": {"pageProps": page_props}, "page": "/search"})
    return (
        "<html><head><title>OLX</title></head><body>"
        f'<script id="__NEXT_DATA__" type="application/json">{payload}</script>'
        "</body></html>"
    )


def detail_page(
    description: Optional[str] = None,
    images: Optional[List[Any]] = None,
    ad_properties: Optional[List[Dict[str, Any]]] = None,
    seller_name: Optional[str] = None,
) -> str:
    """Build a detail page with an ld+json block and an adProperties object."""
    ld_json = {"@type": "Product", "name": "Anuncio"}
    if description is not None:
        ld_json["description"] = description
    if images is not None:
        ld_json["image"] = images
    parts = [
        "<html><head>",
        f'<script type="application/ld+json">{json.dumps(ld_json)}</script>',
        "</head><body>",
    ]
    if ad_properties is not None or seller_name is not None:
        ad_data = {
            "adId": 1,
            "adProperties": ad_properties or [],
            "adDetail": {"sellerName": seller_name},
        }
        parts.append(f"<script>self.__data = [1, {json.dumps(ad_data)}];</script>")
    parts.append("</body></html>")
    return "".join(parts)


@pytest.fixture
def olx_config():
    """Provide a configuration with the browser fallback disabled."""
    return OlxSearchConfig(USE_BROWSER_FALLBACK=False, MAX_PAGES=20, DEFAULT_PAGE_SIZE=50)
