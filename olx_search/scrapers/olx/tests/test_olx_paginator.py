"""
Unit tests for URL building and OlxPaginator.
"""

import pytest
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

from olx_search.core.exceptions.scraping_errors import ExtractionError, TransportError
from olx_search.core.models.search_request import SortOrder
from olx_search.scrapers.olx.olx_paginator import OlxPaginator, build_search_url
from olx_search.shared.config.olx_settings import OlxSearchConfig

from conftest import make_ad, make_ads, search_page


class PagedFetcher:
    """Serves search pages by their `o` parameter."""
    
    def __init__(self, pages):
        self.pages = pages
        self.requested = []
    
    def fetch(self, url, timeout):
        self.requested.append(url)
        page = int(parse_qs(urlparse(url).query).get("o", ["1"])[0])
        result = self.pages[page]
        if isinstance(result, Exception):
            raise result
        return result


class TestBuildSearchUrl:
    """Test search URL construction."""
    
    def test_nationwide_first_page(self):
        """Test the default scope and parameters."""
        url = build_search_url("iphone 13", "www.olx.com.br")
        assert url == "https://www.olx.com.br/brasil?q=iphone+13"
    
    def test_region_and_category_path(self):
        """Test path segments for category and region."""
        url = build_search_url("fusca", "www.olx.com.br", region="SP", category="autos-e-pecas/carros-vans-e-utilitarios")
        assert url.startswith("https://www.olx.com.br/autos-e-pecas/carros-vans-e-utilitarios/estado-sp?")
    
    def test_page_and_sort_parameters(self):
        """Test page offset and sort parameters."""
        query = parse_qs(urlparse(build_search_url("tv", "www.olx.com.br", page=3, sort=SortOrder.PRICE_DESC)).query)
        assert query == {"q": ["tv"], "o": ["3"], "sp": ["2"]}
        
        query = parse_qs(urlparse(build_search_url("tv", "www.olx.com.br", sort=SortOrder.DATE)).query)
        assert query == {"q": ["tv"], "sf": ["1"]}
        
        query = parse_qs(urlparse(build_search_url("tv", "www.olx.com.br", sort=SortOrder.PRICE_ASC)).query)
        assert query == {"q": ["tv"], "sp": ["1"]}


class TestOlxPaginator:
    """Test OlxPaginator functionality."""
    
    def make_paginator(self, pages, config):
        fetcher = PagedFetcher(pages)
        return OlxPaginator(fetcher=fetcher, config=config, logger=Mock()), fetcher
    
    def test_stops_when_upstream_exhausted(self, olx_config):
        """Test walking two pages until the reported total is covered."""
        paginator, fetcher = self.make_paginator(
            {
                1: search_page(make_ads(1, 50), total=60, page_size=50),
                2: search_page(make_ads(51, 10), total=60, page_size=50),
            },
            olx_config,
        )
        
        walk = paginator.paginate("iphone", limit=100, timeout=5)
        
        assert len(walk.items) == 60
        assert len(fetcher.requested) == 2
        assert walk.pages_fetched == 2
        assert walk.stop_reason == "exhausted"
        assert walk.capped is False
        assert walk.total == 60
    
    def test_stops_at_limit_without_truncating(self, olx_config):
        """Test that one page satisfying the limit ends the walk."""
        paginator, fetcher = self.make_paginator(
            {1: search_page(make_ads(1, 50), total=500)},
            olx_config,
        )
        
        walk = paginator.paginate("iphone", limit=20, timeout=5)
        
        assert len(walk.items) == 50
        assert len(fetcher.requested) == 1
        assert walk.stop_reason == "limit"
        assert walk.capped is True
    
    def test_deduplicates_across_pages(self, olx_config):
        """Test that repeated ids are kept once in first-seen order."""
        paginator, _ = self.make_paginator(
            {
                1: search_page(make_ads(1, 3), total=6, page_size=3),
                2: search_page([make_ad(3, "Repeat"), make_ad(4, "Four"), make_ad(5, "Five")], total=6, page_size=3),
            },
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=10, timeout=5)
        
        assert [item.id for item in walk.items] == ["1", "2", "3", "4", "5"]
        assert walk.items[2].title == "Item 3"
    
    def test_page_without_new_items_ends_walk(self, olx_config):
        """Test that a page of duplicates stops pagination."""
        paginator, fetcher = self.make_paginator(
            {
                1: search_page(make_ads(1, 3), total=100, page_size=3),
                2: search_page(make_ads(1, 3), total=100, page_size=3),
            },
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=10, timeout=5)
        
        assert len(walk.items) == 3
        assert len(fetcher.requested) == 2
        assert walk.stop_reason == "empty_page"
        assert walk.capped is False
    
    def test_page_budget(self):
        """Test that the walk stops after MAX_PAGES pages."""
        config = OlxSearchConfig(USE_BROWSER_FALLBACK=False, MAX_PAGES=2)
        paginator, fetcher = self.make_paginator(
            {
                1: search_page(make_ads(1, 50), total=1000),
                2: search_page(make_ads(51, 50), total=1000),
                3: search_page(make_ads(101, 50), total=1000),
            },
            config,
        )
        
        walk = paginator.paginate("tv", limit=500, timeout=5)
        
        assert len(walk.items) == 100
        assert len(fetcher.requested) == 2
        assert walk.stop_reason == "max_pages"
        assert walk.capped is True
    
    def test_later_page_failure_keeps_partial_results(self, olx_config):
        """Test that a failing second page ends the walk without raising."""
        paginator, _ = self.make_paginator(
            {
                1: search_page(make_ads(1, 50), total=200),
                2: TransportError("https://www.olx.com.br/brasil?q=tv&o=2", "timed out"),
            },
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=100, timeout=5)
        
        assert len(walk.items) == 50
        assert walk.stop_reason == "page_failed"
        assert walk.capped is True
        paginator.logger.warning.assert_called_once()
    
    def test_later_page_without_data(self, olx_config):
        """Test that a second page without embedded data ends the walk."""
        paginator, _ = self.make_paginator(
            {
                1: search_page(make_ads(1, 50), total=200),
                2: "<html>captcha</html>",
            },
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=100, timeout=5)
        
        assert len(walk.items) == 50
        assert walk.stop_reason == "page_failed"
    
    def test_first_page_without_data(self, olx_config):
        """Test that a first page without embedded data is fatal."""
        paginator, _ = self.make_paginator({1: "<html>blocked</html>"}, olx_config)
        
        with pytest.raises(ExtractionError):
            paginator.paginate("tv", limit=10, timeout=5)
    
    def test_first_page_without_ads_list(self, olx_config):
        """Test that pageProps lacking an ads list is fatal."""
        paginator, _ = self.make_paginator({1: search_page(None)}, olx_config)
        
        with pytest.raises(ExtractionError):
            paginator.paginate("tv", limit=10, timeout=5)
    
    def test_first_page_transport_failure(self, olx_config):
        """Test that a transport failure on the first page propagates."""
        paginator, _ = self.make_paginator(
            {1: TransportError("https://www.olx.com.br/brasil?q=tv", "refused")},
            olx_config,
        )
        
        with pytest.raises(TransportError):
            paginator.paginate("tv", limit=10, timeout=5)
    
    def test_missing_page_size_uses_default(self, olx_config):
        """Test the page size fallback and the total fallback."""
        paginator, _ = self.make_paginator(
            {1: search_page(make_ads(1, 5), page_size=0)},
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=5, timeout=5)
        
        assert walk.page_size == 50
        assert walk.total == 5
    
    def test_selected_category(self, olx_config):
        """Test that the upstream category code is reported."""
        paginator, _ = self.make_paginator(
            {1: search_page(make_ads(1, 2), total=2, selectedCategoryCode=3000)},
            olx_config,
        )
        
        walk = paginator.paginate("tv", limit=5, timeout=5)
        
        assert walk.category == "3000"
    
    def test_fetch_first_page(self, olx_config):
        """Test access to the raw first page data."""
        paginator, _ = self.make_paginator(
            {1: search_page(make_ads(1, 2), total=2, filters={"price": []})},
            olx_config,
        )
        
        page_props = paginator.fetch_first_page("tv", timeout=5)
        
        assert page_props["totalOfAds"] == 2
        assert page_props["filters"] == {"price": []}
        assert len(page_props["ads"]) == 2
