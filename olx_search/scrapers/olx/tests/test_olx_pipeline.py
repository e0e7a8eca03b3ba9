"""
Unit tests for the OlxSearch pipeline.
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock, patch
from urllib.parse import parse_qs, urlparse

from olx_search.core.exceptions.base import UnknownCategoryError, UnknownRegionError
from olx_search.core.exceptions.scraping_errors import ExtractionError, TransportError
from olx_search.core.models.search_request import SearchRequest, SortOrder
from olx_search.scrapers.olx.olx_pipeline import OlxSearch, search, search_raw

from conftest import detail_page, make_ad, search_page


class RoutingFetcher:
    """Serves search pages by (path, page) and detail pages by URL."""
    
    def __init__(self, search_pages, details=None):
        self.search_pages = search_pages
        self.details = details or {}
        self.requested = []
    
    def fetch(self, url, timeout):
        self.requested.append(url)
        if "/anuncio/" in url:
            return self.details.get(url, "<html></html>")
        parsed = urlparse(url)
        page = int(parse_qs(parsed.query).get("o", ["1"])[0])
        result = self.search_pages.get((parsed.path, page))
        if result is None:
            raise TransportError(url, "404 Not Found", 404)
        if isinstance(result, Exception):
            raise result
        return result


class TestOlxSearch:
    """Test OlxSearch functionality."""
    
    def make_search(self, config, search_pages, details=None):
        fetcher = RoutingFetcher(search_pages, details)
        return OlxSearch(config=config, fetcher=fetcher, logger=Mock()), fetcher
    
    def test_single_region_sorted_and_truncated(self, olx_config):
        """Test sorting, truncation, query echo and pagination."""
        ads = [
            make_ad(1, "Notebook Dell", price="R$ 2.500"),
            make_ad(2, "Notebook Acer", price=None),
            make_ad(3, "Notebook Lenovo", price="R$ 1.800"),
        ]
        pipeline, _ = self.make_search(
            olx_config,
            {("/estado-sp", 1): search_page(ads, total=3, page_size=50)},
        )
        request = SearchRequest(query="notebook", regions="sp", sort="price_asc", limit=2)
        
        result = pipeline.search(request)
        
        assert [item.id for item in result.items] == ["3", "1"]
        assert result.items[0].price == Decimal("1800")
        assert result.query.text == "notebook"
        assert result.query.sort == "price_asc"
        assert result.query.region == "sp"
        assert result.query.regions == ["sp"]
        assert result.query.url == "https://www.olx.com.br/estado-sp?q=notebook&sp=1"
        assert result.pagination.total == 3
        assert result.pagination.page == 1
        assert result.pagination.page_size == 50
        assert result.pagination.limit == 2
        assert result.pagination.max_pages == 20
        assert result.pagination.results_limit == 1000
        assert result.pagination.capped is True
    
    def test_strict_filter(self, olx_config):
        """Test that strict mode keeps only items with every term."""
        ads = [
            make_ad(1, "Celular Samsung Galaxy S20"),
            make_ad(2, "iPhone 13 Pro"),
            make_ad(3, "Capinha para Samsung S20"),
        ]
        pipeline, _ = self.make_search(olx_config, {("/brasil", 1): search_page(ads, total=3)})
        
        result = pipeline.search(SearchRequest(query="samsung s20", strict=True))
        
        assert [item.id for item in result.items] == ["1", "3"]
        assert result.query.strict is True
        assert result.query.region is None
    
    def test_enrichment_of_final_items(self, olx_config):
        """Test that only the surviving items are enriched."""
        ads = [make_ad(1, "TV 50"), make_ad(2, "TV 42")]
        pipeline, fetcher = self.make_search(
            olx_config,
            {("/brasil", 1): search_page(ads, total=2)},
            details={"https://sp.olx.com.br/anuncio/1": detail_page(description="4K", seller_name="Rui")},
        )
        
        result = pipeline.search(SearchRequest(query="tv", limit=1))
        
        assert len(result.items) == 1
        assert result.items[0].description == "4K"
        assert result.items[0].seller_name == "Rui"
        assert "https://sp.olx.com.br/anuncio/2" not in fetcher.requested
    
    def test_multi_region(self, olx_config):
        """Test region fan-out, merge order and summed totals."""
        pipeline, _ = self.make_search(
            olx_config,
            {
                ("/estado-sp", 1): search_page([make_ad(1, "A1"), make_ad(2, "A2")], total=2),
                ("/estado-rj", 1): search_page([make_ad(3, "B1"), make_ad(1, "A1 again")], total=2),
            },
        )
        
        result = pipeline.search(SearchRequest(query="tv", regions="sp,rj"))
        
        assert [item.id for item in result.items] == ["1", "3", "2"]
        assert result.query.region == "sp,rj"
        assert result.query.regions == ["sp", "rj"]
        assert result.query.url == "https://www.olx.com.br/estado-sp?q=tv"
        assert result.pagination.total == 4
        assert result.pagination.capped is False
    
    def test_multi_region_strict_filters_merged_items(self, olx_config):
        """Test that strict matching runs on the merged set before truncation."""
        sp_ads = [
            make_ad(1, "iPhone 13"),
            make_ad(2, "Samsung S20 Ultra"),
            make_ad(3, "Samsung S20 FE"),
        ]
        rj_ads = [
            make_ad(4, "Capa Samsung S20"),
            make_ad(5, "Motorola Edge"),
            make_ad(6, "Samsung Galaxy S20"),
        ]
        pipeline, _ = self.make_search(
            olx_config,
            {
                ("/estado-sp", 1): search_page(sp_ads, total=3),
                ("/estado-rj", 1): search_page(rj_ads, total=3),
            },
        )
        
        result = pipeline.search(SearchRequest(query="samsung s20", regions="sp,rj", strict=True, limit=3))
        
        assert [item.id for item in result.items] == ["4", "2", "3"]
        assert result.pagination.capped is True
        assert result.query.strict is True
    
    def test_multi_region_partial_failure(self, olx_config):
        """Test that a failing region does not fail the search."""
        pipeline, _ = self.make_search(
            olx_config,
            {("/estado-rj", 1): search_page([make_ad(3, "B1")], total=1)},
        )
        
        result = pipeline.search(SearchRequest(query="tv", regions="sp,rj"))
        
        assert [item.id for item in result.items] == ["3"]
        assert result.query.url == "https://www.olx.com.br/estado-rj?q=tv"
    
    def test_multi_region_all_failed(self, olx_config):
        """Test an empty result when every region fails."""
        pipeline, _ = self.make_search(olx_config, {})
        
        result = pipeline.search(SearchRequest(query="tv", regions="sp,rj"))
        
        assert result.items == []
        assert result.pagination.total == 0
        assert result.pagination.page_size == 50
        assert result.query.url is None
        pipeline.logger.error.assert_called_once()
    
    def test_single_region_first_page_failure(self, olx_config):
        """Test that single-region first page failures propagate."""
        pipeline, _ = self.make_search(olx_config, {("/brasil", 1): "<html>blocked</html>"})
        
        with pytest.raises(ExtractionError):
            pipeline.search(SearchRequest(query="tv"))
    
    def test_unknown_category_fails_before_fetching(self, olx_config):
        """Test validation against the catalog."""
        pipeline, fetcher = self.make_search(olx_config, {})
        
        with pytest.raises(UnknownCategoryError):
            pipeline.search(SearchRequest(query="tv", category="nao-existe"))
        
        assert fetcher.requested == []
    
    def test_unknown_region(self, olx_config):
        """Test that an unknown region is rejected."""
        pipeline, fetcher = self.make_search(olx_config, {})
        
        with pytest.raises(UnknownRegionError):
            pipeline.search(SearchRequest(query="tv", regions="sp,zz"))
        
        assert fetcher.requested == []
    
    def test_category_echo(self, olx_config):
        """Test the category path and echo."""
        pipeline, _ = self.make_search(
            olx_config,
            {("/celulares/estado-mg", 1): search_page([make_ad(1, "Moto G")], total=1)},
        )
        
        result = pipeline.search(SearchRequest(query="moto g", regions="MG", category="celulares"))
        
        assert result.query.category == "celulares"
        assert result.query.region == "mg"
    
    def test_search_raw(self, olx_config):
        """Test access to the raw first page data."""
        pipeline, _ = self.make_search(
            olx_config,
            {("/estado-sp", 1): search_page([make_ad(1, "TV")], total=1, filters=[])},
        )
        
        page_props = pipeline.search_raw(SearchRequest(query="tv", regions="sp,rj"))
        
        assert page_props["totalOfAds"] == 1
        assert page_props["ads"][0]["listId"] == 1


class TestModuleFunctions:
    """Test the keyword-option entry points."""
    
    @patch("olx_search.scrapers.olx.olx_pipeline.OlxSearch")
    def test_search(self, mock_search_class):
        """Test that options are validated into a request."""
        search("  iphone ", limit=5, sort=None, regions="SP")
        
        request = mock_search_class.return_value.search.call_args.args[0]
        assert request.query == "iphone"
        assert request.limit == 5
        assert request.sort == SortOrder.RELEVANCE
        assert request.regions == ("sp",)
    
    @patch("olx_search.scrapers.olx.olx_pipeline.OlxSearch")
    def test_search_raw(self, mock_search_class):
        """Test the raw entry point."""
        mock_search_class.return_value.search_raw.return_value = {"ads": []}
        
        assert search_raw("tv", category="celulares") == {"ads": []}
        request = mock_search_class.return_value.search_raw.call_args.args[0]
        assert request.category == "celulares"
