"""
Unit tests for configuration classes.
"""

import pytest
from pydantic import ValidationError

from olx_search.shared.config.app_settings import AppConfig
from olx_search.shared.config.olx_settings import OlxSearchConfig, get_olx_config


class TestOlxSearchConfig:
    """Test OLX configuration."""
    
    def test_defaults(self, monkeypatch):
        """Test default values."""
        for name in ("OLX_DOMAIN", "DEFAULT_LIMIT", "MAX_PAGES", "DEFAULT_PAGE_SIZE"):
            monkeypatch.delenv(name, raising=False)
        
        config = OlxSearchConfig(_env_file=None)
        
        assert config.OLX_DOMAIN == "www.olx.com.br"
        assert config.DEFAULT_LIMIT == 20
        assert config.MAX_PAGES == 20
        assert config.DEFAULT_PAGE_SIZE == 50
    
    def test_environment_override(self, monkeypatch):
        """Test that environment variables are read."""
        monkeypatch.setenv("MAX_PAGES", "3")
        monkeypatch.setenv("USE_BROWSER_FALLBACK", "false")
        
        config = OlxSearchConfig(_env_file=None)
        
        assert config.MAX_PAGES == 3
        assert config.USE_BROWSER_FALLBACK is False
    
    def test_domain_normalization(self):
        """Test that scheme and trailing slash are removed."""
        assert OlxSearchConfig(OLX_DOMAIN="https://www.olx.com.br/").OLX_DOMAIN == "www.olx.com.br"
    
    def test_invalid_domain(self):
        """Test that non-OLX hosts are rejected."""
        with pytest.raises(ValidationError):
            OlxSearchConfig(OLX_DOMAIN="example.com")
    
    def test_browser_headers(self):
        """Test the user agent in the header set."""
        config = OlxSearchConfig(USER_AGENT="TestAgent/1.0")
        
        assert config.browser_headers["User-Agent"] == "TestAgent/1.0"
        assert config.browser_headers["Accept-Language"].startswith("pt-BR")
    
    def test_config_is_cached(self):
        """Test the cached getter."""
        assert get_olx_config() is get_olx_config()


class TestAppConfig:
    """Test application configuration."""
    
    def test_log_level_is_uppercased(self):
        """Test log level normalization."""
        assert AppConfig(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    
    def test_invalid_log_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ValidationError):
            AppConfig(LOG_LEVEL="loud")
    
    def test_olx_settings_access(self):
        """Test access to the OLX configuration."""
        assert AppConfig().olx is get_olx_config()
