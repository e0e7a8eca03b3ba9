"""
General application settings and environment variables.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .olx_settings import OlxSearchConfig, get_olx_config


class AppConfig(BaseSettings):
    """
    Main application configuration combining all settings.
    
    Attributes:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        LOG_DIR: Directory receiving log files written with --log
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIR: str = Field(default=".", description="Directory for log files")
    
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validates the logging level name.
        
        Args:
            v: Level name
            
        Returns:
            Upper-cased level name
            
        Raises:
            ValueError: If the level is unknown
        """
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v
    
    @property
    def olx(self) -> OlxSearchConfig:
        """Gets OLX search configuration."""
        return get_olx_config()


@lru_cache()
def get_app_config() -> AppConfig:
    """
    Get cached application configuration.
    
    Returns:
        Application configuration instance
    """
    return AppConfig()
