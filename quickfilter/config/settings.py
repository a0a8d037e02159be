"""Application settings and configuration management."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    app_name: str = Field(default="quickfilter")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Search Configuration
    search_case_insensitive: bool = Field(default=True)
    search_fuzzy: bool = Field(default=True)
    
    # Paging
    page_size: int = Field(default=50, ge=1)
    initial_page_size: Optional[int] = Field(default=None, ge=1)
    highlight_matches: bool = Field(default=True)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
