"""
Centralized configuration management.

All application configuration is loaded and validated here.
"""
import os
import logging
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from dashboard_core.core.keywords import IntentKeywords, load_keywords

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "pt")


class Settings(BaseModel):
    """Application settings with validation."""

    # Suggestion engine
    max_suggestions: int = Field(default=3, ge=1, le=3, description="Maximum suggestions returned per call")
    type_sample_size: int = Field(default=10, ge=1, le=1000, description="Rows sampled per column for type inference")
    category_min_unique: int = Field(default=2, ge=1, description="Minimum distinct values for a categorical column")
    category_max_unique: int = Field(default=20, ge=2, description="Maximum distinct values for a categorical column")
    pie_max_categories: int = Field(default=6, ge=1, le=50, description="Largest category count offered as a pie")
    max_series: int = Field(default=10, ge=1, le=50, description="Maximum series in a grouped bar chart")
    language: str = Field(default="en", description="Language of generated titles and narrative")
    keywords: IntentKeywords = Field(default_factory=IntentKeywords, description="Question keyword groups")

    # Request limits
    max_rows: int = Field(default=50000, ge=1, le=1000000, description="Maximum rows accepted per request")

    # Rate limiting
    rate_limit_per_minute: int = Field(default=60, ge=1, le=10000, description="Rate limit per minute per IP")

    # Request timeout
    request_timeout_seconds: int = Field(default=30, ge=1, le=3600, description="Request timeout in seconds")

    # CORS
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v.upper()

    @field_validator('language')
    @classmethod
    def validate_language(cls, v: str) -> str:
        if v.lower() not in SUPPORTED_LANGUAGES:
            raise ValueError(f"LANGUAGE must be one of {list(SUPPORTED_LANGUAGES)}, got '{v}'")
        return v.lower()

    @model_validator(mode='after')
    def validate_category_bounds(self) -> "Settings":
        if self.category_min_unique > self.category_max_unique:
            raise ValueError("CATEGORY_MIN_UNIQUE cannot exceed CATEGORY_MAX_UNIQUE")
        return self

    @property
    def allowed_origins_list(self) -> List[str]:
        """Get allowed origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            max_suggestions=int(os.getenv("MAX_SUGGESTIONS", "3")),
            type_sample_size=int(os.getenv("TYPE_SAMPLE_SIZE", "10")),
            category_min_unique=int(os.getenv("CATEGORY_MIN_UNIQUE", "2")),
            category_max_unique=int(os.getenv("CATEGORY_MAX_UNIQUE", "20")),
            pie_max_categories=int(os.getenv("PIE_MAX_CATEGORIES", "6")),
            max_series=int(os.getenv("MAX_SERIES", "10")),
            language=os.getenv("LANGUAGE", "en"),
            keywords=load_keywords(os.getenv("KEYWORDS_FILE")),
            max_rows=int(os.getenv("MAX_ROWS", "50000")),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
            request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        logger.info("Configuration loaded and validated successfully")
    return _settings


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    global _settings
    _settings = None
    return get_settings()
