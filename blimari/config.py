"""
Blimari application settings.

Extends the base settings with content-source and cultural-profile
configuration. Every source key is optional: a missing key disables
that one source.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Blimari-specific settings."""

    # ==========================================================================
    # Content Sources
    # ==========================================================================
    # YouTube Data API v3
    YOUTUBE_API_KEY: Optional[str] = None

    # GitHub REST API (token raises the rate limit)
    GITHUB_TOKEN: Optional[str] = None

    # Google Custom Search (web articles)
    GOOGLE_CUSTOM_SEARCH_API_KEY: Optional[str] = None
    GOOGLE_CUSTOM_SEARCH_CX: Optional[str] = None

    # Google Books
    GOOGLE_BOOKS_API_KEY: Optional[str] = None

    # ==========================================================================
    # Cultural Profiles (Qloo)
    # ==========================================================================
    QLOO_API_KEY: Optional[str] = None
    QLOO_BASE_URL: Optional[str] = None

    # ==========================================================================
    # Discovery Settings
    # ==========================================================================
    # Items requested from each source
    DISCOVERY_PER_SOURCE_LIMIT: int = 10

    # Items returned by /content/discover after the rating sort
    DISCOVERY_RESULT_LIMIT: int = 10

    # Timeout for outbound content API calls
    HTTP_TIMEOUT_SECONDS: float = 20.0


# Global settings instance
settings = Settings()
