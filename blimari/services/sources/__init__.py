"""
External content sources.
"""

from blimari.services.sources.base import (
    ContentSource,
    estimate_reading_time,
    quality_to_rating,
)
from blimari.services.sources.youtube import YouTubeSource
from blimari.services.sources.github import GitHubSource
from blimari.services.sources.web_search import WebSearchSource
from blimari.services.sources.books import BooksSource

__all__ = [
    "ContentSource",
    "estimate_reading_time",
    "quality_to_rating",
    "YouTubeSource",
    "GitHubSource",
    "WebSearchSource",
    "BooksSource",
]
