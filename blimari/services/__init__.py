"""
Blimari Services.

All service classes organized by feature.
"""

# Content sources
from blimari.services.sources import (
    YouTubeSource,
    GitHubSource,
    WebSearchSource,
    BooksSource,
)

# Cultural profiles
from blimari.services.qloo_service import QlooService

# Content discovery
from blimari.services.content import DiscoveryService

# AI curation
from blimari.services.ai import (
    QuestionService,
    InsightService,
    ContentFilterService,
    ContentOrganizerService,
)

# Persistence
from blimari.services.learning_path import LearningPathService
from blimari.services.user import UserService

__all__ = [
    # Content sources
    "YouTubeSource",
    "GitHubSource",
    "WebSearchSource",
    "BooksSource",
    # Cultural profiles
    "QlooService",
    # Content discovery
    "DiscoveryService",
    # AI curation
    "QuestionService",
    "InsightService",
    "ContentFilterService",
    "ContentOrganizerService",
    # Persistence
    "LearningPathService",
    "UserService",
]
