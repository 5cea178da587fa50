"""
Blimari API Routers.

All routers are imported here for easy access.
"""

from blimari.routers.ai import router as ai_router
from blimari.routers.content import router as content_router
from blimari.routers.learning_paths import router as learning_paths_router
from blimari.routers.user import router as user_router

__all__ = [
    "ai_router",
    "content_router",
    "learning_paths_router",
    "user_router",
]
