"""
Content discovery service.

Fans a topic out to the requested content sources and concatenates the
normalized results.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional

from blimari.schemas.content import ContentItem
from blimari.services.sources.base import ContentSource

logger = logging.getLogger(__name__)

# Tag the client sends -> source name
SOURCE_ALIASES: Dict[str, str] = {
    "youtube": "youtube",
    "video-platform": "youtube",
    "github": "github",
    "code-host": "github",
    "web": "web",
    "web-article": "web",
    "google-search": "web",
    "medium": "web",
    "books": "books",
    "book": "books",
}


def normalize_sources(tags: Iterable[str]) -> List[str]:
    """
    Map client source tags to source names.

    Unknown tags are dropped with a warning; duplicates keep their first
    position.
    """
    names: List[str] = []
    for tag in tags:
        name = SOURCE_ALIASES.get((tag or "").strip().lower())
        if name is None:
            logger.warning(f"Ignoring unknown content source '{tag}'")
            continue
        if name not in names:
            names.append(name)
    return names


def rank_by_rating(items: List[ContentItem], limit: Optional[int] = None) -> List[ContentItem]:
    """
    Sort items by rating, highest first.

    The sort is stable: items with equal ratings (a missing rating counts
    as 0) keep their source arrival order.
    """
    ranked = sorted(items, key=lambda item: item.rating or 0, reverse=True)
    return ranked[:limit] if limit is not None else ranked


class DiscoveryService:
    """
    Discovers learning content across external sources.

    Sources are queried concurrently; each one is failure-isolated, so a
    broken or unconfigured source contributes no items.
    """

    def __init__(self, sources: Dict[str, ContentSource], per_source_limit: int = 10):
        """
        Initialize DiscoveryService.

        Args:
            sources: Source name -> ContentSource
            per_source_limit: Items requested from each source
        """
        self._sources = sources
        self._per_source_limit = per_source_limit

    async def discover(self, topic: str, sources: Iterable[str]) -> List[ContentItem]:
        """
        Discover content for a topic.

        Args:
            topic: Free-text subject
            sources: Source tags, in the order results should be concatenated

        Returns:
            One sub-list per requested source, concatenated
        """
        names = normalize_sources(sources)
        if not names:
            logger.info(f"No content sources requested for '{topic}'")
            return []

        results = await asyncio.gather(
            *(self._search_one(name, topic) for name in names)
        )

        content = [item for items in results for item in items]
        logger.info(f"Discovered {len(content)} items for '{topic}' from {names}")
        return content

    async def _search_one(self, name: str, topic: str) -> List[ContentItem]:
        source = self._sources.get(name)
        if source is None:
            logger.warning(f"Content source '{name}' is not registered, skipping")
            return []

        try:
            return await source.search(topic, self._per_source_limit)
        except Exception as e:
            logger.warning(f"Content source '{name}' failed for '{topic}': {e}")
            return []
