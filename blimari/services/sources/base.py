"""
Abstract content source interface.

Every external content API is wrapped in a ContentSource that turns a
topic into normalized ContentItems. Sources never raise out of search():
an unconfigured source or a failed upstream call yields an empty list.

Example:
    source = YouTubeSource(api_key=settings.YOUTUBE_API_KEY)
    items = await source.search("Rust", limit=10)
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from blimari.schemas.content import ContentItem

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


def quality_to_rating(quality: float) -> float:
    """Map a 0-1 quality score to a 0-5 rating with one decimal."""
    quality = max(0.0, min(1.0, quality))
    return round(quality * 5, 1)


def estimate_reading_time(text: Optional[str]) -> int:
    """Reading time in minutes at 200 words per minute, rounded up."""
    if not text:
        return 0
    return math.ceil(len(text.split()) / WORDS_PER_MINUTE)


class ContentSource(ABC):
    """
    Abstract content source.

    Subclasses implement _search() against a live httpx client and
    is_configured for their credential checks.
    """

    name: str = "source"

    def __init__(
        self,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the credentials this source needs are present."""
        pass

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def search(self, topic: str, limit: int = 10) -> List[ContentItem]:
        """
        Search the source for learning content about a topic.

        Args:
            topic: Free-text subject
            limit: Maximum number of items to request

        Returns:
            Normalized items, or [] if unconfigured or on any failure
        """
        if not self.is_configured:
            logger.warning(f"{self.name} source not configured, skipping")
            return []

        try:
            async with self._client() as client:
                items = await self._search(client, topic, limit)
        except Exception as e:
            logger.warning(f"{self.name} search failed for '{topic}': {e}")
            return []

        logger.info(f"{self.name} returned {len(items)} items for '{topic}'")
        return items

    @abstractmethod
    async def _search(
        self,
        client: httpx.AsyncClient,
        topic: str,
        limit: int,
    ) -> List[ContentItem]:
        """Source-specific search. May raise; search() isolates failures."""
        pass
