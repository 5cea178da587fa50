"""
Google Books content source.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from blimari.schemas.content import ContentItem
from blimari.services.sources.base import ContentSource

logger = logging.getLogger(__name__)


class BooksSource(ContentSource):
    """Book search via the Google Books volumes API."""

    name = "books"

    VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"

    def __init__(self, api_key: Optional[str], **kwargs):
        """
        Args:
            api_key: Google Books API key (source disabled when empty)
        """
        super().__init__(**kwargs)
        self._api_key = api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def _search(
        self,
        client: httpx.AsyncClient,
        topic: str,
        limit: int,
    ) -> List[ContentItem]:
        response = await client.get(
            self.VOLUMES_URL,
            params={
                "q": topic,
                # API caps results per page at 40
                "maxResults": min(limit, 40),
                "printType": "books",
                "key": self._api_key,
            },
        )
        response.raise_for_status()

        return [self._to_item(volume) for volume in response.json().get("items", [])]

    def _to_item(self, volume: Dict[str, Any]) -> ContentItem:
        info = volume.get("volumeInfo", {})
        images = info.get("imageLinks", {})
        authors = info.get("authors") or []
        rating = info.get("averageRating")

        return ContentItem(
            id=volume["id"],
            title=info.get("title", ""),
            description=info.get("description") or "",
            url=info.get("infoLink") or info.get("previewLink") or "",
            source="books",
            type="book",
            author=", ".join(authors) or None,
            rating=float(rating) if rating is not None else None,
            thumbnail=images.get("thumbnail") or images.get("smallThumbnail"),
            metadata={
                "publisher": info.get("publisher"),
                "publishedDate": info.get("publishedDate"),
                "pageCount": info.get("pageCount"),
                "categories": info.get("categories", []),
                "ratingsCount": info.get("ratingsCount", 0),
            },
        )
