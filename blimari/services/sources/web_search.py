"""
Web article content source (Google Custom Search).

Each search hit is enriched with text extracted from the page itself.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
import trafilatura

from blimari.schemas.content import ContentItem
from blimari.services.sources.base import (
    ContentSource,
    estimate_reading_time,
    quality_to_rating,
)

logger = logging.getLogger(__name__)

TRUSTED_DOMAINS = ("medium.com", "dev.to", "stackoverflow.com", "github.io")
EXCERPT_LENGTH = 2000


def truncate_excerpt(text: str) -> str:
    """Keep the first 2000 characters, with "..." when truncated."""
    if len(text) > EXCERPT_LENGTH:
        return text[:EXCERPT_LENGTH] + "..."
    return text


def extract_main_content(html: str) -> str:
    """
    Reduce an HTML page to a plain-text excerpt of its main body.

    Navigation, comments and markup are dropped by trafilatura; the
    result is empty when no main content is found.
    """
    text = trafilatura.extract(
        html,
        include_comments=False,
        favor_precision=True,
        output_format="txt",
    )
    if not text:
        return ""
    return truncate_excerpt(" ".join(text.split()))


def article_quality(display_link: str, full_content: Optional[str]) -> float:
    """Base 0.5, +0.2 for substantial page text, +0.2 for a trusted domain."""
    score = 0.5
    if full_content and len(full_content) > 1000:
        score += 0.2
    if any(domain in (display_link or "") for domain in TRUSTED_DOMAINS):
        score += 0.2
    return min(score, 1)


class WebSearchSource(ContentSource):
    """Article search via the Google Custom Search JSON API."""

    name = "web"

    SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
    USER_AGENT = "Mozilla/5.0 (compatible; BlimariBot/1.0)"

    def __init__(self, api_key: Optional[str], cx: Optional[str], **kwargs):
        """
        Args:
            api_key: Custom Search API key
            cx: Programmable search engine ID
        """
        super().__init__(**kwargs)
        self._api_key = api_key
        self._cx = cx

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._cx)

    async def _search(
        self,
        client: httpx.AsyncClient,
        topic: str,
        limit: int,
    ) -> List[ContentItem]:
        response = await client.get(
            self.SEARCH_URL,
            params={
                "key": self._api_key,
                "cx": self._cx,
                "q": f"{topic} tutorial guide",
                # API caps results per page at 10
                "num": min(limit, 10),
            },
        )
        response.raise_for_status()

        hits = response.json().get("items", [])
        pages = await asyncio.gather(
            *(self._fetch_page_text(client, hit["link"]) for hit in hits)
        )

        return [self._to_item(hit, page) for hit, page in zip(hits, pages)]

    async def _fetch_page_text(self, client: httpx.AsyncClient, url: str) -> Optional[str]:
        """Extracted page text, or None when the page cannot be fetched."""
        try:
            response = await client.get(url, headers={"User-Agent": self.USER_AGENT})
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch full content for {url}: {e}")
            return None

        if not response.is_success:
            return None

        try:
            return extract_main_content(response.text) or None
        except Exception as e:
            logger.warning(f"Failed to extract content from {url}: {e}")
            return None

    def _to_item(self, hit: Dict[str, Any], page_text: Optional[str]) -> ContentItem:
        snippet = hit.get("snippet", "")
        description = page_text or snippet
        display_link = hit.get("displayLink", "")

        return ContentItem(
            id=hit["link"],
            title=hit.get("title", ""),
            description=description,
            url=hit["link"],
            source="web",
            type="article",
            duration=estimate_reading_time(description),
            author=display_link or None,
            rating=quality_to_rating(article_quality(display_link, page_text)),
            metadata={
                "displayLink": display_link,
                "snippet": snippet,
                "wordCount": len(page_text.split()) if page_text else 0,
            },
        )
