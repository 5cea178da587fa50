"""
YouTube Data API v3 content source.

Searches videos, then fetches their details (full description, duration,
statistics) in one batched videos call.
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional

import httpx

from blimari.schemas.content import ContentItem
from blimari.services.sources.base import ContentSource, quality_to_rating

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def parse_iso_duration(duration: Optional[str]) -> int:
    """
    Convert an ISO-8601 video duration (e.g. "PT1H2M30S", "P1DT2H") to minutes.

    Seconds are rounded half-up to the nearest minute.
    """
    match = _DURATION_RE.match(duration or "")
    if not match:
        return 0
    days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return days * 1440 + hours * 60 + minutes + math.floor(seconds / 60 + 0.5)


def video_quality(statistics: Dict[str, Any]) -> float:
    """
    Quality score (0-1) from view/like/comment counts.

    Popularity saturates at 100k views and weighs 60%; engagement
    ((likes + comments) / views) saturates at 0.1% and weighs 40%.
    """
    views = int(statistics.get("viewCount") or 0)
    likes = int(statistics.get("likeCount") or 0)
    comments = int(statistics.get("commentCount") or 0)

    engagement = (likes + comments) / views if views > 0 else 0
    popularity_score = min(views / 100_000, 1)
    engagement_score = min(engagement * 1000, 1)

    return popularity_score * 0.6 + engagement_score * 0.4


class YouTubeSource(ContentSource):
    """Video search via the YouTube Data API."""

    name = "youtube"

    API_BASE = "https://www.googleapis.com/youtube/v3"

    def __init__(self, api_key: Optional[str], **kwargs):
        """
        Args:
            api_key: YouTube Data API key (source disabled when empty)
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
            f"{self.API_BASE}/search",
            params={
                "part": "snippet",
                "q": f"{topic} tutorial",
                "type": "video",
                "maxResults": limit,
                "key": self._api_key,
            },
        )
        response.raise_for_status()

        video_ids = [
            item["id"]["videoId"]
            for item in response.json().get("items", [])
            if item.get("id", {}).get("videoId")
        ]
        if not video_ids:
            return []

        response = await client.get(
            f"{self.API_BASE}/videos",
            params={
                "part": "snippet,contentDetails,statistics",
                "id": ",".join(video_ids),
                "key": self._api_key,
            },
        )
        response.raise_for_status()

        return [self._to_item(video) for video in response.json().get("items", [])]

    def _to_item(self, video: Dict[str, Any]) -> ContentItem:
        snippet = video.get("snippet", {})
        statistics = video.get("statistics", {})
        details = video.get("contentDetails", {})
        thumbnails = snippet.get("thumbnails", {})
        thumbnail = (thumbnails.get("high") or thumbnails.get("default") or {}).get("url")

        return ContentItem(
            id=video["id"],
            title=snippet.get("title", ""),
            description=snippet.get("description") or "",
            url=f"https://www.youtube.com/watch?v={video['id']}",
            source="youtube",
            type="video",
            duration=parse_iso_duration(details.get("duration")),
            author=snippet.get("channelTitle"),
            rating=quality_to_rating(video_quality(statistics)),
            thumbnail=thumbnail,
            metadata={
                "channelTitle": snippet.get("channelTitle"),
                "publishedAt": snippet.get("publishedAt"),
                "viewCount": int(statistics.get("viewCount") or 0),
                "likeCount": int(statistics.get("likeCount") or 0),
                "commentCount": int(statistics.get("commentCount") or 0),
                "tags": snippet.get("tags", []),
            },
        )
