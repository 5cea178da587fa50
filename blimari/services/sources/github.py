"""
GitHub repository content source.

Searches repositories by stars and enriches each with its README.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from blimari.schemas.content import ContentItem
from blimari.services.sources.base import (
    ContentSource,
    estimate_reading_time,
    quality_to_rating,
)

logger = logging.getLogger(__name__)


def repository_quality(repo: Dict[str, Any], now: Optional[datetime] = None) -> float:
    """
    Quality score (0-1) for a repository search result.

    Stars contribute up to 0.6, forks up to 0.2, an update within the last
    year 0.1, a wiki 0.05 and fewer than 10 open issues 0.05.
    """
    now = now or datetime.now(timezone.utc)

    score = min(repo.get("stargazers_count", 0) / 1000, 0.6)
    score += min(repo.get("forks_count", 0) / 100, 0.2)

    updated_at = repo.get("updated_at")
    if updated_at:
        updated = datetime.fromisoformat(updated_at.replace("Z", "+00:00"))
        if updated > now - timedelta(days=365):
            score += 0.1

    if repo.get("has_wiki"):
        score += 0.05
    if repo.get("open_issues_count", 0) < 10:
        score += 0.05

    return min(score, 1)


class GitHubSource(ContentSource):
    """Repository search via the GitHub REST API."""

    name = "github"

    API_BASE = "https://api.github.com"

    def __init__(self, token: Optional[str], **kwargs):
        """
        Args:
            token: GitHub access token (source disabled when empty)
        """
        super().__init__(**kwargs)
        self._token = token

    @property
    def is_configured(self) -> bool:
        return bool(self._token)

    def _headers(self, accept: str = "application/vnd.github+json") -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": accept,
        }

    async def _search(
        self,
        client: httpx.AsyncClient,
        topic: str,
        limit: int,
    ) -> List[ContentItem]:
        response = await client.get(
            f"{self.API_BASE}/search/repositories",
            params={
                "q": f"{topic} tutorial",
                "sort": "stars",
                "order": "desc",
                "per_page": limit,
            },
            headers=self._headers(),
        )
        response.raise_for_status()

        repos = response.json().get("items", [])
        readmes = await asyncio.gather(
            *(self._fetch_readme(client, repo["full_name"]) for repo in repos)
        )

        return [self._to_item(repo, readme) for repo, readme in zip(repos, readmes)]

    async def _fetch_readme(self, client: httpx.AsyncClient, full_name: str) -> Optional[str]:
        """Raw README text, or None when it cannot be fetched."""
        try:
            response = await client.get(
                f"{self.API_BASE}/repos/{full_name}/readme",
                headers=self._headers("application/vnd.github.raw"),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch README for {full_name}: {e}")
            return None

        if response.status_code != 200:
            return None
        return response.text

    def _to_item(self, repo: Dict[str, Any], readme: Optional[str]) -> ContentItem:
        description = readme or repo.get("description") or ""
        owner = repo.get("owner") or {}
        license_info = repo.get("license") or {}

        return ContentItem(
            id=str(repo["id"]),
            title=repo.get("name", ""),
            description=description,
            url=repo.get("html_url", ""),
            source="github",
            type="repository",
            duration=estimate_reading_time(description),
            author=owner.get("login"),
            rating=quality_to_rating(repository_quality(repo)),
            thumbnail=owner.get("avatar_url"),
            metadata={
                "fullName": repo.get("full_name"),
                "language": repo.get("language"),
                "stars": repo.get("stargazers_count", 0),
                "forks": repo.get("forks_count", 0),
                "issues": repo.get("open_issues_count", 0),
                "updatedAt": repo.get("updated_at"),
                "license": license_info.get("name"),
                "topics": repo.get("topics", []),
            },
        )
