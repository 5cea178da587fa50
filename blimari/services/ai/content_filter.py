"""
AI content filter.

Reduces a discovered content list to the items worth studying. When no
verifiable decision is available the filter degrades to approving
everything, so a broken AI dependency never leaves the learner with an
empty path.
"""

import logging
from typing import Any, Dict, List, Optional

from common.ai import AIProvider, AIResponseError
from blimari.schemas.content import ContentItem, FilterDecision
from blimari.services.ai.context import format_answers, format_items, format_profile

logger = logging.getLogger(__name__)

FILTER_FIELDS = (
    "id",
    "title",
    "description",
    "source",
    "type",
    "duration",
    "author",
    "rating",
)

# Long README/page excerpts are cut before prompting
DESCRIPTION_PROMPT_LENGTH = 600


class ContentFilterService:
    """Approves a relevant subset of discovered content."""

    def __init__(self, ai_provider: AIProvider):
        """
        Initialize ContentFilterService.

        Args:
            ai_provider: Provider used for structured generation
        """
        self._ai = ai_provider

    async def request_decision(
        self,
        items: List[ContentItem],
        topic: str,
        answers: List[str],
        profile: Optional[Dict[str, Any]] = None,
    ) -> List[str]:
        """
        Ask the AI provider which items to keep.

        Returns:
            Approved IDs that exist in items, in input order

        Raises:
            AIResponseError: If the reply does not validate, or approves no
                known item
            Exception: Any provider/network error
        """
        prompt_items = [
            item.model_copy(update={"description": item.description[:DESCRIPTION_PROMPT_LENGTH]})
            for item in items
        ]

        prompt = f"""You are curating learning material about "{topic}".

Learner answers:
{format_answers(answers)}
{format_profile(profile)}
Candidate content (JSON):
{format_items(prompt_items, FILTER_FIELDS)}

Approve only items that are relevant to "{topic}", of good quality and
suitable for this learner's level and goals. Drop duplicates, off-topic and
low-quality items.

Return an object with "approvedContentIds": the ids of the approved items,
copied exactly from the candidate list.
"""

        decision = await self._ai.generate_json(prompt, FilterDecision, temperature=0.2)

        approved = set(decision.approvedContentIds)
        known = [item.id for item in items if item.id in approved]

        dropped = len(approved) - len(known)
        if dropped:
            logger.warning(f"Filter returned {dropped} unknown content IDs, ignoring them")

        if not known:
            raise AIResponseError("Filter approved no known content")

        return known

    async def filter_content(
        self,
        items: List[ContentItem],
        topic: str,
        answers: List[str],
        profile: Optional[Dict[str, Any]] = None,
    ) -> List[str]:
        """
        Approved content IDs for items.

        Never raises: on any failure every item is approved.

        Args:
            items: Discovered content
            topic: Learning topic
            answers: Onboarding answers
            profile: Optional cultural profile for extra context

        Returns:
            Approved IDs, in input order
        """
        if not items:
            return []

        try:
            approved = await self.request_decision(items, topic, answers, profile)
        except Exception as e:
            logger.warning(f"Content filter failed for '{topic}', approving all {len(items)} items: {e}")
            return [item.id for item in items]

        logger.info(f"Filter approved {len(approved)}/{len(items)} items for '{topic}'")
        return approved

    async def apply(
        self,
        items: List[ContentItem],
        topic: str,
        answers: List[str],
        profile: Optional[Dict[str, Any]] = None,
    ) -> List[ContentItem]:
        """
        Annotate every item with its approval flag.

        Returns:
            New list, same length and order as items, with isApproved set
        """
        approved = set(await self.filter_content(items, topic, answers, profile))
        return [
            item.model_copy(update={"isApproved": item.id in approved})
            for item in items
        ]
