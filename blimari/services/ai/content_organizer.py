"""
AI content organizer.

Groups approved content into titled sections, orders it as a curriculum
and rewrites each item's description. On failure the approved items are
returned as a single section in their existing order.
"""

import logging
from typing import Any, Dict, List, Optional

from common.ai import AIProvider, AIResponseError
from blimari.schemas.content import ContentItem, OrganizedTrail, TrailItem, TrailSection
from blimari.services.ai.context import format_answers, format_items, format_profile

logger = logging.getLogger(__name__)

FALLBACK_SECTION_TITLE = "Conteúdo Recomendado"

ORGANIZE_FIELDS = (
    "id",
    "title",
    "description",
    "url",
    "source",
    "type",
    "duration",
    "author",
    "rating",
    "thumbnail",
)

DESCRIPTION_PROMPT_LENGTH = 600


def single_section_trail(
    items: List[ContentItem],
    title: str = FALLBACK_SECTION_TITLE,
) -> OrganizedTrail:
    """One section holding every item, in order, with its own description."""
    return OrganizedTrail(organizedTrail=[
        TrailSection(
            sectionTitle=title,
            items=[TrailItem(id=item.id, organizedDescription=item.description or "") for item in items],
        )
    ])


def sanitize_trail(trail: OrganizedTrail, known_ids: set) -> OrganizedTrail:
    """
    Drop references to unknown or already-placed items, then empty sections.

    Section and item order is preserved.
    """
    seen = set()
    sections = []
    for section in trail.organizedTrail:
        items = []
        for item in section.items:
            if item.id not in known_ids or item.id in seen:
                continue
            seen.add(item.id)
            items.append(item)
        if items:
            sections.append(TrailSection(sectionTitle=section.sectionTitle, items=items))
    return OrganizedTrail(organizedTrail=sections)


class ContentOrganizerService:
    """Builds a sectioned learning trail from approved content."""

    def __init__(self, ai_provider: AIProvider):
        """
        Initialize ContentOrganizerService.

        Args:
            ai_provider: Provider used for structured generation
        """
        self._ai = ai_provider

    async def request_trail(
        self,
        items: List[ContentItem],
        topic: str,
        answers: List[str],
        language: str = "pt-BR",
        profile: Optional[Dict[str, Any]] = None,
    ) -> OrganizedTrail:
        """
        Ask the AI provider for an organized trail.

        Raises:
            AIResponseError: If the reply does not validate or references
                no known item
            Exception: Any provider/network error
        """
        prompt_items = [
            item.model_copy(update={"description": item.description[:DESCRIPTION_PROMPT_LENGTH]})
            for item in items
        ]

        prompt = f"""You are designing a learning path about "{topic}".

Learner answers:
{format_answers(answers)}
{format_profile(profile)}
Approved content (JSON):
{format_items(prompt_items, ORGANIZE_FIELDS)}

Organize this content into a progressive curriculum:
- Group items into 2 to 5 sections with short, descriptive titles
- Order sections and items from fundamentals to advanced material
- For each item write "organizedDescription": 1-2 sentences explaining what
  the learner gets from it and why it comes at this point
- Use only ids from the list above; each id at most once
- Write section titles and descriptions in {language}

Return an object with "organizedTrail": a list of sections, each with
"sectionTitle" and "items" (objects with "id" and "organizedDescription").
"""

        trail = await self._ai.generate_json(prompt, OrganizedTrail, temperature=0.4)
        trail = sanitize_trail(trail, {item.id for item in items})

        if not trail.organizedTrail:
            raise AIResponseError("Organized trail references no known content")

        return trail

    async def organize(
        self,
        items: List[ContentItem],
        topic: str,
        answers: List[str],
        language: str = "pt-BR",
        profile: Optional[Dict[str, Any]] = None,
    ) -> OrganizedTrail:
        """
        Organize approved items into a trail.

        Never raises: on any failure returns the single-section trail.

        Args:
            items: Approved content, in pre-organize order
            topic: Learning topic
            answers: Onboarding answers
            language: Language for titles and descriptions
            profile: Optional cultural profile for extra context

        Returns:
            OrganizedTrail whose order is presentation order
        """
        if not items:
            return OrganizedTrail(organizedTrail=[])

        try:
            trail = await self.request_trail(items, topic, answers, language, profile)
        except Exception as e:
            logger.warning(f"Content organize failed for '{topic}', using single section: {e}")
            return single_section_trail(items)

        logger.info(
            f"Organized {trail.item_count()}/{len(items)} items into "
            f"{len(trail.organizedTrail)} sections for '{topic}'"
        )
        return trail


def apply_trail(items: List[ContentItem], trail: OrganizedTrail) -> List[ContentItem]:
    """
    Rebuild the content list in trail order with rewritten descriptions.

    Items the trail does not reference are left out.
    """
    by_id = {item.id: item for item in items}
    ordered = []
    for section in trail.organizedTrail:
        for entry in section.items:
            item = by_id.get(entry.id)
            if item is None:
                continue
            description = entry.organizedDescription or item.description
            ordered.append(item.model_copy(update={"description": description}))
    return ordered
