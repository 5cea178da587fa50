"""
Prompt fragments shared by the curation services.
"""

import json
from typing import Any, Dict, List, Optional

from blimari.schemas.content import ContentItem

ANSWER_LABELS = ("Experience", "Learning style", "Goal")


def format_answers(answers: Optional[List[str]]) -> str:
    """Render onboarding answers as labeled lines."""
    answers = answers or []
    lines = []
    for index, label in enumerate(ANSWER_LABELS):
        value = answers[index] if index < len(answers) and answers[index] else "not answered"
        lines.append(f"- {label}: {value}")
    for extra in answers[len(ANSWER_LABELS):]:
        lines.append(f"- Other: {extra}")
    return "\n".join(lines)


def format_profile(profile: Optional[Dict[str, Any]]) -> str:
    """Render a cultural profile as prompt context, or "" when absent."""
    if not profile:
        return ""

    preferences = profile.get("preferences") or {}
    style = profile.get("communicationStyle") or {}
    insights = profile.get("insights") or {}
    if not preferences and not style and not insights:
        return ""

    lines = [
        "\nCultural profile of the learner (use it to adapt tone and examples):",
        f"- Preferences: {json.dumps(preferences, ensure_ascii=False, default=str)}",
        f"- Communication style: {json.dumps(style, ensure_ascii=False, default=str)}",
    ]
    if insights:
        lines.append(f"- Cultural insights: {json.dumps(insights, ensure_ascii=False, default=str)}")
    return "\n".join(lines) + "\n"


def format_items(items: List[ContentItem], fields: tuple) -> str:
    """Serialize the given fields of each item as a JSON array."""
    records = [item.model_dump(include=set(fields)) for item in items]
    return json.dumps(records, ensure_ascii=False, default=str)
