"""
AI curation services.
"""

from blimari.services.ai.question_service import QuestionService
from blimari.services.ai.insight_service import InsightService, FALLBACK_INSIGHT
from blimari.services.ai.content_filter import ContentFilterService
from blimari.services.ai.content_organizer import (
    ContentOrganizerService,
    FALLBACK_SECTION_TITLE,
    apply_trail,
    single_section_trail,
)

__all__ = [
    "QuestionService",
    "InsightService",
    "FALLBACK_INSIGHT",
    "ContentFilterService",
    "ContentOrganizerService",
    "FALLBACK_SECTION_TITLE",
    "apply_trail",
    "single_section_trail",
]
