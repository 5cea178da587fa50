"""Unit tests for AI curation services (filter, organize, questions, insights)."""

import pytest

from conftest import FakeAIProvider, make_item
from common.ai import AIResponseError
from blimari.schemas.ai import Insights, QuestionSet
from blimari.schemas.content import FilterDecision, OrganizedTrail
from blimari.services.ai import (
    FALLBACK_INSIGHT,
    FALLBACK_SECTION_TITLE,
    ContentFilterService,
    ContentOrganizerService,
    InsightService,
    QuestionService,
    apply_trail,
)


# ─────────────────────────────────────────────────────────────────
# ContentFilterService
# ─────────────────────────────────────────────────────────────────


class TestContentFilter:
    @pytest.mark.asyncio
    async def test_returns_approved_ids_in_input_order(self, sample_items):
        ai = FakeAIProvider({FilterDecision: {"approvedContentIds": ["gh1", "yt1"]}})
        service = ContentFilterService(ai)

        approved = await service.filter_content(sample_items, "Rust", ["beginner"])

        assert approved == ["yt1", "gh1"]
        assert '"Rust"' in ai.prompts[0]

    @pytest.mark.asyncio
    async def test_unknown_ids_dropped(self, sample_items):
        ai = FakeAIProvider({FilterDecision: {"approvedContentIds": ["yt2", "invented"]}})

        approved = await ContentFilterService(ai).filter_content(sample_items, "Rust", [])

        assert approved == ["yt2"]

    @pytest.mark.asyncio
    async def test_provider_error_approves_everything(self, sample_items):
        ai = FakeAIProvider({FilterDecision: RuntimeError("HTTP 500")})

        approved = await ContentFilterService(ai).filter_content(sample_items, "Rust", [])

        assert approved == ["yt1", "yt2", "gh1"]

    @pytest.mark.asyncio
    async def test_schema_failure_approves_everything(self, sample_items):
        ai = FakeAIProvider({FilterDecision: AIResponseError("does not match FilterDecision")})

        approved = await ContentFilterService(ai).filter_content(sample_items, "Rust", [])

        assert approved == ["yt1", "yt2", "gh1"]

    @pytest.mark.asyncio
    async def test_decision_with_no_known_ids_approves_everything(self, sample_items):
        ai = FakeAIProvider({FilterDecision: {"approvedContentIds": []}})

        approved = await ContentFilterService(ai).filter_content(sample_items, "Rust", [])

        assert approved == ["yt1", "yt2", "gh1"]

    @pytest.mark.asyncio
    async def test_empty_input_skips_provider(self):
        ai = FakeAIProvider()

        assert await ContentFilterService(ai).filter_content([], "Rust", []) == []
        assert ai.prompts == []

    @pytest.mark.asyncio
    async def test_apply_marks_every_item(self, sample_items):
        ai = FakeAIProvider({FilterDecision: {"approvedContentIds": ["yt1"]}})

        result = await ContentFilterService(ai).apply(sample_items, "Rust", [])

        assert [(item.id, item.isApproved) for item in result] == [
            ("yt1", True), ("yt2", False), ("gh1", False),
        ]
        assert sample_items[0].isApproved is None


# ─────────────────────────────────────────────────────────────────
# ContentOrganizerService
# ─────────────────────────────────────────────────────────────────


class TestContentOrganizer:
    @pytest.mark.asyncio
    async def test_sanitizes_trail(self, sample_items):
        ai = FakeAIProvider({OrganizedTrail: {"organizedTrail": [
            {"sectionTitle": "Fundamentos", "items": [
                {"id": "yt2", "organizedDescription": "Comece aqui"},
                {"id": "ghost", "organizedDescription": "?"},
            ]},
            {"sectionTitle": "Vazia", "items": [{"id": "ghost2"}]},
            {"sectionTitle": "Prática", "items": [
                {"id": "gh1", "organizedDescription": "Pratique"},
                {"id": "yt2", "organizedDescription": "repetido"},
            ]},
        ]}})

        trail = await ContentOrganizerService(ai).organize(sample_items, "Rust", [], "pt-BR")

        assert [section.sectionTitle for section in trail.organizedTrail] == ["Fundamentos", "Prática"]
        assert trail.item_ids() == ["yt2", "gh1"]

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_single_section(self, sample_items):
        ai = FakeAIProvider({OrganizedTrail: RuntimeError("timeout")})

        trail = await ContentOrganizerService(ai).organize(sample_items, "Rust", [])

        assert len(trail.organizedTrail) == 1
        assert trail.organizedTrail[0].sectionTitle == FALLBACK_SECTION_TITLE
        assert trail.item_ids() == ["yt1", "yt2", "gh1"]
        assert trail.organizedTrail[0].items[0].organizedDescription == "About yt1"

    @pytest.mark.asyncio
    async def test_trail_with_no_known_items_falls_back(self, sample_items):
        ai = FakeAIProvider({OrganizedTrail: {"organizedTrail": [
            {"sectionTitle": "Nada", "items": [{"id": "ghost"}]},
        ]}})

        trail = await ContentOrganizerService(ai).organize(sample_items, "Rust", [])

        assert trail.item_ids() == ["yt1", "yt2", "gh1"]

    @pytest.mark.asyncio
    async def test_empty_input(self):
        trail = await ContentOrganizerService(FakeAIProvider()).organize([], "Rust", [])
        assert trail.organizedTrail == []

    def test_apply_trail_reorders_and_rewrites(self, sample_items):
        trail = OrganizedTrail.model_validate({"organizedTrail": [
            {"sectionTitle": "A", "items": [
                {"id": "gh1", "organizedDescription": "Primeiro"},
                {"id": "yt1"},
            ]},
        ]})

        result = apply_trail(sample_items, trail)

        assert [item.id for item in result] == ["gh1", "yt1"]
        assert result[0].description == "Primeiro"
        assert result[1].description == "About yt1"


# ─────────────────────────────────────────────────────────────────
# QuestionService / InsightService
# ─────────────────────────────────────────────────────────────────


QUESTION_REPLY = {
    "topic": "Rust",
    "questions": [
        {
            "id": 1,
            "question": "Qual é a sua experiência com Rust?",
            "category": "experience",
            "options": [
                {"id": "beginner", "text": "Iniciante", "weight": 1},
                {"id": "intermediate", "text": "Intermediário", "weight": 3},
                {"id": "advanced", "text": "Avançado", "weight": 5},
            ],
        },
    ],
}


class TestQuestionService:
    @pytest.mark.asyncio
    async def test_returns_validated_questions(self):
        ai = FakeAIProvider({QuestionSet: QUESTION_REPLY})

        result = await QuestionService(ai).generate_questions("Rust", "pt-BR")

        assert result.topic == "Rust"
        assert result.questions[0].options[2].weight == 5

    @pytest.mark.asyncio
    async def test_failure_propagates(self):
        ai = FakeAIProvider({QuestionSet: AIResponseError("bad")})

        with pytest.raises(AIResponseError):
            await QuestionService(ai).generate_questions("Rust")


class TestInsightService:
    @pytest.mark.asyncio
    async def test_unknown_sources_filtered(self):
        ai = FakeAIProvider({Insights: {
            "insightText": "Você aprende melhor praticando.",
            "recommendedSources": ["GitHub", "podcasts", "youtube", "github"],
        }})

        insights = await InsightService(ai).generate_insights(["beginner"], "Rust")

        assert insights.recommendedSources == ["github", "youtube"]

    @pytest.mark.asyncio
    async def test_failure_returns_fallback(self):
        ai = FakeAIProvider({Insights: RuntimeError("down")})

        insights = await InsightService(ai).generate_insights(["beginner"], "Rust")

        assert insights.insightText == FALLBACK_INSIGHT
        assert insights.recommendedSources == []
