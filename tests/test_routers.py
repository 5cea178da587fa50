"""HTTP-level tests for the API routers."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from conftest import FakeAIProvider, make_item
from api import app
from blimari import dependencies
from blimari.config import Settings
from blimari.schemas.ai import QuestionSet
from blimari.schemas.content import FilterDecision, OrganizedTrail
from blimari.services.ai import (
    FALLBACK_SECTION_TITLE,
    ContentFilterService,
    ContentOrganizerService,
    QuestionService,
)
from common.utils.exceptions import NotFoundException

USER = {"id": "stack-user-1", "email": "ana@example.com", "name": "Ana"}


@pytest.fixture
def overrides():
    app.dependency_overrides.clear()
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
def client(overrides):
    return TestClient(app)


@pytest.fixture
def authed(overrides):
    overrides[dependencies.require_auth] = lambda: USER
    return overrides


@pytest.fixture
def learning_paths(authed):
    service = MagicMock()
    authed[dependencies.get_learning_path_service] = lambda: service
    return service


# ─────────────────────────────────────────────────────────────────
# /api/ai
# ─────────────────────────────────────────────────────────────────


class TestAIRoutes:
    def test_questions_require_topic(self, client, overrides):
        overrides[dependencies.get_question_service] = lambda: QuestionService(FakeAIProvider())

        response = client.post("/api/ai/questions", json={"topic": "  "})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": {"message": "Tópico é obrigatório", "code": "TOPIC_REQUIRED"},
        }

    def test_questions_failure_is_500(self, client, overrides):
        ai = FakeAIProvider({QuestionSet: RuntimeError("down")})
        overrides[dependencies.get_question_service] = lambda: QuestionService(ai)

        response = client.post("/api/ai/questions", json={"topic": "Rust"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "QUESTION_GENERATION_FAILED"

    def test_insights_missing_answers(self, client, overrides):
        overrides[dependencies.get_insight_service] = lambda: MagicMock()

        response = client.post("/api/ai/insights", json={"topic": "Rust", "answers": []})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_PARAMETERS"


# ─────────────────────────────────────────────────────────────────
# /api/content
# ─────────────────────────────────────────────────────────────────


class TestContentRoutes:
    def test_discover_ranks_and_caps(self, client, overrides):
        discovery = MagicMock()
        discovery.discover = AsyncMock(return_value=[
            make_item("low", rating=1.0),
            make_item("high", rating=4.9),
            make_item("mid", rating=3.0),
        ])
        overrides[dependencies.get_discovery_service] = lambda: discovery
        overrides[dependencies.get_settings] = lambda: Settings(DISCOVERY_RESULT_LIMIT=2)

        response = client.post("/api/content/discover", json={"topic": "Rust", "sources": ["youtube"]})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["content"]] == ["high", "mid"]
        discovery.discover.assert_awaited_once_with("Rust", ["youtube"])

    def test_discover_ignores_credentials(self, client, overrides, monkeypatch):
        discovery = MagicMock()
        discovery.discover = AsyncMock(return_value=[])
        auth_provider = MagicMock()
        overrides[dependencies.get_discovery_service] = lambda: discovery
        monkeypatch.setattr(dependencies, "_auth_provider", auth_provider)

        response = client.post(
            "/api/content/discover",
            json={"topic": "Rust", "sources": ["youtube"], "userId": "stack-user-1"},
            headers={"Authorization": "Bearer session-token"},
            cookies={"stack-access": "session-token"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "content": []}
        auth_provider.verify_token.assert_not_called()

    def test_filter_fallback_still_200(self, client, overrides):
        ai = FakeAIProvider({FilterDecision: RuntimeError("HTTP 500")})
        overrides[dependencies.get_content_filter_service] = lambda: ContentFilterService(ai)

        response = client.post("/api/content/filter", json={
            "contentList": [make_item("a").model_dump(mode="json"), make_item("b").model_dump(mode="json")],
            "topic": "Rust",
            "answers": ["beginner"],
        })

        assert response.status_code == 200
        assert response.json() == {"success": True, "approvedContentIds": ["a", "b"]}

    def test_filter_missing_parameters(self, client, overrides):
        overrides[dependencies.get_content_filter_service] = lambda: MagicMock()

        response = client.post("/api/content/filter", json={"topic": "Rust"})

        assert response.status_code == 400

    def test_organize_fallback_single_section(self, client, overrides):
        ai = FakeAIProvider({OrganizedTrail: RuntimeError("down")})
        overrides[dependencies.get_content_organizer_service] = lambda: ContentOrganizerService(ai)

        response = client.post("/api/content/organize", json={
            "contentList": [make_item("a").model_dump(mode="json")],
            "topic": "Rust",
            "answers": [],
        })

        assert response.status_code == 200
        trail = response.json()["organizedTrail"]["organizedTrail"]
        assert trail[0]["sectionTitle"] == FALLBACK_SECTION_TITLE
        assert [item["id"] for item in trail[0]["items"]] == ["a"]

    def test_body_validation_error_envelope(self, client, overrides):
        overrides[dependencies.get_content_filter_service] = lambda: MagicMock()

        response = client.post("/api/content/filter", json={"contentList": [{"id": "x"}], "topic": "Rust", "answers": []})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


# ─────────────────────────────────────────────────────────────────
# /api/learning-paths
# ─────────────────────────────────────────────────────────────────


class TestLearningPathRoutes:
    def test_auth_required(self, client, overrides):
        overrides[dependencies.get_user_service] = lambda: MagicMock()
        overrides[dependencies.get_qloo_service] = lambda: MagicMock()
        overrides[dependencies.get_learning_path_service] = lambda: MagicMock()

        response = client.get("/api/learning-paths/next-lesson")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_REQUIRED"

    def test_progress_update(self, client, learning_paths):
        learning_paths.get_learning_path = AsyncMock(return_value={"id": "p1", "progress": 100})
        learning_paths.update_content_item_completion = AsyncMock(return_value=True)
        learning_paths.recompute_progress = AsyncMock(return_value={"progress": 100})

        response = client.post("/api/learning-paths/progress", json={
            "learningPathId": "p1", "contentId": "a", "isCompleted": True,
        })

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"id": "p1", "progress": 100},
            "message": "Progress updated successfully.",
        }
        learning_paths.update_content_item_completion.assert_awaited_once_with("p1", "a", True)

    def test_progress_update_requires_fields(self, client, learning_paths):
        response = client.post("/api/learning-paths/progress", json={"learningPathId": "p1"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_PARAMETERS"

    def test_next_lesson_none(self, client, learning_paths):
        learning_paths.find_next_lesson = AsyncMock(return_value=None)

        response = client.get("/api/learning-paths/next-lesson")

        assert response.status_code == 200
        assert response.json()["data"] is None

    def test_other_users_path_is_404(self, client, learning_paths):
        learning_paths.get_learning_path = AsyncMock(return_value=None)

        response = client.get("/api/learning-paths/507f1f77bcf86cd799439011")

        assert response.status_code == 404
        learning_paths.get_learning_path.assert_awaited_once_with(
            "507f1f77bcf86cd799439011", user_id=USER["id"]
        )

    def test_list_for_other_user_forbidden(self, client, learning_paths):
        response = client.get("/api/learning-paths", params={"userId": "someone-else"})

        assert response.status_code == 403

    def test_list_returns_bare_array(self, client, learning_paths):
        learning_paths.list_learning_paths = AsyncMock(return_value=[
            {"id": "p1", "userId": USER["id"], "title": "Trilha de Rust", "topic": "Rust", "progress": 33},
        ])

        response = client.get("/api/learning-paths", params={"userId": USER["id"]})

        body = response.json()
        assert [path["id"] for path in body] == ["p1"]
        assert body[0]["progress"] == 33
        assert body[0]["content"] == []

    def test_save_requires_trail(self, client, learning_paths):
        response = client.post("/api/learning-paths/save", json={
            "title": "T", "topic": "Rust", "difficulty": "beginner", "description": "d",
            "organizedTrail": {"organizedTrail": []},
        })

        assert response.status_code == 400

    def test_content_item_not_found(self, client, learning_paths):
        learning_paths.get_content_item = AsyncMock(return_value=None)

        response = client.get("/api/learning-paths/p1/ghost")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == NotFoundException().code


# ─────────────────────────────────────────────────────────────────
# /api/user
# ─────────────────────────────────────────────────────────────────


class TestUserRoutes:
    def test_sync_returns_user(self, client, authed):
        response = client.post("/api/user/sync")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == USER["id"]
        assert body["email"] == USER["email"]
        assert body["createdAt"] is None
