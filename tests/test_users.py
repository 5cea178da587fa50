"""Unit tests for user sync, user records and cultural profiles."""

import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from blimari.pipelines.users import ensure_cultural_profile, sync_user_pipeline
from blimari.services.qloo_service import QlooService
from blimari.services.user import UserService


IDENTITY = {
    "id": "stack-new",
    "email": "Ana@Example.com",
    "name": "Ana",
    "avatarUrl": "https://img/ana.png",
}


def mock_user_service(user=None, by_email=None, relinked=None, profile=None):
    service = MagicMock()
    service.get_user = AsyncMock(return_value=user)
    service.get_user_by_email = AsyncMock(return_value=by_email)
    service.relink_user = AsyncMock(return_value=relinked)
    service.create_user = AsyncMock(side_effect=lambda **kwargs: {"id": kwargs["user_id"], "email": kwargs["email"]})
    service.get_cultural_profile = AsyncMock(return_value=profile)
    service.create_cultural_profile = AsyncMock(side_effect=lambda p: p)
    return service


def mock_qloo(configured=True, error=None):
    qloo = MagicMock()
    qloo.is_configured = configured
    qloo.create_taste_profile = AsyncMock(
        side_effect=error,
        return_value={"id": "qloo-profile-stack-new", "userId": "stack-new"},
    )
    return qloo


# ─────────────────────────────────────────────────────────────────
# sync_user_pipeline
# ─────────────────────────────────────────────────────────────────


class TestSyncUserPipeline:
    @pytest.mark.asyncio
    async def test_known_user_returned_unchanged(self):
        users = mock_user_service(user={"id": "stack-new"})
        qloo = mock_qloo()

        user = await sync_user_pipeline(users, qloo, IDENTITY)

        assert user == {"id": "stack-new"}
        users.create_user.assert_not_awaited()
        qloo.create_taste_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_sight_creates_user_and_profile(self):
        users = mock_user_service()
        qloo = mock_qloo()

        user = await sync_user_pipeline(users, qloo, IDENTITY)

        assert user["id"] == "stack-new"
        users.create_user.assert_awaited_once_with(
            user_id="stack-new", email="Ana@Example.com", name="Ana", avatar_url="https://img/ana.png",
        )
        users.create_cultural_profile.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_known_email_is_relinked(self):
        users = mock_user_service(by_email={"id": "stack-old"}, relinked={"id": "stack-new"})

        user = await sync_user_pipeline(users, None, IDENTITY)

        assert user == {"id": "stack-new"}
        users.relink_user.assert_awaited_once_with("stack-old", "stack-new", "Ana")
        users.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_profile_failure_does_not_block_sync(self):
        users = mock_user_service()
        qloo = mock_qloo(error=httpx.ConnectError("down"))

        user = await sync_user_pipeline(users, qloo, IDENTITY)

        assert user["id"] == "stack-new"
        users.create_cultural_profile.assert_not_awaited()


class TestEnsureCulturalProfile:
    @pytest.mark.asyncio
    async def test_unconfigured_qloo_skipped(self):
        users = mock_user_service()

        assert await ensure_cultural_profile(users, mock_qloo(configured=False), {"id": "u"}) is None
        users.get_cultural_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_profile_kept(self):
        users = mock_user_service(profile={"id": "p", "userId": "u"})
        qloo = mock_qloo()

        assert await ensure_cultural_profile(users, qloo, {"id": "u"}) == {"id": "p", "userId": "u"}
        qloo.create_taste_profile.assert_not_awaited()


# ─────────────────────────────────────────────────────────────────
# UserService
# ─────────────────────────────────────────────────────────────────


class TestUserService:
    @pytest.mark.asyncio
    async def test_create_user_lowercases_email(self, mock_db, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        user = await UserService(mock_db).create_user("stack-new", email="Ana@Example.com", name="Ana")

        doc = mock_collection.insert_one.call_args[0][0]
        assert doc["email"] == "ana@example.com"
        assert user["id"] == "stack-new"

    @pytest.mark.asyncio
    async def test_create_user_race_returns_stored(self, mock_db, mock_collection):
        mock_collection.insert_one.side_effect = DuplicateKeyError("E11000")
        mock_collection.find_one.return_value = {"id": "stack-new", "email": "ana@example.com"}

        user = await UserService(mock_db).create_user("stack-new", email="ana@example.com")

        assert user["email"] == "ana@example.com"

    @pytest.mark.asyncio
    async def test_relink_moves_owned_documents(self, mock_db, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        mock_collection.find_one.return_value = {"id": "stack-new", "email": "ana@example.com"}

        user = await UserService(mock_db).relink_user("stack-old", "stack-new", name="Ana")

        assert user["id"] == "stack-new"
        assert mock_collection.update_many.await_count == 2
        for call in mock_collection.update_many.call_args_list:
            assert call[0] == ({"userId": "stack-old"}, {"$set": {"userId": "stack-new"}})

    @pytest.mark.asyncio
    async def test_relink_unknown_user(self, mock_db, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)

        assert await UserService(mock_db).relink_user("ghost", "stack-new") is None
        mock_collection.update_many.assert_not_awaited()


# ─────────────────────────────────────────────────────────────────
# QlooService
# ─────────────────────────────────────────────────────────────────


class TestQlooService:
    @pytest.mark.asyncio
    async def test_create_taste_profile(self):
        def handler(request):
            assert request.method == "POST"
            assert request.url.path == "/v1/users/profile"
            assert request.headers["Authorization"] == "Bearer qkey"
            return httpx.Response(200, json={"profileId": "p-1", "tasteId": "t-1"})

        qloo = QlooService("qkey", "https://qloo.test/v1/", transport=httpx.MockTransport(handler))
        profile = await qloo.create_taste_profile({"id": "u1", "email": "a@b.c"})

        assert profile["id"] == "p-1"
        assert profile["qlooTasteId"] == "t-1"
        assert profile["userId"] == "u1"

    @pytest.mark.asyncio
    async def test_defaults_ids_when_missing(self):
        qloo = QlooService(
            "qkey", "https://qloo.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )
        profile = await qloo.create_taste_profile({"id": "u1"})

        assert profile["id"] == "qloo-profile-u1"
        assert profile["qlooTasteId"] == "qloo-taste-u1"

    @pytest.mark.asyncio
    async def test_insights_failure_returns_empty(self):
        qloo = QlooService(
            "qkey", "https://qloo.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
        )
        assert await qloo.get_cultural_insights("t-1") == {}

    @pytest.mark.asyncio
    async def test_unconfigured_raises_on_create(self):
        with pytest.raises(RuntimeError):
            await QlooService(None, None).create_taste_profile({"id": "u1"})
