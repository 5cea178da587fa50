"""Shared test fixtures for Blimari backend tests."""

import pytest
from typing import Any, Dict, List, Optional, Type
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from common.ai import AIProvider
from blimari.schemas.content import ContentItem


class FakeAIProvider(AIProvider):
    """
    AIProvider that answers generate_json from canned replies.

    replies maps a schema class to a dict (validated into the schema),
    a model instance, or an exception instance to raise.
    """

    def __init__(self, replies: Optional[Dict[type, Any]] = None):
        self.replies = replies or {}
        self.prompts: List[str] = []

    async def generate_text(self, prompt, system_prompt=None, max_tokens=2048, temperature=0.7, **kwargs):
        self.prompts.append(prompt)
        return "ok"

    async def generate_json(self, prompt, schema: Type, system_prompt=None, max_tokens=4096, temperature=0.3, **kwargs):
        self.prompts.append(prompt)
        reply = self.replies.get(schema)
        if reply is None:
            raise RuntimeError(f"No canned reply for {schema.__name__}")
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return schema.model_validate(reply)
        return reply


def make_item(item_id: str, source: str = "youtube", rating: Optional[float] = None, **fields) -> ContentItem:
    defaults = {
        "youtube": "video",
        "github": "repository",
        "web": "article",
        "books": "book",
    }
    return ContentItem(
        id=item_id,
        title=fields.pop("title", f"Item {item_id}"),
        description=fields.pop("description", f"About {item_id}"),
        url=fields.pop("url", f"https://example.com/{item_id}"),
        source=source,
        type=fields.pop("type", defaults.get(source, "article")),
        rating=rating,
        **fields,
    )


@pytest.fixture
def sample_user_id():
    return "stack-user-1"


@pytest.fixture
def sample_path_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # update_one etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_items():
    return [
        make_item("yt1", "youtube", rating=4.2, duration=12),
        make_item("yt2", "youtube", rating=3.0, duration=8),
        make_item("gh1", "github", rating=4.8, duration=5),
    ]


@pytest.fixture
def sample_path_doc(sample_user_id, sample_path_id):
    return {
        "_id": ObjectId(sample_path_id),
        "userId": sample_user_id,
        "title": "Trilha de Rust",
        "topic": "Rust",
        "difficulty": "beginner",
        "description": "Uma trilha",
        "status": "active",
        "totalContent": 3,
        "completedContent": 0,
        "progress": 0,
        "organizedTrail": {
            "organizedTrail": [
                {"sectionTitle": "Fundamentos", "items": [
                    {"id": "yt2", "organizedDescription": "Comece aqui"},
                    {"id": "yt1", "organizedDescription": "Depois"},
                ]},
                {"sectionTitle": "Prática", "items": [
                    {"id": "gh1", "organizedDescription": "Pratique"},
                ]},
            ]
        },
        "content": [
            {"id": "yt1", "title": "Item yt1", "orderIndex": 1, "isCompleted": False},
            {"id": "yt2", "title": "Item yt2", "orderIndex": 0, "isCompleted": False},
            {"id": "gh1", "title": "Item gh1", "orderIndex": 2, "isCompleted": False},
        ],
    }
