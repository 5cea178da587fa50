"""
FastAPI dependencies for Blimari application.

Provides dependency injection for all services. Services are created once
at startup by init_all_services() and handed to route handlers through
the get_* functions.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.ai import AIProvider, ClaudeProvider, GeminiProvider
from common.auth import (
    AuthProvider,
    JWTAuth,
    StackAuth,
    create_auth_dependency,
)

from blimari.config import Settings, settings as default_settings

# Content sources
from blimari.services.sources import (
    BooksSource,
    GitHubSource,
    WebSearchSource,
    YouTubeSource,
)

# Cultural profiles
from blimari.services.qloo_service import QlooService

# Content discovery
from blimari.services.content import DiscoveryService

# AI curation
from blimari.services.ai import (
    ContentFilterService,
    ContentOrganizerService,
    InsightService,
    QuestionService,
)

# Persistence
from blimari.services.learning_path import LearningPathService
from blimari.services.user import UserService

from blimari.pipelines.users import sync_user_pipeline

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Providers
_auth_provider: Optional[AuthProvider] = None

# Content
_qloo_service: Optional[QlooService] = None
_discovery_service: Optional[DiscoveryService] = None

# AI
_question_service: Optional[QuestionService] = None
_insight_service: Optional[InsightService] = None
_content_filter_service: Optional[ContentFilterService] = None
_content_organizer_service: Optional[ContentOrganizerService] = None

# Persistence
_learning_path_service: Optional[LearningPathService] = None
_user_service: Optional[UserService] = None

_settings: Settings = default_settings


# ─────────────────────────────────────────────────────────────────
# Provider factories
# ─────────────────────────────────────────────────────────────────

def create_ai_provider(config: Settings) -> AIProvider:
    """Build the configured AI provider."""
    if config.AI_PROVIDER == "claude":
        return ClaudeProvider(api_key=config.CLAUDE_API_KEY, model=config.CLAUDE_MODEL)
    return GeminiProvider(api_key=config.GEMINI_API_KEY, model=config.GEMINI_MODEL)


def create_auth_provider(config: Settings) -> AuthProvider:
    """Build the configured auth provider."""
    if config.AUTH_PROVIDER == "jwt":
        return JWTAuth(secret=config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)
    return StackAuth(
        project_id=config.STACK_PROJECT_ID or "",
        secret_server_key=config.STACK_SECRET_SERVER_KEY or "",
        api_url=config.STACK_API_URL,
    )


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_content_services(config: Settings) -> None:
    """
    Initialize content sources, discovery and cultural profiles.

    Args:
        config: Application settings
    """
    global _qloo_service, _discovery_service

    timeout = config.HTTP_TIMEOUT_SECONDS

    sources = {
        "youtube": YouTubeSource(api_key=config.YOUTUBE_API_KEY, timeout=timeout),
        "github": GitHubSource(token=config.GITHUB_TOKEN, timeout=timeout),
        "web": WebSearchSource(
            api_key=config.GOOGLE_CUSTOM_SEARCH_API_KEY,
            cx=config.GOOGLE_CUSTOM_SEARCH_CX,
            timeout=timeout,
        ),
        "books": BooksSource(api_key=config.GOOGLE_BOOKS_API_KEY, timeout=timeout),
    }

    for name, source in sources.items():
        if not source.is_configured:
            logger.warning(f"Content source '{name}' is not configured and will return no items")

    _discovery_service = DiscoveryService(
        sources=sources,
        per_source_limit=config.DISCOVERY_PER_SOURCE_LIMIT,
    )

    _qloo_service = QlooService(
        api_key=config.QLOO_API_KEY,
        base_url=config.QLOO_BASE_URL,
        timeout=timeout,
    )
    if not _qloo_service.is_configured:
        logger.warning("Qloo is not configured; users will have no cultural profile")


def init_ai_services(ai_provider: AIProvider) -> None:
    """
    Initialize AI curation services.

    Args:
        ai_provider: Provider shared by all AI services
    """
    global _question_service, _insight_service
    global _content_filter_service, _content_organizer_service

    _question_service = QuestionService(ai_provider)
    _insight_service = InsightService(ai_provider)
    _content_filter_service = ContentFilterService(ai_provider)
    _content_organizer_service = ContentOrganizerService(ai_provider)


def init_persistence_services(db: AsyncIOMotorDatabase) -> None:
    """
    Initialize database-backed services.

    Args:
        db: MongoDB database connection
    """
    global _learning_path_service, _user_service

    _learning_path_service = LearningPathService(db=db)
    _user_service = UserService(db=db)


def init_auth_services(auth_provider: AuthProvider) -> None:
    """Initialize the auth provider."""
    global _auth_provider
    _auth_provider = auth_provider


def init_all_services(
    db: AsyncIOMotorDatabase,
    config: Optional[Settings] = None,
    ai_provider: Optional[AIProvider] = None,
    auth_provider: Optional[AuthProvider] = None,
) -> None:
    """
    Initialize all services.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        config: Settings (defaults to the global settings)
        ai_provider: Override for the configured AI provider
        auth_provider: Override for the configured auth provider
    """
    global _settings

    _settings = config or default_settings

    init_persistence_services(db)
    init_content_services(_settings)
    init_ai_services(ai_provider or create_ai_provider(_settings))
    init_auth_services(auth_provider or create_auth_provider(_settings))

    logger.info(
        f"Services initialized (ai={_settings.AI_PROVIDER}, auth={_settings.AUTH_PROVIDER})"
    )


# ─────────────────────────────────────────────────────────────────
# Service getters
# ─────────────────────────────────────────────────────────────────

def get_settings() -> Settings:
    """Get active settings."""
    return _settings


def get_auth_provider() -> AuthProvider:
    """Get auth provider."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized. Call init_all_services first.")
    return _auth_provider


def get_qloo_service() -> QlooService:
    """Get Qloo service instance."""
    if _qloo_service is None:
        raise RuntimeError("Content services not initialized. Call init_all_services first.")
    return _qloo_service


def get_discovery_service() -> DiscoveryService:
    """Get discovery service instance."""
    if _discovery_service is None:
        raise RuntimeError("Content services not initialized. Call init_all_services first.")
    return _discovery_service


def get_question_service() -> QuestionService:
    """Get question service instance."""
    if _question_service is None:
        raise RuntimeError("AI services not initialized. Call init_all_services first.")
    return _question_service


def get_insight_service() -> InsightService:
    """Get insight service instance."""
    if _insight_service is None:
        raise RuntimeError("AI services not initialized. Call init_all_services first.")
    return _insight_service


def get_content_filter_service() -> ContentFilterService:
    """Get content filter service instance."""
    if _content_filter_service is None:
        raise RuntimeError("AI services not initialized. Call init_all_services first.")
    return _content_filter_service


def get_content_organizer_service() -> ContentOrganizerService:
    """Get content organizer service instance."""
    if _content_organizer_service is None:
        raise RuntimeError("AI services not initialized. Call init_all_services first.")
    return _content_organizer_service


def get_learning_path_service() -> LearningPathService:
    """Get learning path service instance."""
    if _learning_path_service is None:
        raise RuntimeError("Persistence services not initialized. Call init_all_services first.")
    return _learning_path_service


def get_user_service() -> UserService:
    """Get user service instance."""
    if _user_service is None:
        raise RuntimeError("Persistence services not initialized. Call init_all_services first.")
    return _user_service


# ─────────────────────────────────────────────────────────────────
# Auth dependencies
# ─────────────────────────────────────────────────────────────────

async def get_identity(request: Request) -> Dict[str, Any]:
    """Verified caller identity (raises 401 without a valid token)."""
    dependency = create_auth_dependency(
        get_auth_provider, cookie_name=get_settings().AUTH_COOKIE_NAME
    )
    return await dependency(request)


async def require_auth(
    identity: Annotated[Dict[str, Any], Depends(get_identity)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    qloo_service: Annotated[QlooService, Depends(get_qloo_service)],
) -> Dict[str, Any]:
    """
    Dependency that requires authentication.

    The local user record is created on the first authenticated request.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Annotated[dict, Depends(require_auth)]):
            return {"user_id": user["id"]}
    """
    return await sync_user_pipeline(user_service, qloo_service, identity)
