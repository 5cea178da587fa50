"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        # App-specific settings
        YOUTUBE_API_KEY: Optional[str] = None

    settings = Settings()
    print(settings.DATABASE_URL)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # Database Settings
    # ==========================================================================
    DATABASE_URL: str = ""
    DATABASE_NAME: str = "blimari"

    # ==========================================================================
    # Authentication Settings
    # ==========================================================================
    AUTH_PROVIDER: str = "stack"  # "stack" or "jwt"
    AUTH_COOKIE_NAME: str = "stack-access"

    # JWT Settings (used when AUTH_PROVIDER = "jwt")
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"

    # Stack Auth Settings (used when AUTH_PROVIDER = "stack")
    STACK_API_URL: str = "https://api.stack-auth.com"
    STACK_PROJECT_ID: Optional[str] = None
    STACK_SECRET_SERVER_KEY: Optional[str] = None

    # ==========================================================================
    # AI Settings
    # ==========================================================================
    AI_PROVIDER: str = "gemini"  # "gemini" or "claude"

    # Gemini Settings (used when AI_PROVIDER = "gemini")
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash-lite"

    # Claude Settings (used when AI_PROVIDER = "claude")
    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # CORS Settings
    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # ==========================================================================
    # Internationalization
    # ==========================================================================
    DEFAULT_LANGUAGE: str = "pt-BR"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        """Parse CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if not self.DATABASE_URL:
            errors.append("DATABASE_URL is required")

        # Check auth provider requirements
        if self.AUTH_PROVIDER == "jwt" and not self.JWT_SECRET:
            errors.append("JWT_SECRET is required when using JWT authentication")

        if self.AUTH_PROVIDER == "stack" and not (
            self.STACK_PROJECT_ID and self.STACK_SECRET_SERVER_KEY
        ):
            errors.append(
                "STACK_PROJECT_ID and STACK_SECRET_SERVER_KEY are required "
                "when using Stack Auth"
            )

        # Check AI provider requirements
        if self.AI_PROVIDER == "gemini" and not self.GEMINI_API_KEY:
            errors.append("GEMINI_API_KEY is required when using Gemini")

        if self.AI_PROVIDER == "claude" and not self.CLAUDE_API_KEY:
            errors.append("CLAUDE_API_KEY is required when using Claude")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
