"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        WORKOUT_XP_REWARD: int = 50

    settings = Settings()
    print(settings.AI_PROVIDER)
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
    # State Store Settings
    # ==========================================================================
    STATE_STORE: str = "memory"  # "memory" or "mongodb"
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "fitcoach"
    STATE_COLLECTION: str = "state"

    # ==========================================================================
    # Remote Agent Settings
    # ==========================================================================
    AI_PROVIDER: str = "agixt"  # "agixt", "claude" or "openai"
    AI_MAX_TOKENS: int = 4000
    AI_TEMPERATURE: float = 0.7

    # AGiXT Settings (used when AI_PROVIDER = "agixt")
    AGIXT_URI: Optional[str] = None
    AGIXT_API_KEY: Optional[str] = None
    AGIXT_AGENT_NAME: str = "WorkoutAgent"
    AGIXT_CONTEXT_RESULTS: int = 4

    # Claude Settings (used when AI_PROVIDER = "claude")
    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    # OpenAI Settings (used when AI_PROVIDER = "openai")
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"

    # ==========================================================================
    # Runtime Settings
    # ==========================================================================
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

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

        if self.AI_PROVIDER == "agixt" and not self.AGIXT_URI:
            errors.append("AGIXT_URI is required when using the AGiXT agent")

        if self.AI_PROVIDER == "claude" and not self.CLAUDE_API_KEY:
            errors.append("CLAUDE_API_KEY is required when using Claude AI")

        if self.AI_PROVIDER == "openai" and not self.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY is required when using OpenAI")

        if self.AI_PROVIDER not in ("agixt", "claude", "openai"):
            errors.append(f"Unknown AI_PROVIDER: {self.AI_PROVIDER}")

        if self.STATE_STORE not in ("memory", "mongodb"):
            errors.append(f"Unknown STATE_STORE: {self.STATE_STORE}")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
