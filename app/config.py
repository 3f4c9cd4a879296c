from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings with validation.

    All sensitive values should be provided via environment variables.
    """

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # CORS - comma-separated origins or * for development
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma-separated list of allowed origins, or * for all (dev only)"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./soulbuddy.db",
        description="SQLAlchemy database URL"
    )

    # Text generation provider (OpenAI-compatible chat completions)
    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model")
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Base URL for an OpenAI-compatible endpoint"
    )
    llm_temperature: float = Field(default=0.7, description="Sampling temperature")
    llm_max_tokens: int = Field(default=2000, description="Max output tokens per reading")
    llm_timeout_seconds: float = Field(
        default=30.0, description="Transport timeout for the chat completion call"
    )

    # Readings
    reading_redirect_base: str = Field(
        default="/reading",
        description="Path prefix the client is redirected to after signup"
    )

    # Misc
    log_level: str = "INFO"
    log_json: bool = False
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v.lower()

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        # Hosted Postgres providers still hand out the legacy scheme
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that required settings are properly configured in production."""
        if self.environment != "production":
            return self

        errors = []

        if self.cors_origins == "*":
            errors.append("CORS_ORIGINS must not be '*' in production")

        if not self.openai_api_key:
            errors.append("OPENAI_API_KEY must be set in production")

        if errors:
            raise ValueError(
                "Production configuration errors:\n- " + "\n- ".join(errors)
            )

        return self

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
