from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

    # LLM / CrewAI configuration
    OPENAI_API_KEY: str | None = None
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_BASE_URL: str = Field(default="https://openrouter.ai/api/v1")

    MODEL_PROVIDER: str = Field(default="openrouter")
    MODEL_NAME: str | None = Field(default=None, description="Model name; the provider default is used when unset")

    # Google Vertex AI / Gemini
    GOOGLE_PROJECT_ID: str | None = Field(default=None, description="Google Cloud project ID for Vertex AI")
    GOOGLE_LOCATION: str = Field(default="us-central1", description="Google Cloud region for Vertex AI")
    GOOGLE_APPLICATION_CREDENTIALS: str | None = Field(default=None, description="Path to service account JSON")
    GEMINI_API_KEY: str | None = Field(default=None, description="Gemini API key (AI Studio)")

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Runtime
    OUTPUT_DIR: str = Field(default="./output", description="Root directory for generated projects")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    SITEWRIGHT_ENV: str = Field(default="dev")
    DEBUG: bool = Field(default=False)

    # Build loop
    MAX_BUILD_ATTEMPTS: int = Field(default=3, description="Builder/Auditor attempts per session")
    BUILDER_COMMAND: str = Field(default="aider", description="Executable of the local coding agent")

    def validate_production_config(self) -> None:
        """Validate configuration for production environments.

        Raises:
            RuntimeError: If configuration is invalid
        """
        if self.SITEWRIGHT_ENV != "production":
            return

        if "*" in self.CORS_ALLOW_ORIGINS:
            raise RuntimeError(
                "CRITICAL: CORS_ALLOW_ORIGINS cannot be '*' in production. "
                "Specify exact origins."
            )

        if self.MAX_BUILD_ATTEMPTS < 1:
            raise RuntimeError("CRITICAL: MAX_BUILD_ATTEMPTS must be at least 1")


settings = Settings()
