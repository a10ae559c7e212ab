"""
Configuration management for the AI Readiness Auditor.

All environment variables are loaded here with their default values.
Every setting is optional.
"""

from pydantic_settings import BaseSettings

from models.enums import CONTENT_WEIGHTS, INTEGRATION_WEIGHTS


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment Variable Reference:
    - DEBUG: enable debug logging and uvicorn reload
    - MAX_WORKERS: threads used to analyze pages concurrently
    - MAX_PAGES: largest page set accepted by POST /audit/analyze
    """

    # Application settings
    app_name: str = "AI Readiness Auditor"
    app_version: str = "1.0.0"
    debug: bool = False

    # Pipeline settings
    max_workers: int = 4
    max_pages: int = 50

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_service_status() -> dict:
    """
    Returns the configuration of the analysis pipeline.
    Used by the health endpoint.
    """
    return {
        "content_categories": len(CONTENT_WEIGHTS),
        "archetypes": [archetype.value for archetype in INTEGRATION_WEIGHTS],
        "max_workers": settings.max_workers,
        "max_pages": settings.max_pages,
    }
