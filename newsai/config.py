"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .database import Database
    from .ingestion import IngestionPipeline
    from .news_source import NewsClient
    from .providers import LLMProvider
    from .summarizer import Summarizer

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # LLM Provider configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Preferred provider: "openai" or "anthropic"
    # If not set, uses the first available key in order: OpenAI > Anthropic
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "")

    # Optional: override the default model for the selected provider
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30"))

    # News source
    NEWS_API_KEY: str = os.getenv("NEWS_API_KEY", "")
    NEWS_API_BASE_URL: str = os.getenv("NEWS_API_BASE_URL", "https://newsapi.org/v2")
    NEWS_API_TIMEOUT: float = float(os.getenv("NEWS_API_TIMEOUT", "30"))

    # Ingestion
    REFRESH_PAGE_SIZE: int = int(os.getenv("REFRESH_PAGE_SIZE", "20"))
    # Chance that a freshly ingested article is promoted to breaking news (0 disables)
    BREAKING_PROMOTION_RATE: float = float(os.getenv("BREAKING_PROMOTION_RATE", "0.1"))

    DB_PATH: Path = Path(os.getenv("DB_PATH", "./data/newsai.db"))
    PORT: int = int(os.getenv("PORT", "5000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Sessions
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "fallback-secret-for-development")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))  # 1 week
    SESSION_SECURE: bool = _parse_bool(os.getenv("SESSION_SECURE"), default=False)
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Demo admin credentials for /api/admin/login
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")

    # Rate limiting for the refresh endpoints (each refresh costs LLM calls)
    RATE_LIMIT_ENABLED: bool = _parse_bool(os.getenv("RATE_LIMIT_ENABLED"), default=True)
    REFRESH_RATE_LIMIT: str = os.getenv("REFRESH_RATE_LIMIT", "10/minute")


config = Config()


class AppState:
    """Shared application state."""
    db: "Database | None" = None
    provider: "LLMProvider | None" = None
    summarizer: "Summarizer | None" = None
    news_client: "NewsClient | None" = None
    pipeline: "IngestionPipeline | None" = None


state = AppState()


def get_db() -> "Database":
    """Dependency to get database instance."""
    if not state.db:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return state.db


def get_pipeline() -> "IngestionPipeline":
    """Dependency to get the ingestion pipeline."""
    if not state.pipeline:
        raise HTTPException(status_code=500, detail="Ingestion pipeline not initialized")
    return state.pipeline
