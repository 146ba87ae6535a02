"""Application configuration management."""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    PROJECT_NAME: str = "EcoScan"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")

    DATABASE_URL: str = Field(
        "sqlite:///./ecoscan.db",
        description="SQLAlchemy database URL",
    )

    REDIS_URL: Optional[AnyUrl] = Field(
        None, description="Redis connection string for cache and Celery"
    )

    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Gamification rules
    LEADERBOARD_SIZE: int = Field(5, ge=1, description="Entries returned by the leaderboard")
    LEADERBOARD_CACHE_TTL_SECONDS: int = Field(
        60, ge=0, description="Upper bound on leaderboard snapshot age"
    )
    RECYCLE_MASTER_THRESHOLD: int = Field(
        5, ge=1, description="Recycle classifications needed for 'Recycle Master' (10 in the extended variant)"
    )
    COMPOST_KING_THRESHOLD: int = Field(
        3, ge=1, description="Compost classifications needed for 'Compost King' (5 in the extended variant)"
    )
    DAILY_CHALLENGE_TARGET: int = Field(3, ge=1, description="Classifications per day for the daily bonus")
    DAILY_CHALLENGE_BONUS: int = Field(50, ge=0, description="Points granted by the daily bonus")
    CHALLENGE_RETENTION_DAYS: int = Field(
        30, ge=1, description="Days of challenge pools kept before pruning"
    )

    CELERY_BROKER_URL: Optional[AnyUrl] = None
    CELERY_RESULT_BACKEND: Optional[AnyUrl] = None

    # Client side
    API_BASE_URL: str = Field("http://localhost:8000", description="Backend used by the client")
    API_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout for client HTTP calls")
    LOCAL_CACHE_PATH: Path = Field(
        Path.home() / ".ecoscan" / "state.json",
        description="Local bookkeeping cache used by the client",
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


settings = get_settings()
