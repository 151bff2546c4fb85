"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""

    # Database (in-memory, rebuilt on every start)
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    SEED_DEMO_DATA: bool = True

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # Scheduling
    TIMEZONE: str = "Asia/Kolkata"
    SCHEDULER_ENABLED: bool = True
    BOOKING_SWEEP_INTERVAL_MINUTES: int = 15

    # Slot manager defaults (hourly, 24h clock, end exclusive)
    DEFAULT_SLOT_START_HOUR: int = 7
    DEFAULT_SLOT_END_HOUR: int = 12

    # Review summarizer
    LLM_API_BASE_URL: str = "https://api.openai.com/v1"
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
