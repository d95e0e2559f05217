"""
Watcher configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Watcher settings loaded from environment variables."""
    
    # App
    APP_NAME: str = "build-watcher"
    LOG_LEVEL: str = "INFO"
    
    # AWS (empty region falls back to the boto3 default chain)
    AWS_REGION: str = ""
    # (connect + read) * attempts must stay below DEADLINE_SAFETY_MARGIN_SECONDS
    AWS_CONNECT_TIMEOUT_SECONDS: float = 5.0
    AWS_READ_TIMEOUT_SECONDS: float = 5.0
    AWS_MAX_ATTEMPTS: int = 2

    # Polling backoff
    POLL_BASE_SECONDS: float = 5.0
    POLL_INCREMENT_SECONDS: float = 1.0
    POLL_MAX_SECONDS: float = 30.0
    
    # Deadline
    DEADLINE_SAFETY_MARGIN_SECONDS: float = 30.0
    DEADLINE_FLOOR_SECONDS: float = 10.0
    DEFAULT_BUDGET_SECONDS: float = 900.0  # Lambda max when no context is given
    
    # Diagnostics
    LOG_TAIL_LINES: int = 10
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"



@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
