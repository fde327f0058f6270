"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_QUIZ_TOPICS = ["Aptitude", "DSA-PLAN", "HR", "OS", "DBMS", "CN", "REACT JS"]


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_hub"
    mongodb_timeout_ms: int = 5000

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 30

    # Uploads (PDF notes, profile pictures)
    upload_dir: str = "uploads"
    max_upload_size_mb: int = 10

    # Quizzes
    timed_quiz_size: int = 5
    quiz_topics: List[str] = DEFAULT_QUIZ_TOPICS

    # Seeded moderator account (created on startup when both are set)
    default_moderator_username: Optional[str] = None
    default_moderator_password: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # text or json

    # App
    debug: bool = False
    cors_origins: List[str] = ["*"]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
