"""Runtime configuration read from the environment or a local ``.env`` file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_base_url: str = Field(default="http://localhost:8000", validation_alias="QUIZ_API_BASE_URL")
    api_token: str | None = Field(default=None, validation_alias="QUIZ_API_TOKEN")

    http_timeout_connect: float = Field(default=4.0, validation_alias="QUIZ_HTTP_TIMEOUT_CONNECT")
    http_timeout_read: float = Field(default=15.0, validation_alias="QUIZ_HTTP_TIMEOUT_READ")
    load_max_attempts: int = Field(default=3, validation_alias="QUIZ_LOAD_MAX_ATTEMPTS")
    load_retry_backoff_seconds: float = Field(default=0.35, validation_alias="QUIZ_LOAD_RETRY_BACKOFF_SECONDS")

    log_level: str = Field(default="INFO", validation_alias="QUIZ_LOG_LEVEL")
    offline_quiz_file: str | None = Field(default=None, validation_alias="QUIZ_OFFLINE_FILE")


settings = Settings()
