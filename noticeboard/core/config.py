from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_url: str = Field(default="http://localhost:3003", alias="BOARD_API_URL")
    api_key: str = Field(default="", alias="BOARD_API_KEY")
    # None keeps the transport's own default timeout.
    request_timeout: float | None = Field(default=None, alias="BOARD_REQUEST_TIMEOUT")

    toggle_enabled: bool = Field(default=True, alias="BOARD_TOGGLE_ENABLED")
    timezone: str = Field(default="Asia/Shanghai", alias="BOARD_TIMEZONE")

    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    stats_enabled: bool = Field(default=True, alias="STATS_ENABLED")


@lru_cache
def get_settings() -> Settings:
    return Settings()
