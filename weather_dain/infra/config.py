from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    weather_api_url: str = Field(
        default=DEFAULT_WEATHER_API_URL, validation_alias="WEATHER_API_URL"
    )
    weather_timeout_seconds: float = Field(
        default=10.0, validation_alias="WEATHER_TIMEOUT_SECONDS"
    )
    history_store: str = Field(default="memory", validation_alias="HISTORY_STORE")
    history_context_limit: int = Field(
        default=5, validation_alias="HISTORY_CONTEXT_LIMIT"
    )
    service_host: str = Field(default="0.0.0.0", validation_alias="SERVICE_HOST")
    service_port: int = Field(default=2022, validation_alias="SERVICE_PORT")
    dain_api_key: Optional[str] = Field(default=None, validation_alias="DAIN_API_KEY")
    log_path: Optional[str] = Field(default=None, validation_alias="LOG_PATH")

    @field_validator("history_store", mode="after")
    @classmethod
    def normalize_history_store(cls, value: str) -> str:
        return value.lower() if value else value

    @field_validator("history_context_limit", mode="after")
    @classmethod
    def clamp_history_context_limit(cls, value: int) -> int:
        return max(1, int(value))


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
