from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True)

    # Level handed to the stdlib root logger and structlog's filter
    log_level: str = Field("WARNING", alias="PUBSUB_LOG_LEVEL")

    # JSON lines when true, human-readable console output otherwise
    log_json: bool = Field(True, alias="PUBSUB_LOG_JSON")


@lru_cache
def get_settings() -> Settings:
    return Settings()
