from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    openai_base_url: Optional[str] = None
    openai_temperature: float = 0.0

    log_level: str = "INFO"
    log_file: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
