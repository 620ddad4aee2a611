from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``CALC_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="CALC_", env_file=".env",
                                      env_file_encoding="utf-8", extra="ignore")

    # engine
    max_depth: int = 200

    # logging
    log_level: str = "WARNING"

    # web
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    # repl
    history_file: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
