from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bank Account API"
    database_url: str = "sqlite:///bank_api.db"
    log_level: str = "INFO"

    # GET /account returns at most this many rows.
    account_page_size: int = 10
    account_number_upper_bound: int = 1_000_000_000
    account_number_attempts: int = 5
    lock_timeout_seconds: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
