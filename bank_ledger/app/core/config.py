from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bank Ledger API"
    database_url: str = "sqlite:///bank_ledger.db"
    database_echo: bool = False
    log_level: str = "INFO"

    account_number_min: int = 100000
    account_number_max: int = 999999
    account_number_max_attempts: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_LEDGER_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
