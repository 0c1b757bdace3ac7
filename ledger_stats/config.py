"""
Configuration settings for ledger-stats.

Uses Pydantic Settings to load environment variables (and an optional `.env`
file) for logging, ledger ingestion and report defaults. The aggregation engine
itself reads none of these; the CLI and orchestrator pass them in explicitly.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger_stats.dimensions.calendar import MonthBucketing


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Ledger ingestion
    ledger_path: Path = Field(Path("data/transactions.csv"), alias="LEDGER_PATH")
    ledger_date_format: str = Field("%m/%d/%Y", alias="LEDGER_DATE_FORMAT")
    ledger_strict: bool = Field(False, alias="LEDGER_STRICT")

    # Report defaults
    iqr_multiplier: float = Field(1.5, ge=0, alias="IQR_MULTIPLIER")
    month_bucketing: MonthBucketing = Field(MonthBucketing.MONTH_ONLY, alias="MONTH_BUCKETING")
    report_top_n: int = Field(10, ge=1, alias="REPORT_TOP_N")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
