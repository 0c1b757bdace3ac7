"""
Pytest configuration for ledger-stats.

Provides fixtures for:
- A small hand-checked ledger spanning several regions, domains and years
- The reference value list used by the median/percentile examples
- CSV ledgers written to a temporary directory
- Settings isolation between tests
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Callable, List

import pytest

from ledger_stats.config import get_settings
from ledger_stats.domain.models import Transaction

SAMPLE_VALUES = [12, 7, 22, 15, 9, 30, 18, 5, 14, 10]

LEDGER_CSV = """Date,Domain,Location,Value,Transaction_count
01/05/2022,RESTAURANT,Goa,100,10
01/05/2022,RETAIL,Mumbai,400,40
01/20/2022,restraunt,Goa,300,30
02/03/2022,MEDICAL,Delhi,250,25
01/07/2023,RETAIL,Goa,50,5
02/03/2022,RESTAURANT,Mumbai,200,20
"""


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """
    Make every test see default settings, regardless of the caller's environment.
    """
    for name in (
        "LOG_LEVEL",
        "LOG_JSON",
        "LEDGER_PATH",
        "LEDGER_DATE_FORMAT",
        "LEDGER_STRICT",
        "IQR_MULTIPLIER",
        "MONTH_BUCKETING",
        "REPORT_TOP_N",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_tx() -> Callable[..., Transaction]:
    """
    Factory for transactions with sensible defaults.
    """

    def _make(
        value: int = 100,
        transaction_count: int = 10,
        date: dt.date = dt.date(2022, 1, 1),
        domain: str = "RETAIL",
        location: str = "Goa",
    ) -> Transaction:
        return Transaction(
            date=date,
            domain=domain,
            location=location,
            value=value,
            transaction_count=transaction_count,
        )

    return _make


@pytest.fixture
def ledger(make_tx) -> List[Transaction]:
    """
    Six rows; the same data as LEDGER_CSV after normalization.

    Region totals: Mumbai 600, Goa 450, Delhi 250.
    Domain totals: RESTAURANT 600, RETAIL 450, MEDICAL 250.
    """
    return [
        make_tx(100, 10, dt.date(2022, 1, 5), "RESTAURANT", "Goa"),
        make_tx(400, 40, dt.date(2022, 1, 5), "RETAIL", "Mumbai"),
        make_tx(300, 30, dt.date(2022, 1, 20), "RESTAURANT", "Goa"),
        make_tx(250, 25, dt.date(2022, 2, 3), "MEDICAL", "Delhi"),
        make_tx(50, 5, dt.date(2023, 1, 7), "RETAIL", "Goa"),
        make_tx(200, 20, dt.date(2022, 2, 3), "RESTAURANT", "Mumbai"),
    ]


@pytest.fixture
def sample_values() -> List[int]:
    return list(SAMPLE_VALUES)


@pytest.fixture
def ledger_csv(tmp_path: Path) -> Path:
    """
    Write LEDGER_CSV to a temporary file and return its path.
    """
    path = tmp_path / "ledger.csv"
    path.write_text(LEDGER_CSV, encoding="utf-8")
    return path
