"""
Calendar dimensions: per-day and per-month time series.

Month grouping is ambiguous once a ledger spans several years, so the bucketing
is an explicit choice:

- ``month_only``: key is the month number 1-12; January 2022 and January 2023
  land in the same group.
- ``year_month``: key is ``"YYYY-MM"``; every calendar month is its own group.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum

from ledger_stats.dimensions.abstract import AbstractDimension
from ledger_stats.domain.models import Transaction
from ledger_stats.stats.aggregator import OrderPolicy


class MonthBucketing(str, Enum):
    MONTH_ONLY = "month_only"
    YEAR_MONTH = "year_month"


class DateDimension(AbstractDimension):
    """Per-day statistics in chronological order."""

    name: str = "date"
    description: str = "Group by calendar date; chronological."
    default_order: OrderPolicy = OrderPolicy.BY_KEY

    def key_of(self, transaction: Transaction) -> dt.date:
        return transaction.date


class MonthDimension(AbstractDimension):
    """Per-month statistics in chronological order."""

    name: str = "month"
    default_order: OrderPolicy = OrderPolicy.BY_KEY

    def __init__(self, bucketing: MonthBucketing | str = MonthBucketing.MONTH_ONLY) -> None:
        self.bucketing = MonthBucketing(bucketing)

    @property
    def description(self) -> str:  # type: ignore[override]
        if self.bucketing is MonthBucketing.YEAR_MONTH:
            return "Group by calendar year and month (YYYY-MM); chronological."
        return "Group by month number, merging years; chronological."

    def key_of(self, transaction: Transaction) -> int | str:
        if self.bucketing is MonthBucketing.YEAR_MONTH:
            return f"{transaction.date.year:04d}-{transaction.date.month:02d}"
        return transaction.date.month


__all__ = ["DateDimension", "MonthBucketing", "MonthDimension"]
