"""
Domain models for ledger-stats.

Defines the immutable input record (Transaction) and the output shapes produced
by the aggregation and outlier engine. All models are frozen so results can be
iterated, shared and serialized without defensive copies.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

KeyT = TypeVar("KeyT")


class Transaction(BaseModel):
    """
    A single ledger row as handed over by the record source.
    """

    date: dt.date = Field(..., description="Calendar date of the record.")
    domain: str = Field(..., min_length=1, description="Category label, e.g. RESTAURANT.")
    location: str = Field(..., min_length=1, description="Region label.")
    value: int = Field(..., ge=0, description="Monetary amount in whole units.")
    transaction_count: int = Field(..., ge=0, description="Transactions this row represents.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }


class GroupStat(BaseModel, Generic[KeyT]):
    """
    Descriptive statistics for one group of transactions.

    The same shape serves every dimension; only the type of `key` differs
    (region string, date, month number or year-month string, domain string).
    """

    key: KeyT
    total: int = Field(..., ge=0, description="Sum of values in the group.")
    transaction_count: int = Field(..., ge=0, description="Sum of transaction counts.")
    average: float = Field(..., description="total / count, 0.0 for an empty group.")
    median: Optional[float] = Field(
        ..., description="Median of the group's values, None for an empty group."
    )
    count: int = Field(..., ge=0, description="Number of records in the group.")

    model_config = {"frozen": True}


class OutlierBounds(BaseModel):
    """Quartiles and fences of the IQR rule for one numeric field."""

    q1: float
    q3: float
    iqr: float
    lower: float
    upper: float
    multiplier: float

    model_config = {"frozen": True}

    def contains(self, value: float) -> bool:
        """True when `value` lies inside the closed interval [lower, upper]."""
        return self.lower <= value <= self.upper


class OutlierReport(BaseModel):
    """Bounds and flagged transactions for one field over the whole ledger."""

    field: str
    bounds: OutlierBounds
    flagged: List[Transaction] = Field(default_factory=list)

    model_config = {"frozen": True}


class DimensionTable(BaseModel):
    """The aggregated table for one grouping dimension."""

    dimension: str
    order: str
    stats: List[GroupStat]
    duration_seconds: float = 0.0

    model_config = {"frozen": True}


class AnalysisReport(BaseModel):
    """Everything the presentation layer needs for one ledger."""

    generated_at: dt.datetime
    transaction_count: int
    overall: GroupStat
    tables: Dict[str, DimensionTable] = Field(default_factory=dict)
    outliers: Dict[str, OutlierReport] = Field(default_factory=dict)

    model_config = {"frozen": True}


__all__ = [
    "AnalysisReport",
    "DimensionTable",
    "GroupStat",
    "OutlierBounds",
    "OutlierReport",
    "Transaction",
]
