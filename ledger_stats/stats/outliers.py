"""
IQR (Tukey fence) outlier detection over the whole, ungrouped ledger.

Quartiles come from the nearest-rank `percentile`; a transaction is flagged when
its field lies strictly outside ``[Q1 - m*IQR, Q3 + m*IQR]``. Flagged rows keep
their input order.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from ledger_stats.domain.models import OutlierBounds, OutlierReport, Transaction
from ledger_stats.stats.primitives import percentile

DEFAULT_IQR_MULTIPLIER = 1.5

FieldSelector = Callable[[Transaction], int]


def value_of(tx: Transaction) -> int:
    return tx.value


def transaction_count_of(tx: Transaction) -> int:
    return tx.transaction_count


class OutlierField(str, Enum):
    """Numeric transaction fields the detector can run over."""

    VALUE = "value"
    TRANSACTION_COUNT = "transaction_count"

    @property
    def selector(self) -> FieldSelector:
        return _SELECTORS[self]


_SELECTORS: Dict[OutlierField, FieldSelector] = {
    OutlierField.VALUE: value_of,
    OutlierField.TRANSACTION_COUNT: transaction_count_of,
}


def iqr_bounds(values: Sequence[int], multiplier: float = DEFAULT_IQR_MULTIPLIER) -> OutlierBounds:
    """
    Compute quartiles, IQR and fences for `values`.

    Raises
    ------
    EmptyInputError
        If `values` is empty.
    ValueError
        If `multiplier` is negative.
    """
    if multiplier < 0:
        raise ValueError(f"IQR multiplier must be non-negative, got {multiplier}")

    q1 = percentile(values, 0.25)
    q3 = percentile(values, 0.75)
    iqr = q3 - q1
    return OutlierBounds(
        q1=q1,
        q3=q3,
        iqr=iqr,
        lower=q1 - multiplier * iqr,
        upper=q3 + multiplier * iqr,
        multiplier=multiplier,
    )


def _flag(
    transactions: Sequence[Transaction],
    field_selector: FieldSelector,
    multiplier: float,
) -> Tuple[OutlierBounds, List[Transaction]]:
    values = [field_selector(tx) for tx in transactions]
    bounds = iqr_bounds(values, multiplier)
    return bounds, [tx for tx, v in zip(transactions, values) if not bounds.contains(v)]


def detect_outliers(
    transactions: Sequence[Transaction],
    field_selector: FieldSelector,
    multiplier: float = DEFAULT_IQR_MULTIPLIER,
) -> List[Transaction]:
    """
    Return the transactions whose selected field falls outside the IQR fences.

    Bounds are computed once over every transaction in `transactions`; values
    equal to a fence are not flagged.
    """
    return _flag(transactions, field_selector, multiplier)[1]


def find_outliers(
    transactions: Sequence[Transaction],
    field: OutlierField | str,
    multiplier: float = DEFAULT_IQR_MULTIPLIER,
) -> OutlierReport:
    """
    Bounds plus flagged rows for a named field, ready for reporting.
    """
    field = OutlierField(field)
    bounds, flagged = _flag(transactions, field.selector, multiplier)
    return OutlierReport(field=field.value, bounds=bounds, flagged=flagged)


__all__ = [
    "DEFAULT_IQR_MULTIPLIER",
    "FieldSelector",
    "OutlierField",
    "detect_outliers",
    "find_outliers",
    "iqr_bounds",
    "transaction_count_of",
    "value_of",
]
