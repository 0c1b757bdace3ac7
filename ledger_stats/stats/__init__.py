"""
Aggregation and anomaly-detection engine.

Pure functions only: nothing in this package logs, prints or keeps state
between calls.
"""

from ledger_stats.stats.aggregator import (
    OVERALL_KEY,
    OrderPolicy,
    aggregate,
    summarize,
    summarize_group,
)
from ledger_stats.stats.outliers import (
    DEFAULT_IQR_MULTIPLIER,
    OutlierField,
    detect_outliers,
    find_outliers,
    iqr_bounds,
    transaction_count_of,
    value_of,
)
from ledger_stats.stats.primitives import median, percentile

__all__ = [
    "DEFAULT_IQR_MULTIPLIER",
    "OVERALL_KEY",
    "OrderPolicy",
    "OutlierField",
    "aggregate",
    "detect_outliers",
    "find_outliers",
    "iqr_bounds",
    "median",
    "percentile",
    "summarize",
    "summarize_group",
    "transaction_count_of",
    "value_of",
]
