"""
ledger-stats - descriptive statistics and IQR outlier detection for transaction ledgers.

This package groups a ledger of transactions along independent dimensions and
summarizes each group, including:

- Per-region totals, averages and medians
- Per-day and per-month time series
- Per-domain (category) breakdowns
- Interquartile-range outlier flags over value and transaction count

The aggregation engine (`ledger_stats.stats`) is a set of pure functions; the
record source, orchestrator, reporter and CLI are thin layers around it.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from ledger_stats.config import Settings, get_settings
from ledger_stats.dimensions.abstract import AbstractDimension, Dimension
from ledger_stats.dimensions.calendar import MonthBucketing
from ledger_stats.domain.models import (
    AnalysisReport,
    DimensionTable,
    GroupStat,
    OutlierBounds,
    OutlierReport,
    Transaction,
)
from ledger_stats.errors import EmptyInputError, LedgerStatsError, RecordParseError
from ledger_stats.ingest.csv_source import load_transactions, read_transactions
from ledger_stats.orchestrator import available_dimensions, build_report
from ledger_stats.stats import (
    OrderPolicy,
    OutlierField,
    aggregate,
    detect_outliers,
    find_outliers,
    iqr_bounds,
    median,
    percentile,
    summarize,
    transaction_count_of,
    value_of,
)
from ledger_stats.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Models
    "AnalysisReport",
    "DimensionTable",
    "GroupStat",
    "OutlierBounds",
    "OutlierReport",
    "Transaction",
    # Errors
    "EmptyInputError",
    "LedgerStatsError",
    "RecordParseError",
    # Engine
    "OrderPolicy",
    "OutlierField",
    "aggregate",
    "detect_outliers",
    "find_outliers",
    "iqr_bounds",
    "median",
    "percentile",
    "summarize",
    "transaction_count_of",
    "value_of",
    # Dimensions and orchestration
    "AbstractDimension",
    "Dimension",
    "MonthBucketing",
    "available_dimensions",
    "build_report",
    # Record source
    "load_transactions",
    "read_transactions",
    # Logging
    "configure_logging",
    "get_logger",
]
