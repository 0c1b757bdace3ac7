"""
Domain package for ledger-stats.

Exports the input record and the result models shared by the engine,
orchestrator and reporter. Keep this package focused on data definitions and
validation concerns.
"""

from ledger_stats.domain.models import (
    AnalysisReport,
    DimensionTable,
    GroupStat,
    OutlierBounds,
    OutlierReport,
    Transaction,
)

__all__ = [
    "AnalysisReport",
    "DimensionTable",
    "GroupStat",
    "OutlierBounds",
    "OutlierReport",
    "Transaction",
]
