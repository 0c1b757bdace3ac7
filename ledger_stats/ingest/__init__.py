"""
Ingest package for ledger-stats.

Record sources that turn raw ledger exports into validated Transaction values.
Keep this layer focused on I/O and normalization, decoupled from the
aggregation engine.
"""

from ledger_stats.ingest.csv_source import (
    load_transactions,
    normalize_domain,
    normalize_label,
    parse_row,
    read_transactions,
)

__all__ = [
    "load_transactions",
    "normalize_domain",
    "normalize_label",
    "parse_row",
    "read_transactions",
]
