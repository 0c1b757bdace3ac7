"""
Exception hierarchy for ledger-stats.

Everything raised on purpose by the library derives from LedgerStatsError so the
CLI can turn it into a clean message instead of a traceback.
"""

from __future__ import annotations

from typing import Optional


class LedgerStatsError(Exception):
    """Base exception for ledger-stats."""


class EmptyInputError(LedgerStatsError, ValueError):
    """A statistic was requested over an empty sequence of observations."""


class RecordParseError(LedgerStatsError, ValueError):
    """A ledger row could not be turned into a Transaction."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


__all__ = ["LedgerStatsError", "EmptyInputError", "RecordParseError"]
