"""
Domain dimension: groups by transaction category (RESTAURANT, RETAIL, ...).
"""

from __future__ import annotations

from ledger_stats.dimensions.abstract import AbstractDimension
from ledger_stats.domain.models import Transaction
from ledger_stats.stats.aggregator import OrderPolicy


class DomainDimension(AbstractDimension):
    """Per-category statistics, largest total first by default."""

    name: str = "domain"
    description: str = "Group by transaction domain; ranked by total value."
    default_order: OrderPolicy = OrderPolicy.BY_TOTAL_DESC

    def key_of(self, transaction: Transaction) -> str:
        return transaction.domain


__all__ = ["DomainDimension"]
