"""
Region dimension: groups by the transaction's location label.
"""

from __future__ import annotations

from ledger_stats.dimensions.abstract import AbstractDimension
from ledger_stats.domain.models import Transaction
from ledger_stats.stats.aggregator import OrderPolicy


class RegionDimension(AbstractDimension):
    """Per-location statistics, largest total first by default."""

    name: str = "region"
    description: str = "Group by location; ranked by total value."
    default_order: OrderPolicy = OrderPolicy.BY_TOTAL_DESC

    def key_of(self, transaction: Transaction) -> str:
        return transaction.location


__all__ = ["RegionDimension"]
