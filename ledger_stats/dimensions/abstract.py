"""
Abstract dimension interfaces for ledger-stats.

A dimension names one way of partitioning the ledger: it supplies the key
extractor handed to `aggregate` and the order its table is presented in unless
the caller overrides it.
"""

from __future__ import annotations

import abc
from typing import Hashable, Iterable, List, Optional, Protocol, runtime_checkable

from ledger_stats.domain.models import GroupStat, Transaction
from ledger_stats.stats.aggregator import OrderPolicy, aggregate


@runtime_checkable
class Dimension(Protocol):
    """
    Common interface all grouping dimensions implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the grouping.
    default_order : OrderPolicy
        Ordering used when the caller does not pick one.
    """

    name: str
    description: str
    default_order: OrderPolicy

    def key_of(self, transaction: Transaction) -> Hashable:
        """Return the group key for `transaction`."""
        ...

    def aggregate(
        self, transactions: Iterable[Transaction], order: Optional[OrderPolicy] = None
    ) -> List[GroupStat]:
        """Aggregate `transactions` along this dimension."""
        ...


class AbstractDimension(abc.ABC):
    """
    ABC helper for class-based dimensions.

    Subclasses set `name`, `description` and `default_order` and implement
    `key_of`; `aggregate` is shared.
    """

    name: str
    description: str
    default_order: OrderPolicy = OrderPolicy.BY_KEY

    @abc.abstractmethod
    def key_of(self, transaction: Transaction) -> Hashable:  # pragma: no cover - interface only
        raise NotImplementedError

    def aggregate(
        self, transactions: Iterable[Transaction], order: Optional[OrderPolicy] = None
    ) -> List[GroupStat]:
        return aggregate(transactions, self.key_of, order or self.default_order)


__all__ = ["AbstractDimension", "Dimension"]
