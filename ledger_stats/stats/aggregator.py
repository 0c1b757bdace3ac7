"""
Generic group-by aggregation over transactions.

A single `aggregate` serves every dimension: the caller supplies the key
extractor and an explicit ordering policy. Each call is a pure function of its
inputs; the transactions are read, never mutated.
"""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

from ledger_stats.domain.models import GroupStat, Transaction
from ledger_stats.stats.primitives import median

K = TypeVar("K", bound=Hashable)

OVERALL_KEY = "ALL"


class OrderPolicy(str, Enum):
    """How aggregated groups are ordered in the output."""

    BY_KEY = "key"
    BY_TOTAL_DESC = "total_desc"


def _average(total: int, count: int) -> float:
    # An empty group has a defined average of 0.0.
    if count == 0:
        return 0.0
    return total / count


def summarize_group(key: K, values: Sequence[int], transaction_count: int) -> GroupStat:
    """
    Build the GroupStat for one key from its raw value observations.

    An empty `values` yields a zero-count group with ``average == 0.0`` and
    ``median is None``. `aggregate` never produces such a group.
    """
    total = sum(values)
    count = len(values)
    return GroupStat(
        key=key,
        total=total,
        transaction_count=transaction_count,
        average=_average(total, count),
        median=median(values) if count else None,
        count=count,
    )


def _sort_stats(stats: List[GroupStat], order: OrderPolicy) -> List[GroupStat]:
    by_key = sorted(stats, key=lambda s: s.key)
    if order is OrderPolicy.BY_KEY:
        return by_key
    if order is OrderPolicy.BY_TOTAL_DESC:
        # Stable sort keeps ascending key order among equal totals.
        return sorted(by_key, key=lambda s: s.total, reverse=True)
    raise ValueError(f"Unknown order policy '{order}'")


def aggregate(
    transactions: Iterable[Transaction],
    key_of: Callable[[Transaction], K],
    order: OrderPolicy,
) -> List[GroupStat]:
    """
    Group transactions by ``key_of(tx)`` and summarize each group.

    Parameters
    ----------
    transactions : Iterable[Transaction]
        Ledger rows; consumed once.
    key_of : Callable[[Transaction], K]
        Extracts the grouping key from a transaction.
    order : OrderPolicy
        BY_KEY sorts ascending by key; BY_TOTAL_DESC sorts by total, largest
        first, with ties in ascending key order.

    Returns
    -------
    List[GroupStat]
        One entry per distinct key. Counts add up to the number of input rows.
    """
    order = OrderPolicy(order)
    values_by_key: Dict[K, List[int]] = defaultdict(list)
    count_by_key: Dict[K, int] = defaultdict(int)

    for tx in transactions:
        key = key_of(tx)
        values_by_key[key].append(tx.value)
        count_by_key[key] += tx.transaction_count

    stats = [
        summarize_group(key, values, count_by_key[key]) for key, values in values_by_key.items()
    ]
    return _sort_stats(stats, order)


def summarize(transactions: Iterable[Transaction]) -> GroupStat:
    """Whole-ledger summary under the key ``"ALL"``."""
    values: List[int] = []
    transaction_count = 0
    for tx in transactions:
        values.append(tx.value)
        transaction_count += tx.transaction_count
    return summarize_group(OVERALL_KEY, values, transaction_count)


__all__ = ["OVERALL_KEY", "OrderPolicy", "aggregate", "summarize", "summarize_group"]
