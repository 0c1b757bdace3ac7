"""
Median and nearest-rank percentile over integer observations.

Both routines sort a private copy of their input and never mutate it. An empty
input is a precondition violation and raises EmptyInputError rather than
returning a sentinel that could pass for a real statistic.
"""

from __future__ import annotations

import math
from typing import Sequence

from ledger_stats.errors import EmptyInputError


def _round_half_up(x: float) -> int:
    """Round a non-negative float to the nearest integer, halves away from zero."""
    return int(math.floor(x + 0.5))


def median(values: Sequence[int]) -> float:
    """
    Middle of the sorted observations.

    For an even count this is the mean of the two central elements; for an odd
    count it is the central element itself.

    Raises
    ------
    EmptyInputError
        If `values` is empty.
    """
    if not values:
        raise EmptyInputError("median of an empty sequence is undefined")

    ordered = sorted(values)
    n = len(ordered)
    mid = n // 2
    if n % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2.0
    return float(ordered[mid])


def percentile(values: Sequence[int], p: float) -> float:
    """
    Nearest-rank percentile without interpolation.

    Selects ``sorted(values)[round(p * (n - 1))]``. Many statistics libraries
    interpolate between neighbouring ranks; this does not.

    Parameters
    ----------
    values : Sequence[int]
        Observations; must not be empty.
    p : float
        Fraction in [0, 1], e.g. 0.25 for the first quartile.

    Raises
    ------
    EmptyInputError
        If `values` is empty.
    ValueError
        If `p` is outside [0, 1].
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"percentile fraction must be within [0, 1], got {p}")
    if not values:
        raise EmptyInputError("percentile of an empty sequence is undefined")

    ordered = sorted(values)
    rank = _round_half_up(p * (len(ordered) - 1))
    return float(ordered[rank])


__all__ = ["median", "percentile"]
