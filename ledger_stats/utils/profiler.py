"""
Profiling helpers for ledger-stats.

The orchestrator wraps each dimension's aggregation in `profile_block` so report
tables carry how long they took and debug logs show memory pressure on large
ledgers. Measures:
- Wall-clock time (perf_counter)
- Resident set size before/after (psutil; None where the platform denies access)
- Peak Python allocations (tracemalloc, opt-in)

Usage:
    from ledger_stats.utils.profiler import profile_block

    with profile_block("aggregate:region") as stats:
        region_stats = aggregate(transactions, key_of, order)

    print(stats.duration_seconds, stats.rss_delta_bytes)
"""

from __future__ import annotations

import contextlib
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_before_bytes: Optional[int] = field(default=None)
    rss_after_bytes: Optional[int] = field(default=None)
    peak_traced_bytes: Optional[int] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def rss_delta_bytes(self) -> Optional[int]:
        if self.rss_before_bytes is None or self.rss_after_bytes is None:
            return None
        return self.rss_after_bytes - self.rss_before_bytes


def _current_rss() -> Optional[int]:
    try:
        return psutil.Process().memory_info().rss
    except psutil.Error:
        return None


@contextlib.contextmanager
def profile_block(
    label: str, enable_tracemalloc: bool = False
) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    enable_tracemalloc : bool
        Track peak Python allocations. Adds noticeable overhead, so it is off
        unless asked for.
    """
    stats = ProfileStats(label=label)
    stats.rss_before_bytes = _current_rss()

    tracemalloc_was_running = tracemalloc.is_tracing()
    if enable_tracemalloc and not tracemalloc_was_running:
        tracemalloc.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.rss_after_bytes = _current_rss()

        if enable_tracemalloc and tracemalloc.is_tracing():
            _, peak_traced = tracemalloc.get_traced_memory()
            stats.peak_traced_bytes = peak_traced
            # Stop tracemalloc only if we started it
            if not tracemalloc_was_running:
                tracemalloc.stop()


__all__ = ["ProfileStats", "profile_block"]
