"""
Orchestrator for building an analysis report over one ledger.

Runs the selected grouping dimensions and both outlier fields over the same
in-memory transactions, timing each aggregation with the profiler, and bundles
the results into an AnalysisReport for the reporter.

Usage (example from CLI):
    from ledger_stats.orchestrator import build_report

    report = build_report(transactions, dimension_names=["region", "month"])
    print(report.tables["region"].stats[0])
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ledger_stats.config import get_settings
from ledger_stats.dimensions.abstract import Dimension
from ledger_stats.dimensions.calendar import DateDimension, MonthBucketing, MonthDimension
from ledger_stats.dimensions.domain import DomainDimension
from ledger_stats.dimensions.region import RegionDimension
from ledger_stats.domain.models import AnalysisReport, DimensionTable, OutlierReport, Transaction
from ledger_stats.errors import EmptyInputError
from ledger_stats.stats.aggregator import OrderPolicy, summarize
from ledger_stats.stats.outliers import OutlierField, find_outliers
from ledger_stats.utils.logging import get_logger
from ledger_stats.utils.profiler import profile_block

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 4) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _dimension_factories(
    month_bucketing: MonthBucketing = MonthBucketing.MONTH_ONLY,
) -> Dict[str, Callable[[], Dimension]]:
    """Registry of available dimensions."""
    return {
        "region": lambda: RegionDimension(),
        "date": lambda: DateDimension(),
        "month": lambda: MonthDimension(month_bucketing),
        "domain": lambda: DomainDimension(),
    }


def available_dimensions() -> List[str]:
    """List available dimension names."""
    return sorted(_dimension_factories().keys())


def describe_dimensions(
    month_bucketing: MonthBucketing = MonthBucketing.MONTH_ONLY,
) -> Dict[str, str]:
    """Map each dimension name to its human-readable description."""
    factories = _dimension_factories(month_bucketing)
    return {name: factories[name]().description for name in sorted(factories)}


def _resolve_dimension(name: str, month_bucketing: MonthBucketing) -> Dimension:
    factories = _dimension_factories(month_bucketing)
    if name not in factories:
        raise ValueError(f"Unknown dimension '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def _resolve_names(dimension_names: Optional[Iterable[str]]) -> List[str]:
    names = list(dimension_names) if dimension_names is not None else ["all"]
    if not names:
        return available_dimensions()
    # "all" expands in place; keep caller order but drop repeats.
    expanded: List[str] = []
    for name in names:
        expanded.extend(available_dimensions() if name == "all" else [name])
    return list(dict.fromkeys(expanded))


def _profiled_aggregate(
    dimension: Dimension,
    transactions: Sequence[Transaction],
    order: Optional[OrderPolicy],
) -> DimensionTable:
    effective_order = OrderPolicy(order) if order is not None else dimension.default_order
    log.debug(f"[DIMENSION START] {dimension.name}", extra={"dimension": dimension.name})
    with profile_block(f"aggregate:{dimension.name}") as stats:
        rows = dimension.aggregate(transactions, effective_order)

    log.info(
        f"[DIMENSION DONE] {dimension.name}: {len(rows)} group(s)",
        extra={
            "dimension": dimension.name,
            "groups": len(rows),
            "order": effective_order.value,
            "duration_seconds": _round_float(stats.duration_seconds),
            "rss_delta_bytes": stats.rss_delta_bytes,
        },
    )
    return DimensionTable(
        dimension=dimension.name,
        order=effective_order.value,
        stats=rows,
        duration_seconds=_round_float(stats.duration_seconds),
    )


def _outlier_reports(
    transactions: Sequence[Transaction],
    fields: Iterable[OutlierField | str],
    multiplier: float,
) -> Dict[str, OutlierReport]:
    reports: Dict[str, OutlierReport] = {}
    for field in fields:
        report = find_outliers(transactions, field, multiplier)
        reports[report.field] = report
        log.info(
            f"[OUTLIERS] {report.field}: {len(report.flagged)} flagged",
            extra={
                "field": report.field,
                "flagged": len(report.flagged),
                "lower": report.bounds.lower,
                "upper": report.bounds.upper,
            },
        )
    return reports


def build_report(
    transactions: Iterable[Transaction],
    dimension_names: Optional[Iterable[str]] = None,
    order: Optional[OrderPolicy | str] = None,
    month_bucketing: Optional[MonthBucketing | str] = None,
    iqr_multiplier: Optional[float] = None,
    outlier_fields: Optional[Iterable[OutlierField | str]] = None,
) -> AnalysisReport:
    """
    Aggregate a ledger along the requested dimensions and detect outliers.

    Parameters
    ----------
    transactions : iterable[Transaction]
        The full ledger; materialized once and shared read-only by every step.
    dimension_names : iterable[str] | None
        Dimensions to compute. None computes every registered one; "all" expands
        to every registered one wherever it appears.
    order : OrderPolicy | str | None
        Ordering applied to every table. None uses each dimension's default.
    month_bucketing : MonthBucketing | str | None
        Month grouping mode. Defaults to settings.month_bucketing.
    iqr_multiplier : float | None
        Fence multiplier for the IQR rule. Defaults to settings.iqr_multiplier.
    outlier_fields : iterable[OutlierField | str] | None
        Fields to run the detector over. Defaults to value and transaction_count.

    Returns
    -------
    AnalysisReport
        Overall summary, one table per dimension and one outlier report per field.

    Raises
    ------
    EmptyInputError
        If the ledger has no transactions.
    ValueError
        If a dimension name, order or field is unknown.
    """
    settings = get_settings()
    bucketing = MonthBucketing(month_bucketing or settings.month_bucketing)
    multiplier = settings.iqr_multiplier if iqr_multiplier is None else iqr_multiplier
    fields = list(outlier_fields) if outlier_fields is not None else list(OutlierField)
    policy = OrderPolicy(order) if order is not None else None

    ledger = list(transactions)
    if not ledger:
        raise EmptyInputError("cannot build a report from an empty ledger")

    names = _resolve_names(dimension_names)
    dimensions = [_resolve_dimension(name, bucketing) for name in names]

    log.info(
        f"[REPORT START] {len(ledger)} transaction(s), dimensions={names}",
        extra={"rows": len(ledger), "dimensions": names, "month_bucketing": bucketing.value},
    )

    tables = {dim.name: _profiled_aggregate(dim, ledger, policy) for dim in dimensions}
    outliers = _outlier_reports(ledger, fields, multiplier)

    report = AnalysisReport(
        generated_at=datetime.now(timezone.utc),
        transaction_count=len(ledger),
        overall=summarize(ledger),
        tables=tables,
        outliers=outliers,
    )
    log.info(
        f"[REPORT COMPLETE] {len(tables)} table(s), "
        f"{sum(len(r.flagged) for r in outliers.values())} outlier flag(s)",
        extra={"tables": list(tables), "outlier_fields": list(outliers)},
    )
    return report


__all__ = [
    "available_dimensions",
    "build_report",
    "describe_dimensions",
]
