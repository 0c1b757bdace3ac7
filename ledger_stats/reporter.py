from __future__ import annotations

import csv
import datetime as dt
import json
from pathlib import Path
from typing import Any, Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ledger_stats.domain.models import AnalysisReport, DimensionTable, GroupStat, OutlierReport
from ledger_stats.utils.logging import get_logger

log = get_logger(__name__)

TABLE_COLUMNS = ["key", "total", "transaction_count", "average", "median", "count"]

_ORDER_CAPTIONS = {
    "key": "Sorted by key (ascending)",
    "total_desc": "Sorted by total value (descending)",
}


def _format_key(key: Any) -> str:
    if isinstance(key, dt.date):
        return key.isoformat()
    return str(key)


def _stat_row(stat: GroupStat) -> list[str]:
    return [
        _format_key(stat.key),
        f"{stat.total:,}",
        f"{stat.transaction_count:,}",
        f"{stat.average:,.2f}",
        "-" if stat.median is None else f"{stat.median:,.2f}",
        f"{stat.count:,}",
    ]


def build_stats_table(table: DimensionTable, top_n: Optional[int] = None) -> Table:
    """
    Render one dimension's GroupStats as a rich table.

    Only the first `top_n` rows are shown when given; a trailing row says how
    many were left out.
    """
    rows = table.stats if top_n is None else table.stats[:top_n]
    caption = _ORDER_CAPTIONS.get(table.order, table.order)
    hidden = len(table.stats) - len(rows)

    rendered = Table(
        title=f"By {table.dimension}",
        box=box.ROUNDED,
        caption=caption,
    )
    rendered.add_column(table.dimension.capitalize(), style="cyan", no_wrap=True)
    rendered.add_column("Total", justify="right", style="bold green")
    rendered.add_column("Txn Count", justify="right", style="magenta")
    rendered.add_column("Average", justify="right", style="green")
    rendered.add_column("Median", justify="right", style="yellow")
    rendered.add_column("Records", justify="right", style="blue")

    for stat in rows:
        rendered.add_row(*_stat_row(stat))
    if hidden > 0:
        rendered.add_row(f"... {hidden} more", "", "", "", "", "", style="dim")
    return rendered


def build_outlier_table(report: OutlierReport, top_n: Optional[int] = None) -> Table:
    """Render flagged transactions for one field, with the fences in the title."""
    bounds = report.bounds
    rows = report.flagged if top_n is None else report.flagged[:top_n]
    title = (
        f"Outliers by {report.field}\n"
        f"[dim]Q1={bounds.q1:,.0f} Q3={bounds.q3:,.0f} IQR={bounds.iqr:,.0f} │ "
        f"fences [{bounds.lower:,.1f}, {bounds.upper:,.1f}] (x{bounds.multiplier:g})[/dim]"
    )
    rendered = Table(
        title=title,
        box=box.ROUNDED,
        caption=f"{len(report.flagged)} flagged, input order",
    )
    rendered.add_column("Date", style="cyan", no_wrap=True)
    rendered.add_column("Domain", style="magenta")
    rendered.add_column("Location", style="blue")
    rendered.add_column("Value", justify="right", style="bold red")
    rendered.add_column("Txn Count", justify="right", style="red")

    for tx in rows:
        rendered.add_row(
            tx.date.isoformat(),
            tx.domain,
            tx.location,
            f"{tx.value:,}",
            f"{tx.transaction_count:,}",
        )
    return rendered


def print_report(
    report: AnalysisReport,
    top_n: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render a full analysis report: overall summary, dimension tables, outliers.
    """
    console = console or Console()

    if report.transaction_count == 0:
        console.print("[yellow]No transactions to display.[/yellow]")
        return

    overall = report.overall
    console.print(
        f"[bold]Ledger summary[/bold] │ records={overall.count:,} "
        f"total={overall.total:,} txns={overall.transaction_count:,} "
        f"avg={overall.average:,.2f} median={overall.median:,.2f}"
    )
    for table in report.tables.values():
        console.print(build_stats_table(table, top_n))
    for outlier_report in report.outliers.values():
        console.print(build_outlier_table(outlier_report, top_n))


def print_outliers(
    report: OutlierReport, top_n: Optional[int] = None, console: Optional[Console] = None
) -> None:
    console = console or Console()
    if not report.flagged:
        console.print(f"[green]No outliers by {report.field}.[/green]")
        return
    console.print(build_outlier_table(report, top_n))


def export_json(report: AnalysisReport, path: Path | str) -> Path:
    """Write the report as JSON. Dates are ISO strings."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2, sort_keys=True)
    log.info("Report exported", extra={"path": str(path), "format": "json"})
    return path


def _write_stats_csv(stats: Iterable[GroupStat], path: Path) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(TABLE_COLUMNS)
        for stat in stats:
            writer.writerow(
                [
                    _format_key(stat.key),
                    stat.total,
                    stat.transaction_count,
                    f"{stat.average:.6f}",
                    "" if stat.median is None else f"{stat.median:.1f}",
                    stat.count,
                ]
            )


def export_table_csv(table: DimensionTable, path: Path | str) -> Path:
    """Write one dimension table as CSV in its report order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _write_stats_csv(table.stats, path)
    log.info(
        "Table exported",
        extra={"path": str(path), "format": "csv", "dimension": table.dimension},
    )
    return path


def export_tables_csv(report: AnalysisReport, directory: Path | str) -> list[Path]:
    """Write every table of `report` to `<directory>/<dimension>.csv`."""
    directory = Path(directory)
    return [
        export_table_csv(table, directory / f"{name}.csv") for name, table in report.tables.items()
    ]


__all__ = [
    "TABLE_COLUMNS",
    "build_outlier_table",
    "build_stats_table",
    "export_json",
    "export_table_csv",
    "export_tables_csv",
    "print_outliers",
    "print_report",
]
