from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from ledger_stats.config import get_settings
from ledger_stats.dimensions.calendar import MonthBucketing
from ledger_stats.errors import LedgerStatsError
from ledger_stats.ingest.csv_source import load_transactions
from ledger_stats.orchestrator import available_dimensions, build_report, describe_dimensions
from ledger_stats.reporter import export_json, export_tables_csv, print_outliers, print_report
from ledger_stats.stats.aggregator import OrderPolicy
from ledger_stats.stats.outliers import OutlierField, find_outliers
from ledger_stats.utils.logging import configure_logging

app = typer.Typer(help="Ledger statistics and IQR outlier detection.")


def _load(ledger: Optional[Path], strict: Optional[bool]):
    settings = get_settings()
    path = ledger or settings.ledger_path
    return load_transactions(
        path,
        date_format=settings.ledger_date_format,
        strict=settings.ledger_strict if strict is None else strict,
    )


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"ledger={settings.ledger_path} date_format={settings.ledger_date_format} "
        f"strict={settings.ledger_strict} | iqr_multiplier={settings.iqr_multiplier} "
        f"month_bucketing={settings.month_bucketing.value} top_n={settings.report_top_n} | "
        f"env={settings.app_env} log_level={settings.log_level}"
    )


@app.command()
def dimensions(
    month_bucketing: Optional[MonthBucketing] = typer.Option(
        None, "--month-bucketing", help="Month grouping mode to describe."
    ),
) -> None:
    """
    List the grouping dimensions a report can contain.
    """
    bucketing = month_bucketing or get_settings().month_bucketing
    for name, description in describe_dimensions(bucketing).items():
        typer.echo(f"{name:<8} {description}")


@app.command()
def analyze(
    ledger: Optional[Path] = typer.Argument(
        None, help="Ledger CSV to analyze (default from LEDGER_PATH)."
    ),
    dimension: Optional[List[str]] = typer.Option(
        None,
        "--dimension",
        "-d",
        help=f"Dimension to include; repeatable ({', '.join(available_dimensions())}, all).",
    ),
    order: Optional[OrderPolicy] = typer.Option(
        None,
        "--order",
        "-o",
        help="Order every table by key or by total (default: per dimension).",
    ),
    month_bucketing: Optional[MonthBucketing] = typer.Option(
        None, "--month-bucketing", help="Group months by number only or by year and month."
    ),
    iqr_multiplier: Optional[float] = typer.Option(
        None, "--iqr-multiplier", "-m", min=0.0, help="IQR fence multiplier."
    ),
    top: Optional[int] = typer.Option(
        None, "--top", "-n", min=1, help="Rows shown per table (default from REPORT_TOP_N)."
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--lenient", help="Fail on malformed rows instead of skipping them."
    ),
    json_output: Optional[Path] = typer.Option(
        None, "--json-output", help="Also write the full report as JSON to this path."
    ),
    csv_dir: Optional[Path] = typer.Option(
        None, "--csv-dir", help="Also write each dimension table as CSV into this directory."
    ),
) -> None:
    """
    Aggregate a ledger by dimension and flag IQR outliers.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        transactions = _load(ledger, strict)
        report = build_report(
            transactions,
            dimension_names=dimension or None,
            order=order,
            month_bucketing=month_bucketing,
            iqr_multiplier=iqr_multiplier,
        )
    except (LedgerStatsError, ValueError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    print_report(report, top_n=top or settings.report_top_n)

    try:
        if json_output:
            export_json(report, json_output)
            typer.echo(f"Report written to {json_output}")
        if csv_dir:
            paths = export_tables_csv(report, csv_dir)
            typer.echo(f"{len(paths)} table(s) written to {csv_dir}")
    except OSError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def outliers(
    ledger: Optional[Path] = typer.Argument(
        None, help="Ledger CSV to scan (default from LEDGER_PATH)."
    ),
    field: OutlierField = typer.Option(
        OutlierField.VALUE, "--field", "-f", help="Numeric field to run the IQR rule over."
    ),
    iqr_multiplier: Optional[float] = typer.Option(
        None, "--iqr-multiplier", "-m", min=0.0, help="IQR fence multiplier."
    ),
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Rows shown."),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--lenient", help="Fail on malformed rows instead of skipping them."
    ),
) -> None:
    """
    Show IQR bounds and flagged transactions for one field.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    multiplier = settings.iqr_multiplier if iqr_multiplier is None else iqr_multiplier

    try:
        report = find_outliers(_load(ledger, strict), field, multiplier)
    except (LedgerStatsError, ValueError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    print_outliers(report, top_n=top)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
