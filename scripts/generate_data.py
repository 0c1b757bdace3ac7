"""
Synthetic ledger generator for ledger-stats.

Implements deterministic pseudo-random row generation and CSV emission in the
format the CSV record source reads (MM/DD/YYYY dates, upper-case domains,
integer values). Optionally injects a share of extreme rows and the classic
"RESTRAUNT" misspelling so outlier detection and normalization have something
to do.
"""

from __future__ import annotations

import csv
import datetime as dt
import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic transaction ledger as CSV.")

HEADER = ["Date", "Domain", "Location", "Value", "Transaction_count"]

DOMAINS = ["RESTAURANT", "RETAIL", "MEDICAL", "EDUCATION", "INVESTMENTS", "PUBLIC", "INTERNATIONAL"]
LOCATIONS = [
    "Goa",
    "Mumbai",
    "Delhi",
    "Bangalore",
    "Kolkata",
    "Chennai",
    "Pune",
    "Surat",
    "Jaipur",
    "Ludhiana",
]


def _generate_rows_csv(
    csv_path: Path,
    rows: int,
    batch_size: int,
    seed: int,
    start: dt.date = dt.date(2022, 1, 1),
    days: int = 365,
    outlier_rate: float = 0.01,
    misspell_rate: float = 0.05,
) -> None:
    rng = random.Random(seed)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)

        buffer: list[list[str]] = []
        for _ in range(rows):
            date = start + dt.timedelta(days=rng.randrange(days))
            domain = rng.choice(DOMAINS)
            if domain == "RESTAURANT" and rng.random() < misspell_rate:
                domain = "RESTRAUNT"
            value = rng.randint(300_000, 1_000_000)
            count = rng.randint(1_000, 2_000)
            if rng.random() < outlier_rate:
                value *= rng.randint(5, 20)
                count *= rng.randint(5, 20)
            buffer.append(
                [
                    date.strftime("%m/%d/%Y"),
                    domain,
                    rng.choice(LOCATIONS),
                    str(value),
                    str(count),
                ]
            )
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


@app.command()
def main(
    output: Path = typer.Option(
        Path("data/transactions.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
    rows: int = typer.Option(
        10_000,
        "--rows",
        "-r",
        min=0,
        help="Number of rows to generate.",
    ),
    batch_size: int = typer.Option(
        1_000,
        "--batch-size",
        "-b",
        min=1,
        help="Batch size for CSV buffering during generation.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    start: str = typer.Option(
        "2022-01-01",
        "--start",
        help="First possible date (YYYY-MM-DD).",
    ),
    days: int = typer.Option(
        365,
        "--days",
        min=1,
        help="Number of days the dates are spread over.",
    ),
    outlier_rate: float = typer.Option(
        0.01,
        "--outlier-rate",
        min=0.0,
        max=1.0,
        help="Share of rows inflated into outliers.",
    ),
) -> None:
    """
    Generate a synthetic ledger CSV.
    """
    started = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)

    typer.echo(f"Generating {rows:,} rows -> {output} (batch={batch_size}, seed={seed})")
    _generate_rows_csv(
        output,
        rows=rows,
        batch_size=batch_size,
        seed=seed,
        start=dt.date.fromisoformat(start),
        days=days,
        outlier_rate=outlier_rate,
    )
    duration = time.perf_counter() - started
    typer.echo(f"CSV generation completed in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
