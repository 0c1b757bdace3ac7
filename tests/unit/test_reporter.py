from __future__ import annotations

import csv
import json

from rich.console import Console

from ledger_stats.domain.models import DimensionTable
from ledger_stats.orchestrator import build_report
from ledger_stats.reporter import (
    TABLE_COLUMNS,
    build_stats_table,
    export_json,
    export_table_csv,
    export_tables_csv,
    print_outliers,
    print_report,
)
from ledger_stats.stats.aggregator import summarize_group
from ledger_stats.stats.outliers import find_outliers

EXPECTED_REGION_ROWS = 3


def _console() -> Console:
    return Console(record=True, width=160, color_system=None)


def test_print_report_renders_every_table(ledger):
    console = _console()
    print_report(build_report(ledger), console=console)
    text = console.export_text()

    assert "Ledger summary" in text
    for title in ("By region", "By date", "By month", "By domain"):
        assert title in text
    assert "Mumbai" in text
    assert "Outliers by value" in text
    assert "Outliers by transaction_count" in text


def test_top_n_hides_remaining_groups(ledger):
    table = build_report(ledger, dimension_names=["region"]).tables["region"]
    console = _console()
    console.print(build_stats_table(table, top_n=1))
    text = console.export_text()

    assert "Mumbai" in text
    assert "Delhi" not in text
    assert "... 2 more" in text


def test_print_outliers_reports_empty_result(make_tx):
    report = find_outliers([make_tx(5) for _ in range(4)], "value")
    console = _console()
    print_outliers(report, console=console)
    text = console.export_text()
    assert "No outliers by value" in text
    assert "flagged, input order" not in text


def test_export_json_writes_full_report(ledger, tmp_path):
    path = export_json(build_report(ledger), tmp_path / "out" / "report.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["transaction_count"] == len(ledger)
    assert payload["tables"]["region"]["stats"][0]["key"] == "Mumbai"
    assert payload["tables"]["date"]["stats"][0]["key"] == "2022-01-05"


def test_export_table_csv_keeps_report_order(ledger, tmp_path):
    table = build_report(ledger, dimension_names=["region"]).tables["region"]
    path = export_table_csv(table, tmp_path / "region.csv")

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == TABLE_COLUMNS
    assert len(rows) == EXPECTED_REGION_ROWS + 1
    assert rows[1][0] == "Mumbai"
    assert rows[1][1] == "600"
    assert float(rows[1][3]) == 300.0


def test_export_tables_csv_writes_one_file_per_dimension(ledger, tmp_path):
    report = build_report(ledger, dimension_names=["region", "month"])
    paths = export_tables_csv(report, tmp_path / "tables")
    assert sorted(p.name for p in paths) == ["month.csv", "region.csv"]
    assert all(p.exists() for p in paths)


def test_empty_group_median_renders_as_blank(tmp_path):
    table = DimensionTable(
        dimension="region",
        order="key",
        stats=[summarize_group("Goa", [], 0)],
        duration_seconds=0.0,
    )
    console = _console()
    console.print(build_stats_table(table))
    assert "Goa" in console.export_text()

    path = export_table_csv(table, tmp_path / "empty.csv")
    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[1] == ["Goa", "0", "0", "0.000000", "", "0"]
