from __future__ import annotations

import datetime as dt

import pytest

from ledger_stats.dimensions import (
    DateDimension,
    Dimension,
    DomainDimension,
    MonthBucketing,
    MonthDimension,
    RegionDimension,
)
from ledger_stats.stats.aggregator import OrderPolicy


@pytest.mark.parametrize(
    "dimension",
    [RegionDimension(), DateDimension(), MonthDimension(), DomainDimension()],
    ids=lambda d: d.name,
)
def test_concrete_dimensions_satisfy_protocol(dimension):
    assert isinstance(dimension, Dimension)
    assert dimension.description


def test_key_extractors(make_tx):
    tx = make_tx(date=dt.date(2023, 3, 9), domain="MEDICAL", location="Pune")

    assert RegionDimension().key_of(tx) == "Pune"
    assert DomainDimension().key_of(tx) == "MEDICAL"
    assert DateDimension().key_of(tx) == dt.date(2023, 3, 9)
    assert MonthDimension().key_of(tx) == 3
    assert MonthDimension(MonthBucketing.YEAR_MONTH).key_of(tx) == "2023-03"


def test_default_orders():
    assert RegionDimension().default_order is OrderPolicy.BY_TOTAL_DESC
    assert DomainDimension().default_order is OrderPolicy.BY_TOTAL_DESC
    assert DateDimension().default_order is OrderPolicy.BY_KEY
    assert MonthDimension().default_order is OrderPolicy.BY_KEY


def test_region_aggregate_uses_default_then_override(ledger):
    dimension = RegionDimension()
    assert [s.key for s in dimension.aggregate(ledger)] == ["Mumbai", "Goa", "Delhi"]
    assert [s.key for s in dimension.aggregate(ledger, OrderPolicy.BY_KEY)] == [
        "Delhi",
        "Goa",
        "Mumbai",
    ]


def test_year_month_bucketing_separates_years(ledger):
    stats = MonthDimension("year_month").aggregate(ledger)
    assert [(s.key, s.total) for s in stats] == [
        ("2022-01", 800),
        ("2022-02", 450),
        ("2023-01", 50),
    ]


def test_month_only_bucketing_merges_years(ledger):
    stats = MonthDimension(MonthBucketing.MONTH_ONLY).aggregate(ledger)
    assert [(s.key, s.count) for s in stats] == [(1, 4), (2, 2)]


def test_month_description_names_bucketing():
    assert "merging years" in MonthDimension().description
    assert "YYYY-MM" in MonthDimension(MonthBucketing.YEAR_MONTH).description


def test_unknown_bucketing_is_rejected():
    with pytest.raises(ValueError):
        MonthDimension("quarter")
