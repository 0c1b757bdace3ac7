"""
Tests for IQR outlier detection over the whole ledger.
"""

from __future__ import annotations

import random

import pytest

from ledger_stats.errors import EmptyInputError
from ledger_stats.stats.outliers import (
    OutlierField,
    detect_outliers,
    find_outliers,
    iqr_bounds,
    transaction_count_of,
    value_of,
)

NARROW_MULTIPLIER = 1.5
WIDE_MULTIPLIER = 3.0


class TestIqrBounds:
    def test_bounds_on_reference_values(self, sample_values):
        bounds = iqr_bounds(sample_values)
        assert bounds.q1 == 9.0
        assert bounds.q3 == 18.0
        assert bounds.iqr == 9.0
        assert bounds.lower == pytest.approx(-4.5)
        assert bounds.upper == pytest.approx(31.5)
        assert bounds.multiplier == NARROW_MULTIPLIER

    def test_negative_multiplier_is_rejected(self, sample_values):
        with pytest.raises(ValueError):
            iqr_bounds(sample_values, multiplier=-1.0)

    def test_empty_values_fail_explicitly(self):
        with pytest.raises(EmptyInputError):
            iqr_bounds([])


class TestDetectOutliers:
    def test_flags_high_outlier(self, make_tx):
        txs = [make_tx(v) for v in [10, 12, 11, 13, 10, 12, 11, 1000]]
        # q1 = 11, q3 = 12 -> fences [9.5, 13.5]
        flagged = detect_outliers(txs, value_of)
        assert [tx.value for tx in flagged] == [1000]

    def test_flags_low_outlier(self, make_tx):
        txs = [make_tx(v) for v in [0, 100, 101, 102, 103, 104, 105, 106]]
        flagged = detect_outliers(txs, value_of)
        assert [tx.value for tx in flagged] == [0]

    def test_preserves_input_order(self, make_tx):
        txs = [make_tx(v) for v in [1000, 10, 12, 11, 13, 10, 12, 11, 900]]
        flagged = detect_outliers(txs, value_of)
        assert [tx.value for tx in flagged] == [1000, 900]

    def test_values_on_the_fence_are_not_flagged(self, make_tx):
        txs = [make_tx(v) for v in [1, 2, 3, 4, 5]]
        # multiplier 0 -> fences are exactly [q1, q3] = [2, 4]
        flagged = detect_outliers(txs, value_of, multiplier=0.0)
        assert [tx.value for tx in flagged] == [1, 5]

    def test_homogeneous_values_flag_nothing(self, make_tx):
        txs = [make_tx(500, 7) for _ in range(20)]
        assert detect_outliers(txs, value_of) == []
        assert detect_outliers(txs, transaction_count_of) == []

    def test_fields_are_bounded_independently(self, make_tx):
        txs = [make_tx(100 + i, 10 + (i % 3)) for i in range(12)]
        txs.append(make_tx(105, 5_000))

        assert detect_outliers(txs, value_of) == []
        flagged = detect_outliers(txs, transaction_count_of)
        assert [tx.transaction_count for tx in flagged] == [5_000]

    def test_few_observations_may_share_quartiles(self, make_tx):
        txs = [make_tx(1), make_tx(100)]
        assert detect_outliers(txs, value_of) == []

    def test_empty_ledger_fails_explicitly(self):
        with pytest.raises(EmptyInputError):
            detect_outliers([], value_of)

    def test_wider_multiplier_never_flags_more(self, make_tx):
        rng = random.Random(7)
        txs = [make_tx(rng.randint(1, 1_000) ** 2, rng.randint(1, 50)) for _ in range(200)]

        for selector in (value_of, transaction_count_of):
            narrow = detect_outliers(txs, selector, multiplier=NARROW_MULTIPLIER)
            wide = detect_outliers(txs, selector, multiplier=WIDE_MULTIPLIER)
            assert len(wide) <= len(narrow)
            assert all(tx in narrow for tx in wide)

    def test_input_is_not_mutated(self, ledger):
        before = list(ledger)
        detect_outliers(ledger, value_of)
        assert ledger == before


class TestFindOutliers:
    def test_report_carries_bounds_and_flagged_rows(self, make_tx):
        txs = [make_tx(10, c) for c in [10, 12, 11, 13, 10, 12, 11, 1000]]
        report = find_outliers(txs, OutlierField.TRANSACTION_COUNT)

        assert report.field == "transaction_count"
        assert report.bounds.q1 == 11.0
        assert report.bounds.q3 == 12.0
        assert [tx.transaction_count for tx in report.flagged] == [1000]

    def test_field_accepts_plain_string(self, ledger):
        report = find_outliers(ledger, "value", multiplier=WIDE_MULTIPLIER)
        assert report.field == "value"
        assert report.bounds.multiplier == WIDE_MULTIPLIER

    def test_unknown_field_is_rejected(self, ledger):
        with pytest.raises(ValueError):
            find_outliers(ledger, "amount")

    def test_selector_property_matches_module_functions(self, make_tx):
        tx = make_tx(123, 45)
        assert OutlierField.VALUE.selector(tx) == 123
        assert OutlierField.TRANSACTION_COUNT.selector(tx) == 45

    def test_flags_the_same_rows_as_detect_outliers(self, make_tx):
        txs = [make_tx(v) for v in [100, 120, 110, 130, 105, 5000, 1]]
        report = find_outliers(txs, "value")
        assert report.flagged == detect_outliers(txs, value_of)
        assert [tx.value for tx in report.flagged] == [5000, 1]
