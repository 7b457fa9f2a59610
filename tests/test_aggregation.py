"""Tests for the shared aggregation primitives."""

from datetime import datetime
from decimal import Decimal

import pytest

from auction_accounting.config import AgingConfig
from auction_accounting.processing.aggregation import (
    AgingBucket,
    aging_bucket,
    bucket_by_day,
    bucket_by_month,
    days_elapsed,
    group_sum,
    percentage_of,
    running_accumulate,
    sorted_by_amount,
    sorted_by_key,
)


class TestGroupSum:
    """Tests for group_sum."""

    def test_sums_per_key_in_first_seen_order(self) -> None:
        """Test amounts are summed per key and keys keep insertion order."""
        records = [("card", "100"), ("wire", "50"), ("card", "25")]

        totals = group_sum(records, lambda r: r[0], lambda r: Decimal(r[1]))

        assert totals == {"card": Decimal("125"), "wire": Decimal("50")}
        assert list(totals) == ["card", "wire"]

    def test_none_key_contributes_nothing(self) -> None:
        """Test records without a key are skipped."""
        records = [(None, "100"), ("card", "10")]

        totals = group_sum(records, lambda r: r[0], lambda r: Decimal(r[1]))

        assert totals == {"card": Decimal("10")}

    def test_empty_input(self) -> None:
        """Test an empty input gives an empty mapping."""
        assert group_sum([], lambda r: r, lambda r: Decimal("1")) == {}


class TestSorting:
    """Tests for ordering helpers."""

    def test_sorted_by_amount_descending(self) -> None:
        """Test largest amounts come first."""
        totals = {"a": Decimal("10"), "b": Decimal("30"), "c": Decimal("20")}

        assert [k for k, _ in sorted_by_amount(totals)] == ["b", "c", "a"]

    def test_sorted_by_amount_ties_keep_insertion_order(self) -> None:
        """Test equal amounts are not reordered."""
        totals = {"first": Decimal("5"), "second": Decimal("5"), "third": Decimal("9")}

        assert [k for k, _ in sorted_by_amount(totals)] == ["third", "first", "second"]

    def test_sorted_by_amount_limit(self) -> None:
        """Test the limit truncates after sorting."""
        totals = {str(i): Decimal(i) for i in range(15)}

        ranked = sorted_by_amount(totals, limit=10)

        assert len(ranked) == 10
        assert ranked[0] == ("14", Decimal("14"))

    def test_sorted_by_key_chronological(self) -> None:
        """Test period keys sort chronologically."""
        totals = {"2025-02": Decimal("1"), "2024-12": Decimal("2"), "2025-01": Decimal("3")}

        assert [k for k, _ in sorted_by_key(totals)] == ["2024-12", "2025-01", "2025-02"]


class TestBuckets:
    """Tests for period bucket keys."""

    def test_month_key_is_zero_padded(self) -> None:
        """Test month keys have the YYYY-MM form."""
        assert bucket_by_month(datetime(2025, 3, 9, 18, 0)) == "2025-03"

    def test_day_key_is_zero_padded(self) -> None:
        """Test day keys have the YYYY-MM-DD form."""
        assert bucket_by_day(datetime(2025, 3, 9, 18, 0)) == "2025-03-09"


class TestRunningAccumulate:
    """Tests for running_accumulate."""

    def test_running_balance(self) -> None:
        """Test cumulative sums over ordered net amounts."""
        entries = [
            ("2025-01-01", Decimal("100")),
            ("2025-01-02", Decimal("-40")),
            ("2025-01-03", Decimal("10")),
        ]

        assert running_accumulate(entries) == [
            ("2025-01-01", Decimal("100")),
            ("2025-01-02", Decimal("60")),
            ("2025-01-03", Decimal("70")),
        ]

    def test_empty(self) -> None:
        """Test no entries gives an empty series."""
        assert running_accumulate([]) == []


class TestAging:
    """Tests for day counting and aging buckets."""

    def test_days_elapsed_floors_partial_days(self) -> None:
        """Test a partial day is not counted."""
        assert days_elapsed(datetime(2025, 1, 1, 12, 0), datetime(2025, 1, 2, 11, 59)) == 0
        assert days_elapsed(datetime(2025, 1, 1, 12, 0), datetime(2025, 1, 2, 12, 0)) == 1

    @pytest.mark.parametrize(
        "days, expected",
        [
            (0, AgingBucket.CURRENT),
            (30, AgingBucket.CURRENT),
            (31, AgingBucket.THIRTY_DAYS),
            (60, AgingBucket.THIRTY_DAYS),
            (61, AgingBucket.SIXTY_DAYS),
            (90, AgingBucket.SIXTY_DAYS),
            (91, AgingBucket.NINETY_DAYS_PLUS),
            (400, AgingBucket.NINETY_DAYS_PLUS),
        ],
    )
    def test_default_boundaries(self, days: int, expected: AgingBucket) -> None:
        """Test upper bounds are inclusive."""
        assert aging_bucket(days) == expected

    def test_future_invoice_is_current(self) -> None:
        """Test a negative age falls in the current bucket."""
        assert aging_bucket(-3) == AgingBucket.CURRENT

    def test_custom_boundaries(self) -> None:
        """Test configured boundaries are honoured."""
        aging = AgingConfig(current_days=15, thirty_days=45, sixty_days=75)

        assert aging_bucket(16, aging) == AgingBucket.THIRTY_DAYS
        assert aging_bucket(76, aging) == AgingBucket.NINETY_DAYS_PLUS


class TestPercentageOf:
    """Tests for percentage_of."""

    def test_percentage(self) -> None:
        """Test part as a share of whole."""
        assert percentage_of(Decimal("25"), Decimal("200")) == Decimal("12.5")

    def test_zero_whole_returns_default(self) -> None:
        """Test a zero denominator yields the default instead of raising."""
        assert percentage_of(Decimal("5"), Decimal("0")) == Decimal("0")
        assert percentage_of(Decimal("0"), Decimal("0"), default=Decimal("100")) == Decimal("100")
