"""
Tests for splitting intervals across calendar months.
"""

from datetime import timedelta

import pytest

from conftest import utc
from contest_stats.errors import PreconditionViolation
from contest_stats.scripts.allocate_monthly import (
    MonthKey,
    allocate_hours,
    allocate_value,
    split_at_month_boundary,
)


class TestMonthKey:
    """Test MonthKey ordering and boundaries."""

    def test_orders_by_year_then_month(self):
        assert MonthKey(2020, 12) < MonthKey(2021, 1) < MonthKey(2021, 2)

    def test_of_drops_day_and_time(self):
        assert MonthKey.of(utc(2021, 3, 31, 23, 59)) == MonthKey(2021, 3)

    def test_first_instant_is_midnight_utc(self):
        assert MonthKey(2021, 2).first_instant() == utc(2021, 2, 1)

    def test_str(self):
        assert str(MonthKey(2021, 2)) == "2021-02"


class TestAllocateHours:
    """Test allocate_hours function."""

    def test_same_month_single_allocation(self):
        assert allocate_hours(utc(2021, 1, 10, 9), utc(2021, 1, 10, 17)) == [(MonthKey(2021, 1), 8.0)]

    def test_same_day_never_splits(self):
        result = allocate_hours(utc(2021, 1, 31, 0, 0), utc(2021, 1, 31, 23, 59))
        assert len(result) == 1

    def test_splits_shift_across_month_boundary(self):
        result = allocate_hours(utc(2021, 1, 30, 20), utc(2021, 2, 1, 4))
        assert result == [(MonthKey(2021, 1), 28.0), (MonthKey(2021, 2), 4.0)]

    def test_splits_eight_hour_shift_evenly_at_midnight(self):
        result = allocate_hours(utc(2021, 1, 31, 20), utc(2021, 2, 1, 4))
        assert result == [(MonthKey(2021, 1), 4.0), (MonthKey(2021, 2), 4.0)]

    def test_splits_across_year_boundary(self):
        result = allocate_hours(utc(2020, 12, 31, 22), utc(2021, 1, 1, 1))
        assert result == [(MonthKey(2020, 12), 2.0), (MonthKey(2021, 1), 1.0)]

    def test_ending_exactly_at_midnight_stays_in_start_month(self):
        result = allocate_hours(utc(2021, 1, 31, 22), utc(2021, 2, 1))
        assert result == [(MonthKey(2021, 1), 2.0)]

    def test_starting_exactly_at_midnight_stays_in_month(self):
        result = allocate_hours(utc(2021, 2, 1), utc(2021, 2, 1, 2))
        assert result == [(MonthKey(2021, 2), 2.0)]


class TestAllocateValue:
    """Test allocate_value function."""

    def test_same_month_keeps_value_unchanged(self):
        assert allocate_value(utc(2021, 3, 10), utc(2021, 3, 17), 123.45) == [(MonthKey(2021, 3), 123.45)]

    def test_award_split_proportionally(self):
        result = allocate_value(utc(2021, 2, 27), utc(2021, 3, 3), 1000.0)
        assert result[0][0] == MonthKey(2021, 2)
        assert result[1][0] == MonthKey(2021, 3)
        assert result[0][1] == pytest.approx(250.0)
        assert result[1][1] == pytest.approx(750.0)

    @pytest.mark.parametrize(
        "start, end, value",
        [
            (utc(2021, 1, 20, 13, 7), utc(2021, 2, 3, 1, 1), 999.99),
            (utc(2021, 2, 28, 23, 59), utc(2021, 3, 1, 0, 1), 0.1),
            (utc(2020, 2, 10), utc(2020, 3, 8), 31337.0),
        ],
    )
    def test_parts_sum_to_value(self, start, end, value):
        parts = allocate_value(start, end, value)
        assert len(parts) == 2
        assert sum(v for _, v in parts) == pytest.approx(value, rel=1e-9)

    def test_contest_ending_at_month_start_keeps_full_award(self):
        assert allocate_value(utc(2021, 2, 20), utc(2021, 3, 1), 80.0) == [(MonthKey(2021, 2), 80.0)]

    def test_zero_award(self):
        result = allocate_value(utc(2021, 2, 27), utc(2021, 3, 3), 0.0)
        assert [v for _, v in result] == [0.0, 0.0]


class TestPreconditions:
    """Test fatal preconditions of split_at_month_boundary."""

    def test_end_before_start_is_fatal(self):
        with pytest.raises(PreconditionViolation):
            allocate_hours(utc(2021, 1, 2), utc(2021, 1, 1))

    def test_empty_interval_is_fatal(self):
        with pytest.raises(PreconditionViolation):
            allocate_value(utc(2021, 1, 1), utc(2021, 1, 1), 10.0)

    def test_span_of_28_days_is_fatal(self):
        start = utc(2021, 1, 20)
        with pytest.raises(PreconditionViolation):
            split_at_month_boundary(start, start + timedelta(days=28))

    def test_just_under_28_days_is_accepted(self):
        start = utc(2021, 2, 1)
        parts = split_at_month_boundary(start, start + timedelta(days=28) - timedelta(seconds=1))
        assert [m for m, _ in parts] == [MonthKey(2021, 2)]
