"""
Assign an interval's value to the calendar month(s) it touches.

An interval is shorter than 28 days, so it crosses at most one month boundary.
If it does, the value is split at midnight UTC on the 1st of the later month,
proportional to the time spent on each side.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Tuple

from contest_stats.errors import PreconditionViolation

MAX_SPAN = timedelta(days=28)


@dataclass(frozen=True, order=True)
class MonthKey:
    year: int
    month: int

    @classmethod
    def of(cls, instant: datetime) -> "MonthKey":
        return cls(instant.year, instant.month)

    def first_instant(self) -> datetime:
        return datetime(self.year, self.month, 1, tzinfo=timezone.utc)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


Allocation = Tuple[MonthKey, float]


def split_at_month_boundary(start: datetime, end: datetime) -> List[Tuple[MonthKey, timedelta]]:
    """Time spent in each month, one entry per month touched (at most two)."""
    total = end - start
    if total <= timedelta(0):
        raise PreconditionViolation(f"interval end {end.isoformat()} is not after start {start.isoformat()}")
    if total >= MAX_SPAN:
        raise PreconditionViolation(
            f"interval {start.isoformat()} .. {end.isoformat()} spans {total}, expected less than {MAX_SPAN.days} days"
        )

    month_start = MonthKey.of(start)
    month_end = MonthKey.of(end)
    if month_start == month_end:
        return [(month_start, total)]

    boundary = month_end.first_instant()
    if end == boundary:
        # [start, end) stops right before the later month begins
        return [(month_start, total)]
    return [
        (month_start, boundary - start),
        (month_end, end - boundary),
    ]


def allocate_hours(start: datetime, end: datetime) -> List[Allocation]:
    return [
        (month, duration.total_seconds() / 3600.0)
        for month, duration in split_at_month_boundary(start, end)
    ]


def allocate_value(start: datetime, end: datetime, value: float) -> List[Allocation]:
    """Apportion a fixed total (e.g. an award) over the months of [start, end)."""
    parts = split_at_month_boundary(start, end)
    if len(parts) == 1:
        return [(parts[0][0], value)]

    total = (end - start).total_seconds()
    return [
        (month, value * duration.total_seconds() / total)
        for month, duration in parts
    ]
