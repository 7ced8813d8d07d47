"""
Turn raw Clockify / contest rows into UTC intervals [start, end).

Clockify exports local "dd.mm.YYYY" dates with "HH:MM" times, contests use
ISO-8601 timestamps like "2021-02-17T00:00:00.000". Everything is read as UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from dateutil import parser as dateparser

from contest_stats.errors import PreconditionViolation, RowParseError

LOCAL_FORMAT = "%d.%m.%Y %H:%M"


@dataclass(frozen=True)
class TimeEntry:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ContestInterval:
    id: str
    start: datetime
    end: datetime


def parse_local_dt(date_str: str, time_str: str) -> datetime:
    s = f"{date_str} {time_str}"
    try:
        d = datetime.strptime(s, LOCAL_FORMAT)
    except ValueError:
        raise RowParseError(f"not a '{LOCAL_FORMAT}' timestamp: {s!r}") from None
    return d.replace(tzinfo=timezone.utc)


def parse_iso_dt(s: str) -> datetime:
    try:
        d = dateparser.isoparse(s)
    except (TypeError, ValueError, OverflowError):
        raise RowParseError(f"not an ISO-8601 timestamp: {s!r}") from None
    if d.tzinfo is None:
        return d.replace(tzinfo=timezone.utc)
    return d.astimezone(timezone.utc)


def require_ordered(start: datetime, end: datetime) -> None:
    if end <= start:
        raise PreconditionViolation(f"interval end {end.isoformat()} is not after start {start.isoformat()}")


def time_entry(row) -> TimeEntry:
    """Build a TimeEntry from a ClockifyRow; unparsable timestamps raise RowParseError."""
    start = parse_local_dt(row.start_date, row.start_time)
    end = parse_local_dt(row.end_date, row.end_time)
    require_ordered(start, end)
    return TimeEntry(start, end)


def contest_interval(row) -> ContestInterval:
    start = parse_iso_dt(row.start_time)
    end = parse_iso_dt(row.end_time)
    require_ordered(start, end)
    return ContestInterval(row.id, start, end)
