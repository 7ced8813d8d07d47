"""
Read the raw Clockify / contests / findings CSV exports into typed rows.

Rows with missing columns or unparsable numbers are skipped, the rest of the
file is still used. A missing file is an error.
"""

from __future__ import annotations

import argparse
import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from contest_stats.config import CLOCKIFY_FILE, CONTESTS_FILE, DEFAULT_RAW_DIR, FINDINGS_FILE
from contest_stats.errors import RowParseError

T = TypeVar("T")


@dataclass(frozen=True)
class ClockifyRow:
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    description: str


@dataclass(frozen=True)
class ContestRow:
    id: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class Finding:
    contest_id: str
    participant: str
    award: float


# ---- HELPERS ----

def _field(row: dict, *names: str) -> str:
    """First non-missing column among `names` (exports disagree on headers)."""
    for name in names:
        value = row.get(name)
        if value is not None:
            if "\ufffd" in value:
                raise RowParseError(f"undecodable bytes in column {name!r}")
            return value.strip()
    raise RowParseError(f"missing column {names[0]!r}")


def parse_award(s: str) -> float:
    try:
        award = float(s)
    except (TypeError, ValueError):
        raise RowParseError(f"award is not a number: {s!r}") from None
    if not math.isfinite(award) or award < 0:
        raise RowParseError(f"award must be a finite non-negative number: {s!r}")
    return award


def clockify_row(row: dict) -> ClockifyRow:
    return ClockifyRow(
        start_date=_field(row, "Start Date", "start_date"),
        start_time=_field(row, "Start Time", "start_time"),
        end_date=_field(row, "End Date", "end_date"),
        end_time=_field(row, "End Time", "end_time"),
        description=_field(row, "Description", "description"),
    )


def contest_row(row: dict) -> ContestRow:
    return ContestRow(
        id=_field(row, "contestid", "id"),
        start_time=_field(row, "start_time"),
        end_time=_field(row, "end_time"),
    )


def finding_row(row: dict) -> Finding:
    return Finding(
        contest_id=_field(row, "contest"),
        participant=_field(row, "handle"),
        award=parse_award(_field(row, "awardUSD", "award_usd")),
    )


def read_rows(path: str | Path, convert: Callable[[dict], T]) -> List[T]:
    path = Path(path)
    rows = []
    skipped = 0
    with path.open("r", encoding="utf-8", errors="replace", newline="") as f:
        reader = csv.DictReader(f)
        for r in reader:
            try:
                rows.append(convert(r))
            except RowParseError:
                skipped += 1

    print(f"Loaded {len(rows)} rows from {path} (skipped {skipped})")
    return rows


def load_clockify(path: str | Path) -> List[ClockifyRow]:
    return read_rows(path, clockify_row)


def load_contests(path: str | Path) -> List[ContestRow]:
    return read_rows(path, contest_row)


def load_findings(path: str | Path) -> List[Finding]:
    return read_rows(path, finding_row)


def main(argv: Optional[list[str]] = None):
    p = argparse.ArgumentParser(description="Check how many rows of each raw dataset parse.")
    p.add_argument("--raw-dir", default=str(DEFAULT_RAW_DIR))
    args = p.parse_args(argv)

    raw_dir = Path(args.raw_dir)
    load_clockify(raw_dir / CLOCKIFY_FILE)
    load_contests(raw_dir / CONTESTS_FILE)
    load_findings(raw_dir / FINDINGS_FILE)


if __name__ == "__main__":
    main()
