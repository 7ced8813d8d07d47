"""
Fold allocations into per-key running totals and sorted series.

Also builds the hours-per-month series from Clockify rows, derives the hourly
rate and writes series to CSV.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Dict, Hashable, Iterable, List, Tuple

import pandas as pd

from contest_stats.errors import RowParseError
from contest_stats.scripts.allocate_monthly import MonthKey, allocate_hours
from contest_stats.scripts.normalize_intervals import time_entry

MonthlySeries = List[Tuple[MonthKey, float]]


def accumulate(pairs: Iterable[Tuple[Hashable, float]], totals=None) -> Dict:
    totals = defaultdict(float) if totals is None else totals
    for key, value in pairs:
        totals[key] += value
    return totals


def to_sorted_series(totals: Dict) -> list:
    return sorted(totals.items(), key=lambda kv: kv[0])


def monthly_hours(clockify_rows, activity_labels) -> MonthlySeries:
    totals = defaultdict(float)
    for row in clockify_rows:
        if row.description not in activity_labels:
            continue
        try:
            entry = time_entry(row)
        except RowParseError:
            continue
        accumulate(allocate_hours(entry.start, entry.end), totals)
    return to_sorted_series(totals)


def hourly_rate(hours: MonthlySeries, awards: MonthlySeries) -> MonthlySeries:
    """USD per hour for every month with hours worked; months without awards rate 0."""
    awards_by_month = dict(awards)
    return [
        (month, awards_by_month.get(month, 0.0) / h)
        for month, h in hours
        if h > 0
    ]


def series_frame(series, key_col: str, value_col: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            key_col: [k.isoformat() if hasattr(k, "isoformat") else str(k) for k, _ in series],
            value_col: [v for _, v in series],
        }
    )


def write_series_csv(series, out_path: str | Path, key_col: str, value_col: str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    series_frame(series, key_col, value_col).to_csv(out_path, index=False)
    print(f"Done. Wrote: {out_path}")
    return out_path


def format_series(series: list) -> str:
    return ", ".join(f"{k}: {v:.2f}" if isinstance(v, float) else f"{k}: {v}" for k, v in series)


def print_series(title: str, series: list) -> None:
    print(f"\n=== {title} ===")
    print(format_series(series) or "(empty)")
