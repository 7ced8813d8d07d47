"""
Join findings to their contest's time window.

- monthly awards: the identity's award per finding, spread over the month(s)
  the contest ran in
- participation: distinct handles per contest, keyed by contest start
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Tuple

from contest_stats.errors import RowParseError, UnknownContestError
from contest_stats.scripts.aggregate_series import MonthlySeries, accumulate, to_sorted_series
from contest_stats.scripts.allocate_monthly import allocate_value
from contest_stats.scripts.normalize_intervals import ContestInterval, contest_interval


def build_contest_index(contest_rows) -> Dict[str, ContestInterval]:
    contests = {}
    for row in contest_rows:
        try:
            interval = contest_interval(row)
        except RowParseError:
            continue
        if interval.id in contests:
            # later rows win
            print(f"Warning: duplicate contest id {interval.id!r}, keeping the later row")
        contests[interval.id] = interval
    return contests


def contest_for(contests: Dict[str, ContestInterval], contest_id: str) -> ContestInterval:
    try:
        return contests[contest_id]
    except KeyError:
        raise UnknownContestError(contest_id) from None


def monthly_awards(findings, contests: Dict[str, ContestInterval], identity: str) -> MonthlySeries:
    totals = defaultdict(float)
    for f in findings:
        if f.participant != identity:
            continue
        t = contest_for(contests, f.contest_id)
        accumulate(allocate_value(t.start, t.end, f.award), totals)
    return to_sorted_series(totals)


def wardens_per_contest(findings, contests: Dict[str, ContestInterval]) -> List[Tuple[datetime, int]]:
    """Distinct participants per contest, keyed by contest start.

    Contests nobody has findings in yet are left out. Contests starting at the
    same instant are added together.
    """
    handles = defaultdict(set)
    for f in findings:
        if f.contest_id in contests:
            handles[f.contest_id].add(f.participant)

    counts = defaultdict(int)
    accumulate(
        ((contests[cid].start, len(wardens)) for cid, wardens in handles.items() if wardens),
        counts,
    )
    return to_sorted_series(counts)
