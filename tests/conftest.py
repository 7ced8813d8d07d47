"""Pytest configuration and shared fixtures."""

import csv
from datetime import datetime, timezone

import pytest


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def write_csv(path, header, rows):
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


CLOCKIFY_HEADER = ["Project", "Description", "Start Date", "Start Time", "End Date", "End Time"]
CONTESTS_HEADER = ["contestid", "title", "start_time", "end_time"]
FINDINGS_HEADER = ["contest", "handle", "finding", "awardUSD"]


@pytest.fixture
def raw_dir(tmp_path):
    """A stats/raw directory with one shift and one award per month boundary case."""
    d = tmp_path / "raw"
    d.mkdir()
    write_csv(
        d / "clockify.csv",
        CLOCKIFY_HEADER,
        [
            ["audits", "C4", "10.01.2021", "09:00", "10.01.2021", "17:00"],
            ["audits", "Code423n4", "30.01.2021", "20:00", "01.02.2021", "04:00"],
            ["audits", "Other client", "11.01.2021", "09:00", "11.01.2021", "17:00"],
            ["audits", "C4", "not a date", "09:00", "12.01.2021", "17:00"],
        ],
    )
    write_csv(
        d / "contests.csv",
        CONTESTS_HEADER,
        [
            ["1", "Alpha", "2021-02-27T00:00:00.000", "2021-03-03T00:00:00.000"],
            ["2", "Beta", "2021-03-10T00:00:00.000", "2021-03-17T00:00:00.000"],
            ["3", "Gamma", "2021-04-01T00:00:00.000", "2021-04-08T00:00:00.000"],
        ],
    )
    write_csv(
        d / "findings.csv",
        FINDINGS_HEADER,
        [
            ["1", "cmichel", "H-01", "1000"],
            ["1", "alice", "H-01", "1000"],
            ["1", "alice", "M-02", "50"],
            ["2", "cmichel", "M-01", "200"],
            ["2", "bob", "M-01", "not awarded"],
        ],
    )
    return d
