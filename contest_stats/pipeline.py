from __future__ import annotations

import argparse
import csv
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from contest_stats.config import (
    CLOCKIFY_FILE,
    CONTESTS_FILE,
    DEFAULT_ACTIVITY_LABELS,
    DEFAULT_IDENTITY,
    DEFAULT_OUT_DIR,
    DEFAULT_RAW_DIR,
    FINDINGS_FILE,
    StatsConfig,
)
from contest_stats.errors import PreconditionViolation
from contest_stats.scripts.aggregate_series import hourly_rate, monthly_hours, print_series, write_series_csv
from contest_stats.scripts.join_contests import build_contest_index, monthly_awards, wardens_per_contest
from contest_stats.scripts.load_records import load_clockify, load_contests, load_findings
from contest_stats.scripts.plot_monthly_stats import plot_hourly_rate, plot_wardens_per_contest, plot_work_awards_dual

ProgressCB = Optional[Callable[[float, str], None]]


def _call_progress(cb: ProgressCB, p: float, msg: str) -> None:
    if cb:
        cb(float(p), msg)


def compute_series(raw_dir: str | Path, config: StatsConfig, progress_cb: ProgressCB = None) -> Dict[str, Any]:
    raw_dir = Path(raw_dir)

    _call_progress(progress_cb, 0.05, "Loading raw datasets…")
    clockify_rows = load_clockify(raw_dir / CLOCKIFY_FILE)
    contest_rows = load_contests(raw_dir / CONTESTS_FILE)
    findings = load_findings(raw_dir / FINDINGS_FILE)

    _call_progress(progress_cb, 0.25, "Aggregating hours per month…")
    hours = monthly_hours(clockify_rows, config.activity_labels)

    # every contest must be indexed before any finding is joined
    _call_progress(progress_cb, 0.45, "Joining findings to contests…")
    contests = build_contest_index(contest_rows)
    awards = monthly_awards(findings, contests, config.identity)
    wardens = wardens_per_contest(findings, contests)

    return {
        "hours": hours,
        "awards": awards,
        "hourly_rate": hourly_rate(hours, awards),
        "wardens": wardens,
    }


def _write_outputs(series: Dict[str, Any], out_dir: Path, progress_cb: ProgressCB, plots: bool) -> Dict[str, Path]:
    _call_progress(progress_cb, 0.65, "Writing series CSVs…")
    written = {
        "monthly_hours": write_series_csv(series["hours"], out_dir / "monthly_hours.csv", "month", "hours"),
        "monthly_awards": write_series_csv(series["awards"], out_dir / "monthly_awards.csv", "month", "award_usd"),
        "hourly_rate": write_series_csv(series["hourly_rate"], out_dir / "hourly_rate.csv", "month", "usd_per_hour"),
        "wardens_per_contest": write_series_csv(
            series["wardens"], out_dir / "wardens_per_contest.csv", "contest_start", "wardens"
        ),
    }

    if plots:
        _call_progress(progress_cb, 0.80, "Rendering charts…")
        written["work_awards_dual_png"] = plot_work_awards_dual(
            series["hours"], series["awards"], out_dir / "work_awards_dual.png"
        )
        written["hourly_rate_png"] = plot_hourly_rate(series["hourly_rate"], out_dir / "hourly_rate.png")
        written["wardens_per_contest_png"] = plot_wardens_per_contest(
            series["wardens"], out_dir / "wardens_per_contest.png"
        )
    return written


def run_pipeline(
    raw_dir: str | Path,
    out_dir: str | Path,
    config: Optional[StatsConfig] = None,
    progress_cb: ProgressCB = None,
    plots: bool = True,
) -> Dict[str, Any]:
    config = config or StatsConfig()
    out_dir = Path(out_dir)

    series = compute_series(raw_dir, config, progress_cb)

    print_series("HOURS WORKED PER MONTH", series["hours"])
    print_series("USD EARNED PER MONTH", series["awards"])
    print_series("WARDENS PER CONTEST", series["wardens"])

    # stage everything next to out_dir so a failed write leaves out_dir untouched
    out_dir.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix=f".{out_dir.name}-", dir=out_dir.parent) as staging:
        staged = _write_outputs(series, Path(staging), progress_cb, plots)
        out_dir.mkdir(exist_ok=True)
        result = {key: path.replace(out_dir / path.name) for key, path in staged.items()}

    result["out_dir"] = out_dir
    result["series"] = series
    print(f"Done. Outputs in: {out_dir}")
    _call_progress(progress_cb, 1.0, "Done.")
    return result


def main(argv: Optional[list[str]] = None):
    p = argparse.ArgumentParser(description="Monthly hours / awards / participation stats from contest CSV exports.")
    p.add_argument("--raw-dir", default=str(DEFAULT_RAW_DIR), help="Directory with clockify.csv, contests.csv, findings.csv")
    p.add_argument("--out-dir", default=str(DEFAULT_OUT_DIR), help="Where series CSVs and charts are written")
    p.add_argument("--identity", default=DEFAULT_IDENTITY, help="Handle whose awards are counted as earned")
    p.add_argument(
        "--activity-labels",
        nargs="*",
        default=DEFAULT_ACTIVITY_LABELS,
        help="Clockify descriptions counted as contest work (space-separated list).",
    )
    p.add_argument("--no-plots", action="store_true", help="Only write the series CSVs")
    args = p.parse_args(argv)

    config = StatsConfig.from_args(args.identity, args.activity_labels)
    try:
        run_pipeline(args.raw_dir, args.out_dir, config, plots=not args.no_plots)
    except PreconditionViolation as e:
        raise SystemExit(f"Aborting, dataset breaks an aggregation assumption: {e}")
    except OSError as e:
        raise SystemExit(f"I/O error: {e}")
    except (ValueError, csv.Error) as e:
        raise SystemExit(f"Could not read dataset: {e}")


if __name__ == "__main__":
    main()
