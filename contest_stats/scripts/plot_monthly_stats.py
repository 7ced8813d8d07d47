"""Render the monthly series as 1280x768 PNG charts."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from contest_stats.config import CHART_DPI, CHART_FIGSIZE


def _month_label(month) -> str:
    return month.first_instant().strftime("%b-%y")


def _save(fig, save_path: str | Path) -> Path:
    sp = Path(save_path)
    sp.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(sp, dpi=CHART_DPI)
    plt.close(fig)
    print(f"Saved: {sp}")
    return sp


def plot_work_awards_dual(hours, awards, save_path: str | Path) -> Path:
    """Hours worked (left axis) and $ earned (right axis) on one month axis."""
    months = sorted({m for m, _ in hours} | {m for m, _ in awards})
    positions = {m: i for i, m in enumerate(months)}

    fig, ax = plt.subplots(figsize=CHART_FIGSIZE)
    ax2 = ax.twinx()

    ax.plot([positions[m] for m, _ in hours], [v for _, v in hours], color="blue", label="hours worked")
    ax2.plot([positions[m] for m, _ in awards], [v for _, v in awards], color="red", label="$ earned")

    ax.set_xticks(range(len(months)))
    ax.set_xticklabels([_month_label(m) for m in months], rotation=45)
    ax.set_ylabel("Hours worked")
    ax2.set_ylabel("$ earned")
    ax.set_ylim(bottom=0)
    ax2.set_ylim(bottom=0)
    ax.set_title("Hours worked / $ earned (per month)")

    lines = ax.get_lines() + ax2.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc="upper left")
    return _save(fig, save_path)


def plot_hourly_rate(rate, save_path: str | Path) -> Path:
    fig, ax = plt.subplots(figsize=CHART_FIGSIZE)
    ax.plot(range(len(rate)), [v for _, v in rate], color="blue", label="hourly rate $/h")
    ax.set_xticks(range(len(rate)))
    ax.set_xticklabels([_month_label(m) for m, _ in rate], rotation=45)
    ax.set_ylabel("Hourly rate $/h")
    ax.set_ylim(bottom=0)
    ax.set_title("Hourly rate (per month)")
    return _save(fig, save_path)


def plot_wardens_per_contest(wardens, save_path: str | Path) -> Path:
    fig, ax = plt.subplots(figsize=CHART_FIGSIZE)
    ax.plot([d for d, _ in wardens], [n for _, n in wardens], color="blue", label="wardens / contest")
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%d-%b-%y"))
    ax.set_ylabel("wardens / contest")
    ax.set_ylim(bottom=0)
    ax.set_title("Wardens per contest")
    return _save(fig, save_path)
