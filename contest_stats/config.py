from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# ---- CONFIG (defaults can be overridden via CLI) ----

DEFAULT_IDENTITY = "cmichel"

DEFAULT_ACTIVITY_LABELS = [
    "C4",
    "Code423n4",
]

DEFAULT_RAW_DIR = Path("stats") / "raw"
DEFAULT_OUT_DIR = Path("plots")

CLOCKIFY_FILE = "clockify.csv"
CONTESTS_FILE = "contests.csv"
FINDINGS_FILE = "findings.csv"

# 1280x768 px
CHART_FIGSIZE = (12.8, 7.68)
CHART_DPI = 100


@dataclass(frozen=True)
class StatsConfig:
    identity: str = DEFAULT_IDENTITY
    activity_labels: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_ACTIVITY_LABELS))

    @classmethod
    def from_args(cls, identity=None, activity_labels=None) -> "StatsConfig":
        return cls(
            identity=DEFAULT_IDENTITY if identity is None else identity,
            activity_labels=frozenset(DEFAULT_ACTIVITY_LABELS if activity_labels is None else activity_labels),
        )
