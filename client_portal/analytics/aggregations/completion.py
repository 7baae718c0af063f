"""Project progress metrics.

Two distinct completion measures are exposed and never merged:

- ``estimate_completion_pct``: logged hours against the original estimates.
- ``done_ratio_pct``: share of issues whose status category is ``done``.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from client_portal.analytics.formatting import round_half_up


@dataclass(slots=True, frozen=True)
class ProjectMetrics:
    total_issues: int
    done_issues: int
    done_ratio_pct: int
    estimate_completion_pct: int
    estimated_hours: float
    logged_hours: float
    worklog_count: int

    @property
    def total_hours(self) -> int:
        return round_half_up(self.logged_hours)


def _seconds_sum(df: pd.DataFrame, column: str) -> float:
    if df.empty or column not in df.columns:
        return 0.0
    return float(pd.to_numeric(df[column], errors="coerce").fillna(0).clip(lower=0).sum())


def estimated_hours(issues: pd.DataFrame) -> float:
    return _seconds_sum(issues, "original_estimate_seconds") / 3600


def logged_hours(worklogs: pd.DataFrame) -> float:
    return _seconds_sum(worklogs, "time_spent_seconds") / 3600


def estimate_completion_pct(issues: pd.DataFrame, worklogs: pd.DataFrame) -> int:
    """Logged over estimated hours as a percentage, capped at 100.

    Returns 0 when nothing is estimated.
    """
    estimate = estimated_hours(issues)
    if estimate <= 0:
        return 0
    return min(100, round_half_up(logged_hours(worklogs) / estimate * 100))


def done_ratio_pct(issues: pd.DataFrame) -> int:
    """Percentage of issues in the ``done`` status category (0 for no issues)."""
    if issues.empty:
        return 0
    done = int((issues["status_category"] == "done").sum())
    return round_half_up(done / len(issues) * 100)


def project_metrics(issues: pd.DataFrame, worklogs: pd.DataFrame) -> ProjectMetrics:
    done = 0 if issues.empty else int((issues["status_category"] == "done").sum())
    return ProjectMetrics(
        total_issues=len(issues),
        done_issues=done,
        done_ratio_pct=done_ratio_pct(issues),
        estimate_completion_pct=estimate_completion_pct(issues, worklogs),
        estimated_hours=estimated_hours(issues),
        logged_hours=logged_hours(worklogs),
        worklog_count=len(worklogs),
    )
