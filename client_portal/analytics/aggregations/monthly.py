"""Author x month pivot of logged time."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import pandas as pd

from client_portal.analytics.formatting import format_pivot_cell
from client_portal.core.config import MONTH_WINDOW_COUNT, UNKNOWN_AUTHOR


@dataclass(slots=True, frozen=True)
class MonthWindow:
    label: str
    start: str  # inclusive, ISO
    end: str  # inclusive, ISO


@dataclass(slots=True)
class MonthlyPivot:
    months: list[MonthWindow]
    matrix: pd.DataFrame  # authors x month labels, NaN where nothing was logged
    author_totals: pd.Series
    month_totals: pd.Series
    grand_total: int

    @property
    def authors(self) -> list[str]:
        return list(self.matrix.index)


def resolve_author(author: Any, assignee: Any) -> str | None:
    """Worklog author, falling back to the assignee when missing or "Unknown"."""
    if isinstance(author, str) and author.strip() and author.strip() != UNKNOWN_AUTHOR:
        return author.strip()
    if isinstance(assignee, str) and assignee.strip():
        return assignee.strip()
    return None


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_windows(now: date | datetime, count: int = MONTH_WINDOW_COUNT) -> list[MonthWindow]:
    """Calendar months from ``count - 1`` months before ``now`` through its month."""
    out = []
    for offset in range(count - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        last_day = calendar.monthrange(year, month)[1]
        first = date(year, month, 1)
        out.append(
            MonthWindow(
                label=first.strftime("%b %Y"),
                start=first.isoformat(),
                end=date(year, month, last_day).isoformat(),
            )
        )
    return out


def monthly_pivot(df: pd.DataFrame, now: date | datetime, count: int = MONTH_WINDOW_COUNT) -> MonthlyPivot:
    """Sum worklog seconds per resolved author per month window.

    ``now`` is passed in explicitly so the window is reproducible. Worklogs
    without a resolvable author, or outside every window, are skipped.
    """
    months = month_windows(now, count)
    labels = [m.label for m in months]
    empty = pd.DataFrame(index=pd.Index([], name="author"), columns=labels, dtype=float)

    work = df.copy() if not df.empty else pd.DataFrame()
    if not work.empty:
        assignees = work["assignee"] if "assignee" in work.columns else pd.Series(None, index=work.index)
        work["resolved_author"] = [resolve_author(a, s) for a, s in zip(work["author"], assignees)]
        work = work[work["resolved_author"].notna()].copy()
    if not work.empty:
        dates = work["start_date"].fillna("").astype(str)
        work["month"] = None
        for m in months:
            work.loc[(dates >= m.start) & (dates <= m.end), "month"] = m.label
        work = work[work["month"].notna()].copy()

    if work.empty:
        matrix = empty
    else:
        work["time_spent_seconds"] = pd.to_numeric(work["time_spent_seconds"], errors="coerce").fillna(0)
        matrix = (
            work.groupby(["resolved_author", "month"])["time_spent_seconds"]
            .sum()
            .unstack("month")
            .reindex(columns=labels)
            .astype(float)
        )
        matrix.index.name = "author"
        matrix.columns.name = None
        matrix = matrix.loc[sorted(matrix.index, key=str.casefold)]

    author_totals = matrix.sum(axis=1)
    month_totals = matrix.sum(axis=0).reindex(labels).fillna(0)
    return MonthlyPivot(
        months=months,
        matrix=matrix,
        author_totals=author_totals,
        month_totals=month_totals,
        grand_total=int(author_totals.sum()),
    )


def monthly_pivot_display(pivot: MonthlyPivot, member_label: str = "Team Member") -> pd.DataFrame:
    """Formatted table with a Total column and a trailing Total row."""
    labels = [m.label for m in pivot.months]
    rows = []
    for author in pivot.authors:
        row = {member_label: author}
        for label in labels:
            row[label] = format_pivot_cell(pivot.matrix.at[author, label])
        row["Total"] = format_pivot_cell(pivot.author_totals.get(author))
        rows.append(row)
    totals = {member_label: "Total"}
    for label in labels:
        totals[label] = format_pivot_cell(pivot.month_totals.get(label))
    totals["Total"] = format_pivot_cell(pivot.grand_total)
    rows.append(totals)
    return pd.DataFrame(rows, columns=[member_label, *labels, "Total"])
