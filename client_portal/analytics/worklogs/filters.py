"""Declarative filters over worklog and issue frames (pure functions)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from client_portal.core.config import UNASSIGNED_LABEL

SEARCH_COLUMNS = ("issue_key", "issue_summary", "author")
ISSUE_SEARCH_COLUMNS = ("key", "summary", "assignee")


@dataclass(slots=True, frozen=True)
class WorklogQuery:
    """Criteria for the time tracking table.

    ``date_from``/``date_to`` are inclusive ISO ``YYYY-MM-DD`` strings.
    """

    search_query: str = ""
    date_from: str | None = None
    date_to: str | None = None
    sort_field: str = "start_date"
    sort_dir: str = "desc"
    group_by: str = "none"


def _text(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str)


def _contains_any(df: pd.DataFrame, columns: Iterable[str], needle: str) -> pd.Series:
    mask = pd.Series(False, index=df.index)
    for col in columns:
        if col in df.columns:
            mask |= _text(df[col]).str.lower().str.contains(needle, regex=False)
    return mask


def filter_worklogs(df: pd.DataFrame, query: WorklogQuery) -> pd.DataFrame:
    """Apply search and date range criteria conjunctively.

    Search is a case-insensitive substring match on issue key, summary and
    author. Date bounds compare ISO strings, which sort chronologically.
    """
    if df.empty:
        return df.copy()
    mask = pd.Series(True, index=df.index)
    needle = (query.search_query or "").strip().lower()
    if needle:
        mask &= _contains_any(df, SEARCH_COLUMNS, needle)
    if query.date_from or query.date_to:
        dates = _text(df["start_date"])
        if query.date_from:
            mask &= dates >= query.date_from
        if query.date_to:
            mask &= dates <= query.date_to
    return df[mask].copy()


def filter_issues(
    df: pd.DataFrame,
    *,
    issue_types: Iterable[str] | None = None,
    status_categories: Iterable[str] | None = None,
    assignees: Iterable[str] | None = None,
    search_query: str = "",
) -> pd.DataFrame:
    """Filter an issues frame; empty criteria are ignored.

    Unassigned issues match the ``UNASSIGNED_LABEL`` entry of ``assignees``.
    """
    if df.empty:
        return df.copy()
    mask = pd.Series(True, index=df.index)
    issue_types = list(issue_types or [])
    if issue_types:
        mask &= df["issue_type"].isin(issue_types)
    status_categories = list(status_categories or [])
    if status_categories:
        mask &= df["status_category"].isin(status_categories)
    assignees = list(assignees or [])
    if assignees:
        mask &= df["assignee"].fillna(UNASSIGNED_LABEL).isin(assignees)
    needle = (search_query or "").strip().lower()
    if needle:
        mask &= _contains_any(df, ISSUE_SEARCH_COLUMNS, needle)
    return df[mask].copy()
