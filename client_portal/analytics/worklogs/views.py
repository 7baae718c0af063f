"""Sorting, grouping and pagination for the time tracking table."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import pandas as pd

from client_portal.core.config import (
    ALL_WORKLOGS_LABEL,
    GROUP_BY_OPTIONS,
    OTHER_GROUP_LABEL,
    SORT_FIELDS,
    UNASSIGNED_LABEL,
    WORKLOG_PAGE_SIZE,
)

from .filters import WorklogQuery, filter_worklogs


@dataclass(slots=True)
class WorklogGroup:
    name: str
    rows: pd.DataFrame
    total_seconds: int


@dataclass(slots=True)
class WorklogPage:
    rows: pd.DataFrame
    page: int
    page_count: int
    total_rows: int
    page_size: int = WORKLOG_PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count - 1

    @property
    def first_row(self) -> int:
        """1-based index of the first row shown (0 when empty)."""
        return self.page * self.page_size + 1 if self.total_rows else 0

    @property
    def last_row(self) -> int:
        return min((self.page + 1) * self.page_size, self.total_rows)


@dataclass(slots=True)
class WorklogView:
    query: WorklogQuery
    rows: pd.DataFrame
    total_seconds: int
    groups: list[WorklogGroup] = field(default_factory=list)
    page: WorklogPage | None = None


def _total(df: pd.DataFrame) -> int:
    if df.empty:
        return 0
    return int(pd.to_numeric(df["time_spent_seconds"], errors="coerce").fillna(0).sum())


def sort_worklogs(df: pd.DataFrame, field: str = "start_date", direction: str = "desc") -> pd.DataFrame:
    """Stable sort on one column; text compares case-insensitively.

    Text keys are ``str.casefold()`` values, not locale collation: names that
    differ only in case keep their input order, and accented letters sort by
    code point.
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field {field!r}; expected one of {list(SORT_FIELDS)}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort direction {direction!r}")
    if df.empty:
        return df.copy()

    if field == "time_spent_seconds":

        def key(series: pd.Series) -> pd.Series:
            return pd.to_numeric(series, errors="coerce").fillna(0)

    else:

        def key(series: pd.Series) -> pd.Series:
            return series.fillna("").astype(str).str.casefold()

    return df.sort_values(by=field, ascending=direction == "asc", kind="stable", key=key)


def group_key_series(df: pd.DataFrame, group_by: str) -> pd.Series:
    """Bucket name for every row: issue key prefix (epic) or author (assignee)."""
    if group_by == "epic":
        prefix = df["issue_key"].fillna("").astype(str).str.split("-", n=1).str[0]
        return prefix.mask(prefix == "", OTHER_GROUP_LABEL)
    if group_by == "assignee":
        author = df["author"].fillna("").astype(str).str.strip()
        return author.mask(author == "", UNASSIGNED_LABEL)
    raise ValueError(f"Unsupported grouping {group_by!r}; expected one of {list(GROUP_BY_OPTIONS)}")


def group_worklogs(df: pd.DataFrame, group_by: str = "none") -> list[WorklogGroup]:
    """Partition rows into named buckets, keeping row order inside each bucket.

    Buckets are returned in alphabetical order (case-insensitive).
    """
    if group_by == "none":
        return [WorklogGroup(ALL_WORKLOGS_LABEL, df.copy(), _total(df))]
    if df.empty:
        return []
    keys = group_key_series(df, group_by)
    groups = [
        WorklogGroup(str(name), rows.copy(), _total(rows)) for name, rows in df.groupby(keys, sort=False)
    ]
    return sorted(groups, key=lambda g: g.name.casefold())


def paginate(df: pd.DataFrame, page: int = 0, page_size: int = WORKLOG_PAGE_SIZE) -> WorklogPage:
    """Slice one 0-based page; out-of-range requests clamp to the nearest page."""
    total = len(df)
    page_count = max(1, math.ceil(total / page_size))
    page = min(max(int(page), 0), page_count - 1)
    start = page * page_size
    return WorklogPage(
        rows=df.iloc[start : start + page_size].copy(),
        page=page,
        page_count=page_count,
        total_rows=total,
        page_size=page_size,
    )


def build_worklog_view(df: pd.DataFrame, query: WorklogQuery, page: int = 0) -> WorklogView:
    """Filter, sort, then either group or paginate the worklog table."""
    filtered = filter_worklogs(df, query)
    ordered = sort_worklogs(filtered, query.sort_field, query.sort_dir)
    view = WorklogView(query=query, rows=ordered, total_seconds=_total(ordered))
    if query.group_by == "none":
        view.page = paginate(ordered, page)
    else:
        view.groups = group_worklogs(ordered, query.group_by)
    return view
