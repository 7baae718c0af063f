"""Mapping raw Jira issue / Tempo worklog JSON into IssueModel and WorklogModel."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, replace
from datetime import date, datetime
from typing import Any

import pandas as pd

from .config import (
    DEFAULT_START_DATE_FIELD,
    ISSUE_CORE_COLUMNS,
    WORKLOG_CORE_COLUMNS,
)
from .models import IssueModel, WorklogModel
from .status import map_status_category


def display_name(value: Any) -> str | None:
    """Collapse the assignee/author payload variants into a display name.

    Providers send a plain string, an object with ``displayName`` (or
    ``name``), or nothing at all.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("displayName") or value.get("name")
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> date | None:
    """Parse an ISO 8601 date or timestamp; partial or malformed values give None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        ts = pd.to_datetime(value.strip(), format="ISO8601", errors="coerce")
    except (TypeError, ValueError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def _optional_seconds(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(seconds):
        return None
    return max(seconds, 0.0)


def _seconds(value: Any) -> int:
    seconds = _optional_seconds(value)
    return int(seconds) if seconds is not None else 0


def _name_of(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("name")
    return value if isinstance(value, str) else None


def _optional_id(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def map_issue(raw: dict[str, Any], start_date_field: str = DEFAULT_START_DATE_FIELD) -> IssueModel:
    """Map a Jira REST issue or a flattened issue record into an IssueModel."""
    fields = raw.get("fields")
    if isinstance(fields, dict):
        status = fields.get("status") or {}
        category = (status.get("statusCategory") or {}).get("key") if isinstance(status, dict) else None
        parent = fields.get("parent") or {}
        return IssueModel(
            key=str(raw.get("key") or ""),
            summary=str(fields.get("summary") or ""),
            issue_type=_name_of(fields.get("issuetype")) or "Unknown",
            status=_name_of(status),
            status_category=map_status_category(category, _name_of(status)),
            assignee=display_name(fields.get("assignee")),
            start_date=parse_date(fields.get(start_date_field)),
            due_date=parse_date(fields.get("duedate")),
            parent_key=parent.get("key") if isinstance(parent, dict) else None,
            original_estimate_seconds=_optional_seconds(fields.get("timeoriginalestimate")),
            issue_id=_optional_id(raw.get("id")),
        )

    # Flattened record (already shaped by a proxy)
    return IssueModel(
        key=str(raw.get("key") or ""),
        summary=str(raw.get("summary") or ""),
        issue_type=_name_of(raw.get("issueType")) or "Unknown",
        status=_name_of(raw.get("status")),
        status_category=map_status_category(raw.get("statusCategory"), _name_of(raw.get("status"))),
        assignee=display_name(raw.get("assignee")),
        start_date=parse_date(raw.get("startDate")),
        due_date=parse_date(raw.get("dueDate")),
        parent_key=raw.get("parentKey") or None,
        original_estimate_seconds=_optional_seconds(raw.get("originalEstimateSeconds")),
        issue_id=_optional_id(raw.get("id")),
    )


def map_worklog(raw: dict[str, Any]) -> WorklogModel:
    """Map a Tempo v4 worklog or a flattened worklog record into a WorklogModel."""
    issue = raw.get("issue") if isinstance(raw.get("issue"), dict) else {}
    start = parse_date(raw.get("startDate") or raw.get("date"))
    author = display_name(raw.get("author"))
    return WorklogModel(
        issue_key=str(raw.get("issueKey") or issue.get("key") or ""),
        issue_summary=str(raw.get("issueSummary") or issue.get("summary") or ""),
        author=author,
        assignee=display_name(raw.get("assignee")),
        time_spent_seconds=_seconds(raw.get("timeSpentSeconds")),
        start_date=start.isoformat() if start else "",
        description=raw.get("description") or None,
        worklog_id=_optional_id(raw.get("tempoWorklogId") or raw.get("id")),
        issue_id=_optional_id(issue.get("id") or raw.get("issueId")),
    )


def attach_issue_details(
    worklogs: Iterable[WorklogModel],
    issues: Iterable[IssueModel],
) -> list[WorklogModel]:
    """Fill issue key, summary and assignee on worklogs from the issue set.

    Tempo v4 only references issues by numeric id, so worklogs are joined to
    issues by id first and by key second. Unmatched worklogs pass through.
    """
    by_id: dict[str, IssueModel] = {}
    by_key: dict[str, IssueModel] = {}
    for issue in issues:
        if issue.issue_id:
            by_id[issue.issue_id] = issue
        by_key[issue.key] = issue

    out: list[WorklogModel] = []
    for w in worklogs:
        issue = (by_id.get(w.issue_id) if w.issue_id else None) or by_key.get(w.issue_key)
        if issue is None:
            out.append(w)
            continue
        out.append(
            replace(
                w,
                issue_key=w.issue_key or issue.key,
                issue_summary=w.issue_summary or issue.summary,
                assignee=w.assignee or issue.assignee,
            )
        )
    return out


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = [asdict(i) for i in issues]
    return pd.DataFrame(rows, columns=list(ISSUE_CORE_COLUMNS))


def dataframe_to_issues(df: pd.DataFrame) -> list[IssueModel]:
    """Rebuild IssueModel instances from an issues frame (e.g. after filtering)."""
    if df.empty:
        return []
    out: list[IssueModel] = []
    for rec in df.to_dict("records"):
        clean = {k: (None if _is_missing(v) else v) for k, v in rec.items() if k in ISSUE_CORE_COLUMNS}
        out.append(IssueModel(**clean))
    return out


def worklogs_to_dataframe(worklogs: Iterable[WorklogModel]) -> pd.DataFrame:
    rows = [asdict(w) for w in worklogs]
    df = pd.DataFrame(rows, columns=list(WORKLOG_CORE_COLUMNS))
    df["time_spent_seconds"] = pd.to_numeric(df["time_spent_seconds"], errors="coerce").fillna(0).astype(int)
    return df


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
