"""Domain data models for Jira issues and Tempo worklogs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True, frozen=True)
class IssueModel:
    key: str
    summary: str
    issue_type: str
    status_category: str
    status: str | None = None
    assignee: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    parent_key: str | None = None
    original_estimate_seconds: float | None = None
    issue_id: str | None = None

    @property
    def is_scheduled(self) -> bool:
        return self.start_date is not None and self.due_date is not None


@dataclass(slots=True, frozen=True)
class WorklogModel:
    issue_key: str
    issue_summary: str
    author: str | None
    assignee: str | None
    time_spent_seconds: int
    start_date: str
    description: str | None = None
    worklog_id: str | None = None
    issue_id: str | None = None
