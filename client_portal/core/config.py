"""Central configuration, constants, and display settings for the client portal."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Connection Settings
# =============================================================================
TIMEZONE = "UTC"
TEMPO_API_BASE = "https://api.tempo.io/4"
PROJECTS_FILE = "projects.yaml"

# Jira Cloud default "Start date" custom field; configurable per project
DEFAULT_START_DATE_FIELD = "customfield_10015"

# =============================================================================
# Issue Hierarchy
# =============================================================================
EPIC_TYPE = "Epic"
STORY_TYPE = "Story"
# Everything that is not an Epic or Story is treated as task-like
FETCHED_ISSUE_TYPES: Sequence[str] = ("Epic", "Story", "Task", "Sub-task")

# =============================================================================
# Status Categories
# =============================================================================
STATUS_CATEGORIES: Sequence[str] = ("todo", "in_progress", "done")

# Jira statusCategory.key -> internal category
STATUS_CATEGORY_KEYS: dict[str, str] = {
    "new": "todo",
    "undefined": "todo",
    "indeterminate": "in_progress",
    "done": "done",
}

# Fallback when a payload carries only the status name.
# Keys should be lowercase for case-insensitive matching
STATUS_NAME_ALIASES: dict[str, str] = {
    # Initial/Open statuses
    "to do": "todo",
    "todo": "todo",
    "open": "todo",
    "new": "todo",
    "backlog": "todo",
    "selected for development": "todo",
    # In Progress variants
    "in progress": "in_progress",
    "in-progress": "in_progress",
    "in review": "in_progress",
    "review": "in_progress",
    "testing": "in_progress",
    "blocked": "in_progress",
    # Done variants
    "done": "done",
    "resolved": "done",
    "closed": "done",
    "complete": "done",
    "completed": "done",
    "cancelled": "done",
    "canceled": "done",
}

# =============================================================================
# Timeline
# =============================================================================
ZOOM_PX_PER_DAY: dict[str, int] = {
    "day": 40,
    "week": 16,
    "month": 5,
}
DEFAULT_ZOOM = "week"
TIMELINE_PADDING_DAYS = 3
DEFAULT_TIMELINE_DAYS = 30  # Window used when nothing is scheduled

STATUS_COLORS: dict[str, str] = {
    "todo": "#9ca3af",
    "in_progress": "#3b82f6",
    "done": "#22c55e",
}

# =============================================================================
# Worklog Tables
# =============================================================================
WORKLOG_PAGE_SIZE: int = 25
MONTH_WINDOW_COUNT: int = 4  # Current month plus the three before it
NO_DATA_MARKER = "—"
UNKNOWN_AUTHOR = "Unknown"
UNASSIGNED_LABEL = "Unassigned"
OTHER_GROUP_LABEL = "Other"
ALL_WORKLOGS_LABEL = "All Worklogs"

SORT_FIELDS: Sequence[str] = ("issue_key", "author", "time_spent_seconds", "start_date")
GROUP_BY_OPTIONS: Sequence[str] = ("none", "epic", "assignee")

CSV_HEADER: Sequence[str] = (
    "Issue Key",
    "Issue Summary",
    "Author",
    "Hours",
    "Date",
    "Description",
)

ISSUE_CORE_COLUMNS: Sequence[str] = (
    "key",
    "summary",
    "issue_type",
    "status",
    "status_category",
    "assignee",
    "start_date",
    "due_date",
    "parent_key",
    "original_estimate_seconds",
    "issue_id",
)

WORKLOG_CORE_COLUMNS: Sequence[str] = (
    "issue_key",
    "issue_summary",
    "author",
    "assignee",
    "time_spent_seconds",
    "start_date",
    "description",
    "worklog_id",
    "issue_id",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    cache_ttl_seconds: float = 300.0


SETTINGS = AppSettings()
