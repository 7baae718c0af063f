"""Pure helpers to build the client dashboard context for testing (no Streamlit)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

import pandas as pd

from client_portal.analytics.aggregations.completion import ProjectMetrics, project_metrics
from client_portal.analytics.aggregations.monthly import MonthlyPivot, monthly_pivot
from client_portal.analytics.hierarchy import HierarchyRow, build_hierarchy
from client_portal.analytics.timeline import TimelineLayout, build_timeline
from client_portal.analytics.worklogs.filters import WorklogQuery, filter_issues
from client_portal.analytics.worklogs.views import WorklogView, build_worklog_view
from client_portal.core.config import DEFAULT_ZOOM
from client_portal.core.mappers import dataframe_to_issues


@dataclass(slots=True)
class ClientDashboardContext:
    metrics: ProjectMetrics
    hierarchy: list[HierarchyRow]
    timeline: TimelineLayout
    worklog_view: WorklogView
    pivot: MonthlyPivot


def build_schedule(
    issues_df: pd.DataFrame,
    *,
    today: date,
    zoom: str = DEFAULT_ZOOM,
    issue_types: Iterable[str] | None = None,
    status_categories: Iterable[str] | None = None,
    assignees: Iterable[str] | None = None,
    search_query: str = "",
) -> tuple[list[HierarchyRow], TimelineLayout]:
    filtered = filter_issues(
        issues_df,
        issue_types=issue_types,
        status_categories=status_categories,
        assignees=assignees,
        search_query=search_query,
    )
    rows = build_hierarchy(dataframe_to_issues(filtered))
    return rows, build_timeline(rows, zoom, today=today)


def build_client_context(
    issues_df: pd.DataFrame,
    worklogs_df: pd.DataFrame,
    *,
    now: datetime,
    zoom: str = DEFAULT_ZOOM,
    query: WorklogQuery | None = None,
    page: int = 0,
) -> ClientDashboardContext:
    rows, layout = build_schedule(issues_df, today=now.date(), zoom=zoom)
    return ClientDashboardContext(
        metrics=project_metrics(issues_df, worklogs_df),
        hierarchy=rows,
        timeline=layout,
        worklog_view=build_worklog_view(worklogs_df, query or WorklogQuery(), page),
        pivot=monthly_pivot(worklogs_df, now),
    )
