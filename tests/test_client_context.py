from datetime import date, datetime

import pytz

from client_portal.analytics.worklogs.filters import WorklogQuery
from client_portal.core.mappers import issues_to_dataframe
from client_portal.features.client_view import build_client_context, build_schedule

from sample_data import sample_issues, sample_worklogs


def test_client_context_basic():
    now = datetime(2024, 6, 1, 12, tzinfo=pytz.UTC)
    ctx = build_client_context(
        issues_to_dataframe(sample_issues()),
        sample_worklogs(),
        now=now,
        zoom="day",
        query=WorklogQuery(group_by="assignee"),
    )
    assert ctx.metrics.total_issues == 6
    assert [r.issue.key for r in ctx.hierarchy][:3] == ["WEB-1", "WEB-2", "WEB-3"]
    assert ctx.timeline.zoom == "day"
    assert ctx.timeline.min_date == date(2024, 2, 27)
    assert {r.issue.key for r in ctx.timeline.unscheduled} == {"WEB-3", "WEB-5", "WEB-6"}
    assert ctx.worklog_view.page is None
    assert [g.name for g in ctx.worklog_view.groups][0] == "Alice"
    assert ctx.pivot.authors == ["Alice", "bob", "Carol", "Dana"]


def test_schedule_filters_before_building_hierarchy():
    rows, layout = build_schedule(
        issues_to_dataframe(sample_issues()),
        today=date(2024, 1, 1),
        issue_types=["Story", "Sub-task"],
    )
    assert [(r.issue.key, r.depth) for r in rows] == [("WEB-2", 0), ("WEB-4", 0), ("WEB-5", 1)]
    assert [b.row.issue.key for b in layout.scheduled] == ["WEB-2", "WEB-4"]


def test_schedule_with_nothing_dated_uses_today():
    rows, layout = build_schedule(
        issues_to_dataframe(sample_issues()),
        today=date(2024, 1, 1),
        search_query="web-6",
    )
    assert len(rows) == 1
    assert layout.min_date == date(2024, 1, 1)
    assert layout.scheduled == []
