from datetime import date

import altair as alt

from client_portal.analytics.hierarchy import build_hierarchy
from client_portal.analytics.timeline import build_timeline
from client_portal.app import PAGES, register_page
from client_portal.core.config import NO_DATA_MARKER
from client_portal.visual.gantt import gantt_chart
from client_portal.visual.tables import add_issue_link, unscheduled_frame, worklog_display_frame

from sample_data import sample_issues, sample_worklogs


def test_gantt_chart_layers_today_marker():
    layout = build_timeline(build_hierarchy(sample_issues()), "week")
    chart = gantt_chart(layout, today=date(2024, 3, 15))
    assert isinstance(chart, alt.LayerChart)
    assert isinstance(gantt_chart(layout), alt.Chart)


def test_gantt_chart_none_when_nothing_scheduled():
    layout = build_timeline([], today=date(2024, 3, 15))
    assert gantt_chart(layout, today=date(2024, 3, 15)) is None


def test_worklog_display_frame():
    frame = worklog_display_frame(sample_worklogs())
    assert list(frame["Hours"])[:2] == ["1h", "1h 30m"]
    assert frame.loc[0, "Description"] == "Kickoff"
    assert frame.loc[1, "Description"] == NO_DATA_MARKER


def test_issue_links_point_at_browse_urls():
    linked, cfg = add_issue_link(worklog_display_frame(sample_worklogs()), "https://acme.atlassian.net/")
    assert linked.loc[0, "Issue"] == "https://acme.atlassian.net/browse/WEB-2"
    assert "Issue" in cfg


def test_unscheduled_frame_indents_by_depth():
    layout = build_timeline(build_hierarchy(sample_issues()), "week")
    frame = unscheduled_frame(layout.unscheduled)
    assert list(frame["Issue"]) == ["    WEB-3", "  WEB-5", "WEB-6"]
    assert frame.loc[1, "Start"] == "12 Mar 2024"
    assert frame.loc[1, "Due"] == NO_DATA_MARKER


def test_register_page_adds_to_registry():
    @register_page("Test Page")
    def _page():
        return "ok"

    assert PAGES["Test Page"] is _page
    PAGES.pop("Test Page")
