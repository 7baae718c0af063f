from datetime import date

import pytest

from client_portal.analytics.hierarchy import HierarchyRow
from client_portal.analytics.timeline import (
    build_timeline,
    date_domain,
    row_detail,
    tick_dates,
    timeline_to_dataframe,
)
from client_portal.core.mappers import map_issue

from sample_data import issue


def _rows():
    return [
        HierarchyRow(
            issue(
                "WEB-2",
                "Story",
                start=date(2024, 3, 4),
                due=date(2024, 3, 10),
                status="in_progress",
                assignee="Alice",
                summary="Checkout flow",
            ),
            0,
        ),
        HierarchyRow(issue("WEB-3", start=date(2024, 3, 8), due=date(2024, 3, 8)), 1),
        HierarchyRow(issue("WEB-4", start=date(2024, 3, 9)), 1),
    ]


def test_domain_is_padded_around_scheduled_dates():
    min_date, max_date, total = date_domain(_rows())
    assert min_date == date(2024, 3, 1)
    assert max_date == date(2024, 3, 13)
    assert total == 12


def test_domain_falls_back_to_injected_today():
    rows = [HierarchyRow(issue("WEB-9"), 0)]
    assert date_domain(rows, today=date(2024, 5, 1)) == (date(2024, 5, 1), date(2024, 5, 31), 30)


def test_bar_geometry_at_week_zoom():
    layout = build_timeline(_rows(), "week")
    assert layout.px_per_day == 16
    assert layout.total_width_px == 12 * 16
    first, second = layout.scheduled
    assert first.row.issue.key == "WEB-2"
    assert first.start_offset_days == 3
    assert first.duration_days == 6
    assert first.left_px == 48
    assert first.width_px == 96
    assert first.left_pct == pytest.approx(25.0)
    assert first.width_pct == pytest.approx(50.0)
    # same-day issue still spans a full day
    assert second.duration_days == 1
    assert second.width_px == 16


def test_partially_dated_issues_are_unscheduled():
    layout = build_timeline(_rows(), "day")
    assert [r.issue.key for r in layout.unscheduled] == ["WEB-4"]
    assert len(layout.scheduled) == 2


def test_bars_are_ordered_by_start_date():
    rows = list(reversed(_rows()))
    layout = build_timeline(rows, "month")
    assert [b.row.issue.key for b in layout.scheduled] == ["WEB-2", "WEB-3"]


def test_week_ticks_start_after_min_date():
    layout = build_timeline(_rows(), "week")
    assert [t.day for t in layout.ticks] == [date(2024, 3, 4), date(2024, 3, 11)]
    assert [t.label for t in layout.ticks] == ["Mar 04", "Mar 11"]
    assert layout.ticks[0].offset_px == 48


def test_tick_dates_per_zoom():
    assert len(tick_dates(date(2024, 3, 1), date(2024, 3, 13), "day")) == 13
    # a min date on the anchor weekday is not itself a tick
    assert tick_dates(date(2024, 3, 4), date(2024, 3, 20), "week") == [date(2024, 3, 11), date(2024, 3, 18)]
    assert tick_dates(date(2024, 3, 4), date(2024, 3, 20), "week", week_start=6) == [
        date(2024, 3, 10),
        date(2024, 3, 17),
    ]
    assert tick_dates(date(2023, 11, 15), date(2024, 2, 2), "month") == [
        date(2023, 12, 1),
        date(2024, 1, 1),
        date(2024, 2, 1),
    ]


def test_unknown_zoom_is_rejected():
    with pytest.raises(ValueError):
        build_timeline(_rows(), "quarter")


def test_row_detail_lines():
    detail = row_detail(_rows()[0].issue)
    assert detail.lines() == [
        "WEB-2: Checkout flow",
        "in progress",
        "Alice",
        "04 Mar 2024 – 10 Mar 2024",
    ]
    assert row_detail(_rows()[2].issue).lines()[-1] == "Start: 09 Mar 2024"


def test_timeline_frame_is_chart_ready():
    frame = timeline_to_dataframe(build_timeline(_rows(), "week"))
    assert list(frame["key"]) == ["WEB-2", "WEB-3"]
    assert frame.loc[1, "label"].startswith("  WEB-3")
    assert (frame["end"] - frame["start"]).dt.days.tolist() == [6, 1]


def test_empty_rows_give_empty_layout():
    layout = build_timeline([], today=date(2024, 1, 1))
    assert layout.scheduled == []
    assert layout.total_days == 30
    assert timeline_to_dataframe(layout).empty


def test_due_before_start_still_spans_one_day():
    row = HierarchyRow(issue("WEB-7", start=date(2024, 3, 10), due=date(2024, 3, 6)), 0)
    layout = build_timeline([row], "week")
    (bar,) = layout.scheduled
    assert bar.duration_days == 1
    assert bar.width_px == layout.px_per_day
    assert layout.min_date == date(2024, 3, 3)
    assert layout.max_date == date(2024, 3, 13)


def test_unparseable_start_date_does_not_stretch_the_domain():
    rows = [
        HierarchyRow(
            map_issue({"key": "WEB-8", "issueType": "Task", "startDate": "Mar 5", "dueDate": "2024-03-20"}),
            0,
        ),
        *_rows(),
    ]
    layout = build_timeline(rows, "day")
    assert "WEB-8" in [r.issue.key for r in layout.unscheduled]
    assert layout.min_date == date(2024, 3, 1)
    assert layout.total_days == 12
