"""Timeline scaling: shared date domain, bar geometry and axis ticks.

Takes hierarchy rows and computes everything a Gantt renderer needs in
abstract units (pixels at a zoom level, and percentages of the domain).
Nothing here draws; see ``client_portal.visual.gantt`` for the Altair chart.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

import pandas as pd
import pytz

from client_portal.core.config import (
    DEFAULT_TIMELINE_DAYS,
    DEFAULT_ZOOM,
    TIMELINE_PADDING_DAYS,
    TIMEZONE,
    ZOOM_PX_PER_DAY,
)
from client_portal.core.models import IssueModel
from client_portal.core.status import status_label

from .hierarchy import HierarchyRow

DATE_DISPLAY_FORMAT = "%d %b %Y"
TICK_LABEL_FORMATS = {
    "day": "%d",
    "week": "%b %d",
    "month": "%b %y",
}


@dataclass(slots=True, frozen=True)
class TimelineDetail:
    key: str
    summary: str
    status: str
    assignee: str | None = None
    start: str | None = None
    due: str | None = None

    def lines(self) -> list[str]:
        out = [f"{self.key}: {self.summary}", self.status]
        if self.assignee:
            out.append(self.assignee)
        if self.start and self.due:
            out.append(f"{self.start} – {self.due}")
        elif self.start:
            out.append(f"Start: {self.start}")
        elif self.due:
            out.append(f"Due: {self.due}")
        return out


@dataclass(slots=True, frozen=True)
class TimelineTick:
    day: date
    label: str
    offset_days: int
    offset_px: float
    offset_pct: float


@dataclass(slots=True, frozen=True)
class TimelineBar:
    row: HierarchyRow
    start_offset_days: int
    duration_days: int
    left_px: float
    width_px: float
    left_pct: float
    width_pct: float
    detail: TimelineDetail


@dataclass(slots=True)
class TimelineLayout:
    zoom: str
    px_per_day: int
    min_date: date
    max_date: date
    total_days: int
    scheduled: list[TimelineBar] = field(default_factory=list)
    unscheduled: list[HierarchyRow] = field(default_factory=list)
    ticks: list[TimelineTick] = field(default_factory=list)

    @property
    def total_width_px(self) -> float:
        return float(self.total_days * self.px_per_day)


def today_local(tz_name: str = TIMEZONE) -> date:
    return datetime.now(pytz.timezone(tz_name)).date()


def px_per_day(zoom: str) -> int:
    try:
        return ZOOM_PX_PER_DAY[zoom]
    except KeyError as exc:
        raise ValueError(f"Unknown zoom level {zoom!r}; expected one of {sorted(ZOOM_PX_PER_DAY)}") from exc


def _fmt(value: date | None) -> str | None:
    return value.strftime(DATE_DISPLAY_FORMAT) if value else None


def row_detail(issue: IssueModel) -> TimelineDetail:
    """Tooltip/detail strings for an issue."""
    return TimelineDetail(
        key=issue.key,
        summary=issue.summary,
        status=status_label(issue.status_category),
        assignee=issue.assignee or None,
        start=_fmt(issue.start_date),
        due=_fmt(issue.due_date),
    )


def date_domain(rows: Iterable[HierarchyRow], today: date | None = None) -> tuple[date, date, int]:
    """Return ``(min_date, max_date, total_days)`` over scheduled rows.

    Dates are padded outward by TIMELINE_PADDING_DAYS. Without any scheduled
    row the domain is DEFAULT_TIMELINE_DAYS starting at ``today``.
    """
    dates: list[date] = []
    for r in rows:
        if r.issue.is_scheduled:
            dates.extend([r.issue.start_date, r.issue.due_date])
    if not dates:
        start = today or today_local()
        return start, start + timedelta(days=DEFAULT_TIMELINE_DAYS), DEFAULT_TIMELINE_DAYS
    pad = timedelta(days=TIMELINE_PADDING_DAYS)
    min_date = min(dates) - pad
    max_date = max(dates) + pad
    total_days = max(1, math.ceil((max_date - min_date) / timedelta(days=1)))
    return min_date, max_date, total_days


def _next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def tick_dates(min_date: date, max_date: date, zoom: str, week_start: int = 0) -> list[date]:
    """Axis tick dates for a zoom level.

    ``week_start`` is the anchor weekday for week ticks (0 = Monday).
    """
    if zoom == "day":
        count = (max_date - min_date).days
        return [min_date + timedelta(days=i) for i in range(count + 1)]
    if zoom == "week":
        ahead = (week_start - min_date.weekday()) % 7 or 7
        cursor = min_date + timedelta(days=ahead)
        out = []
        while cursor <= max_date:
            out.append(cursor)
            cursor += timedelta(days=7)
        return out
    if zoom == "month":
        cursor = _next_month(min_date)
        out = []
        while cursor <= max_date:
            out.append(cursor)
            cursor = _next_month(cursor)
        return out
    raise ValueError(f"Unknown zoom level {zoom!r}")


def build_ticks(
    min_date: date,
    max_date: date,
    total_days: int,
    zoom: str,
    week_start: int = 0,
) -> list[TimelineTick]:
    scale = px_per_day(zoom)
    fmt = TICK_LABEL_FORMATS[zoom]
    ticks = []
    for day in tick_dates(min_date, max_date, zoom, week_start=week_start):
        offset = (day - min_date).days
        ticks.append(
            TimelineTick(
                day=day,
                label=day.strftime(fmt),
                offset_days=offset,
                offset_px=float(offset * scale),
                offset_pct=offset / total_days * 100,
            )
        )
    return ticks


def bar_geometry(issue: IssueModel, min_date: date, total_days: int, scale: int) -> dict[str, float]:
    """Geometry of one scheduled issue; a same-day issue still spans one day."""
    start_offset = (issue.start_date - min_date).days
    duration = max(1, (issue.due_date - issue.start_date).days)
    left_pct = start_offset / total_days * 100
    width_pct = min(duration / total_days * 100, 100 - left_pct)
    return {
        "start_offset_days": start_offset,
        "duration_days": duration,
        "left_px": float(start_offset * scale),
        "width_px": float(max(duration, 1) * scale),
        "left_pct": left_pct,
        "width_pct": width_pct,
    }


def build_timeline(
    rows: Iterable[HierarchyRow],
    zoom: str = DEFAULT_ZOOM,
    *,
    today: date | None = None,
    week_start: int = 0,
) -> TimelineLayout:
    """Partition rows into scheduled bars and unscheduled rows on a shared scale."""
    rows = list(rows)
    scale = px_per_day(zoom)
    scheduled_rows = sorted(
        (r for r in rows if r.issue.is_scheduled),
        key=lambda r: r.issue.start_date,
    )
    unscheduled = [r for r in rows if not r.issue.is_scheduled]
    min_date, max_date, total_days = date_domain(scheduled_rows, today=today)

    bars = [
        TimelineBar(row=r, detail=row_detail(r.issue), **bar_geometry(r.issue, min_date, total_days, scale))
        for r in scheduled_rows
    ]
    return TimelineLayout(
        zoom=zoom,
        px_per_day=scale,
        min_date=min_date,
        max_date=max_date,
        total_days=total_days,
        scheduled=bars,
        unscheduled=unscheduled,
        ticks=build_ticks(min_date, max_date, total_days, zoom, week_start=week_start),
    )


def timeline_to_dataframe(layout: TimelineLayout) -> pd.DataFrame:
    """Flatten scheduled bars into a chart-ready frame (one row per bar)."""
    columns = [
        "order",
        "key",
        "label",
        "summary",
        "depth",
        "issue_type",
        "status_category",
        "status",
        "assignee",
        "start",
        "end",
        "left_px",
        "width_px",
        "tooltip",
    ]
    records = []
    for order, bar in enumerate(layout.scheduled):
        issue = bar.row.issue
        start = pd.Timestamp(issue.start_date)
        records.append(
            {
                "order": order,
                "key": issue.key,
                "label": f"{'  ' * bar.row.depth}{issue.key} {issue.summary}".rstrip(),
                "summary": issue.summary,
                "depth": bar.row.depth,
                "issue_type": issue.issue_type,
                "status_category": issue.status_category,
                "status": bar.detail.status,
                "assignee": issue.assignee or "",
                "start": start,
                "end": start + pd.Timedelta(days=bar.duration_days),
                "left_px": bar.left_px,
                "width_px": bar.width_px,
                "tooltip": "\n".join(bar.detail.lines()),
            }
        )
    return pd.DataFrame(records, columns=columns)
