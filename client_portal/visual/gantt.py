"""Gantt chart builder (Altair) over a computed TimelineLayout."""

from __future__ import annotations

from datetime import date

import altair as alt
import pandas as pd

from client_portal.analytics.timeline import TICK_LABEL_FORMATS, TimelineLayout, timeline_to_dataframe
from client_portal.core.config import STATUS_COLORS

ROW_HEIGHT = 28


def _alt_date(day: date) -> alt.DateTime:
    return alt.DateTime(year=day.year, month=day.month, date=day.day)


def gantt_chart(layout: TimelineLayout, *, today: date | None = None, row_height: int = ROW_HEIGHT):
    """Bars for scheduled issues, coloured by status category.

    Returns None when nothing is scheduled.
    """
    frame = timeline_to_dataframe(layout)
    if frame.empty:
        return None

    domain = [_alt_date(layout.min_date), _alt_date(layout.max_date)]
    axis = alt.Axis(
        values=[_alt_date(t.day) for t in layout.ticks],
        format=TICK_LABEL_FORMATS[layout.zoom],
        labelAngle=0,
        orient="top",
        grid=True,
    )
    bars = (
        alt.Chart(frame)
        .mark_bar(cornerRadius=3, opacity=0.85)
        .encode(
            x=alt.X("start:T", title=None, scale=alt.Scale(domain=domain), axis=axis),
            x2="end:T",
            y=alt.Y("label:N", title=None, sort=list(frame["label"]), axis=alt.Axis(labelLimit=280)),
            color=alt.Color(
                "status_category:N",
                title="Status",
                scale=alt.Scale(domain=list(STATUS_COLORS), range=list(STATUS_COLORS.values())),
            ),
            tooltip=[
                alt.Tooltip("key:N", title="Issue"),
                alt.Tooltip("summary:N", title="Summary"),
                alt.Tooltip("status:N", title="Status"),
                alt.Tooltip("assignee:N", title="Assignee"),
                alt.Tooltip("start:T", title="Start"),
                alt.Tooltip("end:T", title="Due"),
            ],
        )
    )

    chart = bars
    if today is not None and layout.min_date <= today <= layout.max_date:
        marker = (
            alt.Chart(pd.DataFrame({"today": [pd.Timestamp(today)]}))
            .mark_rule(color="#ef4444", strokeDash=[4, 3])
            .encode(x="today:T")
        )
        chart = bars + marker

    return chart.properties(width=layout.total_width_px, height=max(row_height * len(frame), row_height))
