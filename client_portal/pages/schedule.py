"""Schedule page: Gantt chart of the Epic > Story > Task hierarchy."""

from __future__ import annotations

import streamlit as st

from client_portal.analytics.timeline import today_local
from client_portal.app import current_snapshot, register_page
from client_portal.core.config import DEFAULT_ZOOM, STATUS_CATEGORIES, UNASSIGNED_LABEL, ZOOM_PX_PER_DAY
from client_portal.core.status import status_label
from client_portal.features.client_view import build_schedule
from client_portal.visual.gantt import gantt_chart
from client_portal.visual.tables import unscheduled_frame


@register_page("Schedule")
def schedule_page():
    st.title("Schedule")
    snapshot = current_snapshot()
    if snapshot is None:
        return
    issues = snapshot.issues_df
    if issues.empty:
        st.info("No issues found for this project.")
        return

    with st.expander("Filters", expanded=False):
        types = st.multiselect("Issue type", sorted(issues["issue_type"].dropna().unique()))
        statuses = st.multiselect("Status", list(STATUS_CATEGORIES), format_func=status_label)
        assignee_options = sorted(issues["assignee"].dropna().unique()) + [UNASSIGNED_LABEL]
        assignees = st.multiselect("Assignee", assignee_options)
        search = st.text_input("Search key, summary or assignee")
    zoom = st.radio(
        "Zoom",
        list(ZOOM_PX_PER_DAY),
        index=list(ZOOM_PX_PER_DAY).index(DEFAULT_ZOOM),
        horizontal=True,
    )

    today = today_local()
    rows, layout = build_schedule(
        issues,
        today=today,
        zoom=zoom,
        issue_types=types,
        status_categories=statuses,
        assignees=assignees,
        search_query=search,
    )
    if not rows:
        st.info("No issues match the current filters.")
        return

    chart = gantt_chart(layout, today=today)
    if chart is None:
        st.info("None of the matching issues has both a start and a due date.")
    else:
        st.caption(f"{layout.min_date:%d %b %Y} – {layout.max_date:%d %b %Y} ({layout.total_days} days)")
        st.altair_chart(chart)

    if layout.unscheduled:
        st.subheader(f"Unscheduled ({len(layout.unscheduled)})")
        st.dataframe(unscheduled_frame(layout.unscheduled), hide_index=True)
