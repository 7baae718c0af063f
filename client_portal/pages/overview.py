"""Project overview page: completion and time metrics."""

from __future__ import annotations

import streamlit as st

from client_portal.analytics.aggregations.completion import project_metrics
from client_portal.app import current_snapshot, register_page


@register_page("Project Overview")
def overview_page():
    st.title("Project Overview")
    snapshot = current_snapshot()
    if snapshot is None:
        return
    metrics = project_metrics(snapshot.issues_df, snapshot.worklogs_df)

    col1, col2, col3 = st.columns(3)
    col1.metric(
        "Progress vs Estimate",
        f"{metrics.estimate_completion_pct}%",
        help="Logged hours against original estimates, capped at 100%.",
    )
    col1.caption(f"{metrics.logged_hours:.1f}h logged of {metrics.estimated_hours:.1f}h estimated")
    col2.metric("Issues Done", f"{metrics.done_ratio_pct}%")
    col2.caption(f"{metrics.done_issues} of {metrics.total_issues} issues done")
    col3.metric("Total Hours", f"{metrics.total_hours}h")
    col3.caption(f"{metrics.worklog_count} worklogs")
    st.progress(metrics.estimate_completion_pct / 100)

    if metrics.estimated_hours <= 0:
        st.caption("No original estimates set on the project's issues.")
