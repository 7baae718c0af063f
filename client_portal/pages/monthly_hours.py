"""Monthly hours page: hours per team member for the last four calendar months."""

from __future__ import annotations

import streamlit as st

from client_portal.analytics.aggregations.monthly import monthly_pivot, monthly_pivot_display
from client_portal.app import current_snapshot, register_page


@register_page("Monthly Hours")
def monthly_hours_page():
    st.title("Monthly Hours")
    snapshot = current_snapshot()
    if snapshot is None:
        return
    if snapshot.worklogs_df.empty:
        st.info("No worklogs found for this project.")
        return
    pivot = monthly_pivot(snapshot.worklogs_df, snapshot.fetched_at)
    st.caption(f"{pivot.months[0].label} – {pivot.months[-1].label}")
    if not pivot.authors:
        st.info("No worklogs fall within the last four months.")
        return
    st.dataframe(monthly_pivot_display(pivot), hide_index=True)
