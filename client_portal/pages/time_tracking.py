"""Time tracking page: searchable, sortable, groupable worklog table with CSV export."""

from __future__ import annotations

from datetime import date

import streamlit as st

from client_portal.analytics.formatting import format_hours_detailed
from client_portal.analytics.worklogs.export import worklogs_to_csv
from client_portal.analytics.worklogs.filters import WorklogQuery
from client_portal.analytics.worklogs.views import build_worklog_view
from client_portal.app import current_snapshot, jira_server, register_page
from client_portal.core.config import SETTINGS
from client_portal.visual.tables import render_worklog_table

SORT_LABELS = {
    "start_date": "Date",
    "issue_key": "Issue",
    "author": "Author",
    "time_spent_seconds": "Hours",
}
GROUP_LABELS = {"none": "None", "epic": "Issue Prefix", "assignee": "Assignee"}


def _query_controls() -> WorklogQuery:
    search = st.text_input("Search issue, summary or author")
    col_from, col_to, col_sort, col_dir, col_group = st.columns(5)
    date_from = col_from.date_input("From", value=None)
    date_to = col_to.date_input("To", value=None)
    sort_field = col_sort.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get)
    sort_dir = col_dir.selectbox("Direction", ["desc", "asc"])
    group_by = col_group.selectbox("Group by", list(GROUP_LABELS), format_func=GROUP_LABELS.get)
    return WorklogQuery(
        search_query=search,
        date_from=date_from.isoformat() if isinstance(date_from, date) else None,
        date_to=date_to.isoformat() if isinstance(date_to, date) else None,
        sort_field=sort_field,
        sort_dir=sort_dir,
        group_by=group_by,
    )


def _render_pager(view) -> None:
    page = view.page
    col_prev, col_info, col_next = st.columns([1, 3, 1])
    if col_prev.button("Previous", disabled=not page.has_previous):
        st.session_state["worklog_page"] = page.page - 1
        st.rerun()
    col_info.caption(f"Rows {page.first_row}–{page.last_row} of {page.total_rows} (page {page.page + 1}/{page.page_count})")
    if col_next.button("Next", disabled=not page.has_next):
        st.session_state["worklog_page"] = page.page + 1
        st.rerun()


@register_page("Time Tracking")
def time_tracking_page():
    st.title("Time Tracking")
    snapshot = current_snapshot()
    if snapshot is None:
        return
    worklogs = snapshot.worklogs_df
    if worklogs.empty:
        st.info("No worklogs found for this project.")
        return

    query = _query_controls()
    if st.session_state.get("worklog_query") != query:
        st.session_state["worklog_query"] = query
        st.session_state["worklog_page"] = 0
    view = build_worklog_view(worklogs, query, st.session_state.get("worklog_page", 0))

    st.caption(f"{len(view.rows)} worklogs, {format_hours_detailed(view.total_seconds)} in total")
    server = jira_server()
    if view.page is not None:
        render_worklog_table(view.page.rows.head(SETTINGS.max_table_rows), server, key="worklogs")
        _render_pager(view)
    else:
        for group in view.groups:
            st.markdown(f"**{group.name}** · {format_hours_detailed(group.total_seconds)}")
            render_worklog_table(group.rows.head(SETTINGS.max_table_rows), server, key=f"group-{group.name}")

    st.download_button(
        "Export CSV",
        data=worklogs_to_csv(view.rows).encode(SETTINGS.download_encoding),
        file_name=f"worklogs-{date.today().isoformat()}.csv",
        mime="text/csv",
    )
