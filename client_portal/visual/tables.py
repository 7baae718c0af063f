"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
import streamlit as st

from client_portal.analytics.formatting import format_hours_detailed
from client_portal.analytics.hierarchy import HierarchyRow
from client_portal.analytics.timeline import row_detail
from client_portal.core.config import NO_DATA_MARKER


def add_issue_link(df: pd.DataFrame, server: str, key_col: str = "issue_key", label: str = "Issue"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="small",
        )
    }
    return out, cfg


def worklog_display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Worklog rows as shown in the time tracking table."""
    columns = ["issue_key", "Summary", "Author", "Hours", "Date", "Description"]
    if df.empty:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        {
            "issue_key": df["issue_key"],
            "Summary": df["issue_summary"].fillna(""),
            "Author": df["author"].fillna(""),
            "Hours": df["time_spent_seconds"].apply(format_hours_detailed),
            "Date": df["start_date"],
            "Description": df["description"].fillna("").replace("", NO_DATA_MARKER),
        },
        columns=columns,
    )


def render_worklog_table(df: pd.DataFrame, server: str, *, key: str | None = None) -> None:
    display = worklog_display_frame(df)
    linked, cfg = add_issue_link(display, server)
    cols = [c for c in ("Issue", "Summary", "Author", "Hours", "Date", "Description") if c in linked.columns]
    st.dataframe(linked[cols], hide_index=True, column_config=cfg, key=key)


def unscheduled_frame(rows: Iterable[HierarchyRow]) -> pd.DataFrame:
    """Issues missing a start or due date, indented by hierarchy depth."""
    records = []
    for r in rows:
        detail = row_detail(r.issue)
        records.append(
            {
                "Issue": f"{'  ' * r.depth}{r.issue.key}",
                "Type": r.issue.issue_type,
                "Summary": r.issue.summary,
                "Status": detail.status,
                "Assignee": detail.assignee or "",
                "Start": detail.start or NO_DATA_MARKER,
                "Due": detail.due or NO_DATA_MARKER,
            }
        )
    return pd.DataFrame(records, columns=["Issue", "Type", "Summary", "Status", "Assignee", "Start", "Due"])
