"""CSV export of worklog rows."""

from __future__ import annotations

import csv

import pandas as pd

from client_portal.core.config import CSV_HEADER


def worklogs_export_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Rows in export column order; hours are seconds / 3600 with two decimals."""
    if df.empty:
        return pd.DataFrame(columns=list(CSV_HEADER))
    seconds = pd.to_numeric(df["time_spent_seconds"], errors="coerce").fillna(0)
    out = pd.DataFrame(
        {
            "Issue Key": df["issue_key"].fillna("").astype(str),
            "Issue Summary": df["issue_summary"].fillna("").astype(str),
            "Author": df["author"].fillna("").astype(str),
            "Hours": (seconds / 3600).map(lambda h: f"{h:.2f}"),
            "Date": df["start_date"].fillna("").astype(str),
            "Description": df["description"].fillna("").astype(str),
        }
    )
    return out.reset_index(drop=True)


def worklogs_to_csv(df: pd.DataFrame) -> str:
    """Serialize worklog rows for download.

    Fields containing a quote, comma or newline are quoted, with embedded
    quotes doubled.
    """
    export = worklogs_export_frame(df)
    return export.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
