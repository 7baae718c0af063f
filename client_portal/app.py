"""Application entry point: page registry, router and shared session helpers."""

from __future__ import annotations

import streamlit as st

PAGES = {}

PREFERRED_ORDER = [
    "Project Overview",  # headline metrics
    "Schedule",  # gantt
    "Time Tracking",  # worklog table
    "Monthly Hours",  # author x month pivot
    "Setup / Connection",  # configuration
]


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def current_snapshot():
    """Return the loaded ProjectSnapshot, or warn and return None."""
    snapshot = st.session_state.get("snapshot")
    if snapshot is None:
        st.warning("Select a project and load its data on the Setup page first.")
    return snapshot


def jira_server() -> str:
    project = st.session_state.get("project")
    return project.jira_base_url if project is not None else ""


def main():
    project = st.session_state.get("project")
    st.sidebar.title(project.name if project is not None else "Client Portal")
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return

    ordered = [name for name in PREFERRED_ORDER if name in pages]
    trailing = sorted(name for name in pages if name not in PREFERRED_ORDER)
    pages = ordered + trailing

    if "Setup / Connection" in pages and "snapshot" not in st.session_state:
        default = pages.index("Setup / Connection")
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
