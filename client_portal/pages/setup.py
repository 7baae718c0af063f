"""Connection setup page: pick a configured project (or enter credentials) and load its data."""

from __future__ import annotations

import logging

import streamlit as st

from client_portal.app import register_page
from client_portal.core.config import DEFAULT_START_DATE_FIELD
from client_portal.core.project_config import ProjectConfig, load_projects, projects_from_secrets
from client_portal.core.service import build_service
from client_portal.visual.progress import ProgressReporter

logger = logging.getLogger(__name__)


def _configured_projects() -> list[ProjectConfig]:
    projects = load_projects()
    if projects:
        return projects
    try:
        return projects_from_secrets(st.secrets)
    except FileNotFoundError:
        logger.info("No projects.yaml and no Streamlit secrets file found")
        return []


def _manual_project() -> ProjectConfig | None:
    with st.expander("Enter credentials manually"):
        name = st.text_input("Project name")
        key = st.text_input("Jira project key")
        server = st.text_input("Jira base URL")
        email = st.text_input("Jira email")
        token = st.text_input("Jira API token", type="password")
        tempo = st.text_input("Tempo API token (optional)", type="password")
        start_field = st.text_input("Start date field id", value=DEFAULT_START_DATE_FIELD)
    if not (key and server and email and token):
        return None
    return ProjectConfig(
        name=name or key,
        jira_project_key=key,
        jira_base_url=server,
        jira_api_email=email,
        jira_api_token=token,
        tempo_api_token=tempo or None,
        start_date_field_id=start_field or DEFAULT_START_DATE_FIELD,
    )


@register_page("Setup / Connection")
def setup_page():
    st.title("Project Connection")
    st.caption("Projects come from projects.yaml or Streamlit secrets (use a secrets manager in production).")

    projects = _configured_projects()
    manual = _manual_project()
    choices = {p.name: p for p in projects}
    if manual is not None:
        choices[f"{manual.name} (manual)"] = manual
    if not choices:
        st.info("No projects configured yet.")
        return

    label = st.selectbox("Project", list(choices))
    project = choices[label]

    col_from, col_to = st.columns(2)
    date_from = col_from.date_input("Worklogs from", value=None)
    date_to = col_to.date_input("Worklogs to", value=None)

    col_test, col_load = st.columns(2)
    if col_test.button("Test Connection"):
        report = build_service(project).test_connection()
        if report.jira_ok:
            st.success(f"Jira connected as {report.jira_user or 'unknown user'}.")
        else:
            st.error(report.error or "Jira connection failed.")
        if report.tempo_ok is True:
            st.success("Tempo token accepted.")
        elif report.tempo_ok is False:
            st.error(report.error or "Tempo connection failed.")

    if col_load.button("Load Project Data", type="primary"):
        reporter = ProgressReporter(f"Loading {project.name}")
        try:
            service = build_service(project)
            snapshot = service.fetch_snapshot(
                date_from.isoformat() if date_from else None,
                date_to.isoformat() if date_to else None,
                progress=reporter.callback,
            )
        except RuntimeError as exc:
            logger.exception("Failed to load project %s", project.name)
            reporter.error(f"Failed to load project data: {exc}")
            return
        st.session_state["project"] = project
        st.session_state["project_service"] = service
        st.session_state["snapshot"] = snapshot
        st.session_state["worklog_page"] = 0
        reporter.complete(f"Loaded {len(snapshot.issues)} issues and {len(snapshot.worklogs_df)} worklogs.")

    if "snapshot" in st.session_state:
        snap = st.session_state["snapshot"]
        st.info(f"Data loaded at {snap.fetched_at:%Y-%m-%d %H:%M}.")
