"""ProjectService: fetches Jira issues and Tempo worklogs for one project and maps them."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

import pandas as pd
import pytz

from .config import FETCHED_ISSUE_TYPES, TIMEZONE
from .jira_client import JiraAPI
from .mappers import (
    attach_issue_details,
    issues_to_dataframe,
    map_issue,
    map_worklog,
    worklogs_to_dataframe,
)
from .models import IssueModel, WorklogModel
from .project_config import ProjectConfig
from .tempo_client import TempoAPI, TempoAPIError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]

BASE_ISSUE_FIELDS: Sequence[str] = (
    "summary",
    "status",
    "issuetype",
    "parent",
    "duedate",
    "assignee",
    "timeoriginalestimate",
)


@dataclass(slots=True)
class ProjectSnapshot:
    issues: list[IssueModel]
    issues_df: pd.DataFrame
    worklogs_df: pd.DataFrame
    fetched_at: datetime


@dataclass(slots=True)
class ConnectionReport:
    jira_ok: bool
    jira_user: str | None = None
    tempo_ok: bool | None = None
    error: str | None = None


class ProjectService:
    def __init__(self, jira: JiraAPI, tempo: TempoAPI | None, project: ProjectConfig):
        self.jira = jira
        self.tempo = tempo
        self.project = project
        self._tz = pytz.timezone(TIMEZONE)

    # ------------------ Queries ------------------
    def issue_jql(self) -> str:
        types = ", ".join(f'"{t}"' for t in FETCHED_ISSUE_TYPES)
        return (
            f'project = "{self.project.jira_project_key}" AND issuetype in ({types}) '
            "ORDER BY issuetype ASC, key ASC"
        )

    def issue_fields(self) -> list[str]:
        return [*BASE_ISSUE_FIELDS, self.project.start_date_field_id]

    # ------------------ Fetch Methods ------------------
    def fetch_issue_models(self, *, progress: ProgressCallback | None = None) -> list[IssueModel]:
        if progress:
            progress(f"Querying issues for {self.project.jira_project_key}", None, None)
        raw = self.jira.search_enhanced(self.issue_jql(), fields=self.issue_fields())
        issues: list[IssueModel] = []
        for idx, item in enumerate(raw, start=1):
            if not item.get("key"):
                logger.warning("Skipping Jira issue without a key: %s", item.get("id"))
                continue
            issues.append(map_issue(item, start_date_field=self.project.start_date_field_id))
            if progress and idx % 100 == 0:
                progress("Mapping issues", idx, len(raw))
        logger.info("Fetched %d issues for %s", len(issues), self.project.jira_project_key)
        return issues

    def fetch_issues(self, *, progress: ProgressCallback | None = None) -> pd.DataFrame:
        return issues_to_dataframe(self.fetch_issue_models(progress=progress))

    def fetch_worklog_models(
        self,
        date_from: str | None = None,
        date_to: str | None = None,
        *,
        issues: Sequence[IssueModel] | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[WorklogModel]:
        """Fetch Tempo worklogs and join them to ``issues`` for keys and summaries."""
        if self.tempo is None:
            logger.info("No Tempo token configured for %s; skipping worklogs", self.project.name)
            return []
        if progress:
            progress("Loading worklogs from Tempo", None, None)
        project_key = self.jira.project_key(self.project.jira_project_key)
        raw = self.tempo.fetch_project_worklogs(project_key, date_from, date_to)
        worklogs = [map_worklog(item) for item in raw]
        if issues is None:
            issues = self.fetch_issue_models(progress=progress)
        return attach_issue_details(worklogs, issues)

    def fetch_worklogs(
        self,
        date_from: str | None = None,
        date_to: str | None = None,
        *,
        issues: Sequence[IssueModel] | None = None,
        progress: ProgressCallback | None = None,
    ) -> pd.DataFrame:
        models = self.fetch_worklog_models(date_from, date_to, issues=issues, progress=progress)
        df = worklogs_to_dataframe(models)
        if df.empty:
            return df
        return df.sort_values(by="start_date", ascending=False, kind="stable")

    def fetch_snapshot(
        self,
        date_from: str | None = None,
        date_to: str | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> ProjectSnapshot:
        """Issues and worklogs fetched together (issues are fetched once)."""
        issues = self.fetch_issue_models(progress=progress)
        worklogs_df = self.fetch_worklogs(date_from, date_to, issues=issues, progress=progress)
        return ProjectSnapshot(
            issues=issues,
            issues_df=issues_to_dataframe(issues),
            worklogs_df=worklogs_df,
            fetched_at=datetime.now(self._tz),
        )

    def test_connection(self) -> ConnectionReport:
        """Check Jira credentials and, when configured, Tempo access."""
        try:
            me = self.jira.myself()
        except RuntimeError as exc:
            return ConnectionReport(jira_ok=False, error=str(exc))
        report = ConnectionReport(jira_ok=True, jira_user=(me or {}).get("displayName"))
        if self.tempo is not None:
            try:
                report.tempo_ok = self.tempo.check_access()
            except TempoAPIError as exc:
                report.tempo_ok = False
                report.error = str(exc)
        return report


def build_service(project: ProjectConfig) -> ProjectService:
    """Create API clients for a configured project."""
    jira = JiraAPI(project.jira_base_url, project.jira_api_email, project.jira_api_token)
    tempo = TempoAPI(project.tempo_api_token) if project.has_tempo else None
    return ProjectService(jira, tempo, project)
