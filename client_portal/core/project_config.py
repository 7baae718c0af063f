"""Load project / credential configuration from YAML or Streamlit secrets."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .config import DEFAULT_START_DATE_FIELD, PROJECTS_FILE

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("jira_project_key", "jira_base_url", "jira_api_email", "jira_api_token")


@dataclass(slots=True, frozen=True)
class ProjectConfig:
    name: str
    jira_project_key: str
    jira_base_url: str
    jira_api_email: str
    jira_api_token: str
    tempo_api_token: str | None = None
    start_date_field_id: str = DEFAULT_START_DATE_FIELD

    @property
    def has_tempo(self) -> bool:
        return bool(self.tempo_api_token)


def projects_from_mapping(data: Mapping[str, Any]) -> list[ProjectConfig]:
    """Build ProjectConfig entries from a ``{"defaults": ..., "projects": [...]}`` mapping.

    Each project inherits any credential it does not set from ``defaults``.
    Entries missing a required key are skipped with a warning.
    """
    defaults = dict(data.get("defaults") or {})
    allowed = {f.name for f in fields(ProjectConfig)}
    out: list[ProjectConfig] = []
    for entry in data.get("projects") or []:
        if not isinstance(entry, Mapping):
            continue
        merged = {**defaults, **{k: v for k, v in entry.items() if v not in (None, "")}}
        missing = [k for k in REQUIRED_KEYS if not merged.get(k)]
        if missing:
            logger.warning("Skipping project %r: missing %s", entry.get("name"), ", ".join(missing))
            continue
        merged.setdefault("name", merged["jira_project_key"])
        if not merged.get("start_date_field_id"):
            merged["start_date_field_id"] = DEFAULT_START_DATE_FIELD
        out.append(ProjectConfig(**{k: str(v) for k, v in merged.items() if k in allowed}))
    return out


def load_projects(path: str | Path | None = None) -> list[ProjectConfig]:
    """Read ``projects.yaml`` (project root by default); [] when absent or invalid."""
    yaml_path = Path(path) if path else Path(__file__).resolve().parents[2] / PROJECTS_FILE
    if not yaml_path.exists():
        return []
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except yaml.YAMLError as exc:
        logger.warning("Could not parse %s: %s", yaml_path, exc)
        return []
    if not isinstance(data, Mapping):
        logger.warning("Ignoring %s: expected a mapping at the top level", yaml_path)
        return []
    return projects_from_mapping(data)


def projects_from_secrets(secrets: Mapping[str, Any]) -> list[ProjectConfig]:
    """Single-project fallback from a ``[jira]`` secrets section (or top level)."""
    section = secrets.get("jira", {}) or {}

    def pick(*names: str) -> Any:
        for name in names:
            value = section.get(name) or secrets.get(name)
            if value:
                return value
        return None

    entry = {
        "name": pick("PROJECT_NAME", "JIRA_PROJECT_KEY"),
        "jira_project_key": pick("JIRA_PROJECT_KEY"),
        "jira_base_url": pick("JIRA_SERVER", "JIRA_BASE_URL"),
        "jira_api_email": pick("JIRA_EMAIL"),
        "jira_api_token": pick("JIRA_API_TOKEN", "JIRA_TOKEN"),
        "tempo_api_token": pick("TEMPO_API_TOKEN"),
        "start_date_field_id": pick("START_DATE_FIELD"),
    }
    if not all(entry[k] for k in REQUIRED_KEYS):
        return []
    return projects_from_mapping({"projects": [entry]})
