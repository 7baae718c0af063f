import textwrap

from client_portal.core.config import DEFAULT_START_DATE_FIELD
from client_portal.core.project_config import load_projects, projects_from_mapping, projects_from_secrets


def _write(tmp_path, text):
    path = tmp_path / "projects.yaml"
    path.write_text(textwrap.dedent(text))
    return path


def test_projects_inherit_defaults(tmp_path):
    path = _write(
        tmp_path,
        """
        defaults:
          jira_base_url: https://acme.atlassian.net
          jira_api_email: bot@acme.io
          jira_api_token: jira-secret
          tempo_api_token: tempo-secret
        projects:
          - name: Acme Web
            jira_project_key: WEB
          - name: Acme API
            jira_project_key: API
            tempo_api_token: ""
            start_date_field_id: customfield_20000
        """,
    )
    projects = load_projects(path)
    assert [p.name for p in projects] == ["Acme Web", "Acme API"]
    web, api = projects
    assert web.jira_base_url == "https://acme.atlassian.net"
    assert web.has_tempo
    assert web.start_date_field_id == DEFAULT_START_DATE_FIELD
    # empty values fall back to the defaults
    assert api.tempo_api_token == "tempo-secret"
    assert api.start_date_field_id == "customfield_20000"


def test_incomplete_projects_are_skipped():
    projects = projects_from_mapping(
        {"projects": [{"name": "No creds", "jira_project_key": "X"}, "not-a-mapping"]}
    )
    assert projects == []


def test_missing_or_invalid_file_gives_no_projects(tmp_path):
    assert load_projects(tmp_path / "absent.yaml") == []
    assert load_projects(_write(tmp_path, "projects: [unclosed")) == []
    assert load_projects(_write(tmp_path, "- just\n- a list\n")) == []


def test_projects_from_secrets_section():
    secrets = {
        "jira": {
            "JIRA_SERVER": "https://acme.atlassian.net",
            "JIRA_EMAIL": "bot@acme.io",
            "JIRA_API_TOKEN": "jira-secret",
            "JIRA_PROJECT_KEY": "WEB",
        }
    }
    (project,) = projects_from_secrets(secrets)
    assert project.name == "WEB"
    assert not project.has_tempo
    assert project.start_date_field_id == DEFAULT_START_DATE_FIELD


def test_projects_from_secrets_requires_credentials():
    assert projects_from_secrets({"jira": {"JIRA_SERVER": "https://acme.atlassian.net"}}) == []
    assert projects_from_secrets({}) == []
