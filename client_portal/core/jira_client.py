"""Jira API client wrapper (REST v3 + enhanced search pagination)."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any

from jira import JIRA, JIRAError

from .config import SETTINGS

logger = logging.getLogger(__name__)


class JiraAPI:
    def __init__(self, server: str, email: str, token: str, *, cache_ttl: float | None = None):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = SETTINGS.cache_ttl_seconds if cache_ttl is None else float(cache_ttl)

    def clear_cache(self) -> None:
        """Reset the in-memory search cache."""
        cache = getattr(self, "_cache", None)
        if isinstance(cache, dict):
            cache.clear()

    def _cache_key(self, jql: str, fields, page_size: int) -> str:
        payload = {"jql": jql, "fields": fields, "page_size": page_size}
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def _session(self):
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        return session

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        """Run a JQL search and follow ``nextPageToken`` until the last page."""
        session = self._session()
        url = f"{self.server}/rest/api/3/search/jql"
        key = self._cache_key(jql, fields, page_size)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            logger.debug("Jira search cache hit (%d issues)", len(cached[1]))
            return cached[1]
        params: dict[str, Any] = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            resp = session.get(url, params=qp)
            if resp.status_code >= 400:
                raise RuntimeError(f"Jira search failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            out.extend(data.get("issues", []))
            logger.debug("Fetched %d Jira issues so far", len(out))
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        self._cache[key] = (now, out)
        return out

    def myself(self) -> dict[str, Any]:
        """Return the authenticated user's profile (used as a connection check)."""
        try:
            return self.client.myself()
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Jira authentication failed: {exc}") from exc

    def project_key(self, project_key: str) -> str:
        """Resolve a project key or id to its canonical key."""
        try:
            project = self.client.project(project_key)
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to fetch Jira project {project_key}: {exc}") from exc
        return getattr(project, "key", project_key)
