"""Tempo API client (REST v4, offset/limit pagination)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import TEMPO_API_BASE

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "authentication failed, check the Tempo API token",
    403: "access denied, check the token's permissions",
    404: "resource not found",
    429: "too many requests, wait a moment and try again",
}


class TempoAPIError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TempoAPI:
    def __init__(self, token: str, base_url: str = TEMPO_API_BASE, *, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            }
        )

    def _get(self, path: str, params: dict[str, Any] | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.ConnectionError as exc:
            raise TempoAPIError(f"Tempo: cannot connect to {self.base_url}") from exc
        except requests.exceptions.Timeout as exc:
            raise TempoAPIError("Tempo: connection timed out") from exc
        if resp.status_code >= 400:
            reason = _STATUS_MESSAGES.get(resp.status_code, resp.text[:200])
            raise TempoAPIError(f"Tempo request failed {resp.status_code}: {reason}", resp.status_code)
        return resp

    def fetch_project_worklogs(
        self,
        project_key: str,
        date_from: str | None = None,
        date_to: str | None = None,
        *,
        limit: int = 1000,
    ) -> list[dict[str, Any]]:
        """Fetch all worklogs of a project, optionally bounded by ISO dates.

        Pages by offset until the response no longer advertises
        ``metadata.next``.
        """
        out: list[dict[str, Any]] = []
        offset = 0
        while True:
            params: dict[str, Any] = {"limit": limit, "offset": offset}
            if date_from:
                params["from"] = date_from
            if date_to:
                params["to"] = date_to
            data = self._get(f"/worklogs/project/{project_key}", params=params).json()
            results = data.get("results") or []
            out.extend(results)
            logger.debug("Fetched %d Tempo worklogs so far for %s", len(out), project_key)
            if not (data.get("metadata") or {}).get("next") or not results:
                break
            offset += limit
        return out

    def check_access(self) -> bool:
        """Return True when the token can read Tempo accounts."""
        self._get("/accounts", params={"limit": 1})
        return True
