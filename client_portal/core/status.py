"""Status category mapping utilities.

Jira exposes a coarse ``statusCategory`` next to each workflow status. The
dashboard only cares about three buckets (``todo``, ``in_progress``,
``done``); this module derives them using the tables in config.py
(STATUS_CATEGORY_KEYS, STATUS_NAME_ALIASES).
"""

from __future__ import annotations

from .config import STATUS_CATEGORIES, STATUS_CATEGORY_KEYS, STATUS_NAME_ALIASES


def map_status_category(key: str | None, status_name: str | None = None) -> str:
    """Map a provider status category key to an internal category.

    Parameters
    ----------
    key : str | None
        Jira ``statusCategory.key`` (``new``, ``indeterminate``, ``done``...).
        Internal category names are accepted as-is.
    status_name : str | None
        Workflow status name, consulted only when ``key`` is unknown.

    Returns
    -------
    str
        One of ``todo``, ``in_progress``, ``done``.

    Examples
    --------
    >>> map_status_category("indeterminate")
    'in_progress'
    >>> map_status_category(None, "Closed")
    'done'
    >>> map_status_category("mystery")
    'todo'
    """
    text = str(key or "").strip().lower()
    if text in STATUS_CATEGORY_KEYS:
        return STATUS_CATEGORY_KEYS[text]
    if text in STATUS_CATEGORIES:
        return text
    name = str(status_name or "").strip().lower()
    if name in STATUS_NAME_ALIASES:
        return STATUS_NAME_ALIASES[name]
    return "todo"


def status_label(category: str | None) -> str:
    """Human label for a status category ("in_progress" -> "in progress")."""
    return str(category or "todo").replace("_", " ")


def is_done(category: str | None) -> bool:
    return category == "done"
