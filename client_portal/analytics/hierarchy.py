"""Arrange a flat issue list into Epic > Story > Task rows (pure functions)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from client_portal.core.config import EPIC_TYPE, STORY_TYPE
from client_portal.core.models import IssueModel


@dataclass(slots=True, frozen=True)
class HierarchyRow:
    issue: IssueModel
    depth: int


def issue_level(issue: IssueModel) -> str:
    """Return ``epic``, ``story`` or ``task``; unknown types are task-like."""
    if issue.issue_type == EPIC_TYPE:
        return "epic"
    if issue.issue_type == STORY_TYPE:
        return "story"
    return "task"


def _children_by_parent(items: Sequence[IssueModel]) -> dict[str, list[IssueModel]]:
    out: dict[str, list[IssueModel]] = {}
    for item in items:
        if item.parent_key:
            out.setdefault(item.parent_key, []).append(item)
    return out


def build_hierarchy(issues: Iterable[IssueModel]) -> list[HierarchyRow]:
    """Order issues as a parent-first tree with at most three levels.

    Epics come first (depth 0), each followed by its stories (depth 1) and
    each story by its tasks (depth 2). Stories whose epic is not in the set
    follow at depth 0 with their tasks at depth 1; remaining tasks close the
    list at depth 0. Sibling order follows the input order and every key is
    emitted once (first placement wins).
    """
    items = list(issues)
    epics = [i for i in items if issue_level(i) == "epic"]
    stories = [i for i in items if issue_level(i) == "story"]
    tasks = [i for i in items if issue_level(i) == "task"]
    stories_by_epic = _children_by_parent(stories)
    tasks_by_story = _children_by_parent(tasks)

    rows: list[HierarchyRow] = []
    visited: set[str] = set()

    def emit(issue: IssueModel, depth: int) -> bool:
        if issue.key in visited:
            return False
        visited.add(issue.key)
        rows.append(HierarchyRow(issue, depth))
        return True

    def emit_story(story: IssueModel, depth: int) -> None:
        if not emit(story, depth):
            return
        for task in tasks_by_story.get(story.key, []):
            emit(task, depth + 1)

    for epic in epics:
        if not emit(epic, 0):
            continue
        for story in stories_by_epic.get(epic.key, []):
            emit_story(story, 1)

    # Orphan stories: epic missing from the result set
    for story in stories:
        emit_story(story, 0)

    # Orphan tasks
    for task in tasks:
        emit(task, 0)

    return rows


def hierarchy_keys(rows: Iterable[HierarchyRow]) -> list[str]:
    return [r.issue.key for r in rows]
