import random

from client_portal.analytics.hierarchy import build_hierarchy, hierarchy_keys, issue_level

from sample_data import issue, sample_issues


def _depths(rows):
    return [(r.issue.key, r.depth) for r in rows]


def test_parent_first_order_with_orphans():
    rows = build_hierarchy(sample_issues())
    assert _depths(rows) == [
        ("WEB-1", 0),
        ("WEB-2", 1),
        ("WEB-3", 2),
        ("WEB-4", 0),  # epic OLD-9 is not in the result set
        ("WEB-5", 1),
        ("WEB-6", 0),
    ]


def test_every_issue_appears_exactly_once_regardless_of_input_order():
    items = sample_issues()
    shuffled = items[:]
    random.Random(7).shuffle(shuffled)
    keys = hierarchy_keys(build_hierarchy(shuffled))
    assert sorted(keys) == sorted(i.key for i in items)
    assert len(keys) == len(set(keys))


def test_duplicate_keys_are_emitted_once():
    rows = build_hierarchy([issue("E-1", "Epic"), issue("E-1", "Epic"), issue("S-1", "Story", parent="E-1")])
    assert _depths(rows) == [("E-1", 0), ("S-1", 1)]


def test_task_directly_under_epic_is_top_level():
    rows = build_hierarchy([issue("E-1", "Epic"), issue("T-1", "Task", parent="E-1")])
    assert _depths(rows) == [("E-1", 0), ("T-1", 0)]


def test_siblings_keep_input_order():
    rows = build_hierarchy(
        [
            issue("E-1", "Epic"),
            issue("S-9", "Story", parent="E-1"),
            issue("S-2", "Story", parent="E-1"),
        ]
    )
    assert hierarchy_keys(rows) == ["E-1", "S-9", "S-2"]


def test_empty_input():
    assert build_hierarchy([]) == []


def test_unknown_issue_types_are_task_like():
    assert issue_level(issue("X-1", "Bug")) == "task"
    assert issue_level(issue("X-2", "Epic")) == "epic"
