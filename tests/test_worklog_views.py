import pandas as pd
import pytest

from client_portal.analytics.worklogs.filters import WorklogQuery, filter_issues, filter_worklogs
from client_portal.analytics.worklogs.views import (
    build_worklog_view,
    group_worklogs,
    paginate,
    sort_worklogs,
)
from client_portal.core.config import ALL_WORKLOGS_LABEL, UNASSIGNED_LABEL
from client_portal.core.mappers import issues_to_dataframe

from sample_data import sample_issues, sample_worklogs, worklog_row


def test_search_is_case_insensitive_across_columns():
    df = sample_worklogs()
    assert list(filter_worklogs(df, WorklogQuery(search_query="ALICE"))["issue_key"]) == ["WEB-2", "API-8"]
    assert list(filter_worklogs(df, WorklogQuery(search_query="rate lim"))["issue_key"]) == ["API-7"]
    assert list(filter_worklogs(df, WorklogQuery(search_query="api-"))["issue_key"]) == ["API-7", "API-8"]


def test_date_range_is_inclusive_and_combined_with_search():
    df = sample_worklogs()
    query = WorklogQuery(search_query="web", date_from="2024-04-02", date_to="2024-05-05")
    assert list(filter_worklogs(df, query)["start_date"]) == ["2024-04-02", "2024-05-05"]


def test_filtering_is_idempotent():
    df = sample_worklogs()
    query = WorklogQuery(search_query="a", date_from="2024-04-01")
    once = filter_worklogs(df, query)
    twice = filter_worklogs(once, query)
    pd.testing.assert_frame_equal(once, twice)


def test_sort_directions_are_reverses():
    df = sample_worklogs()
    asc = list(sort_worklogs(df, "time_spent_seconds", "asc")["time_spent_seconds"])
    desc = list(sort_worklogs(df, "time_spent_seconds", "desc")["time_spent_seconds"])
    assert asc == [900, 1800, 3600, 5400, 7200]
    assert desc == asc[::-1]


def test_sort_text_case_insensitively_and_stably():
    df = sample_worklogs()
    authors = list(sort_worklogs(df, "author", "asc")["author"].fillna("-"))
    assert authors == ["-", "Alice", "Alice", "bob", "Carol"]
    # ties keep their original relative order
    keys = list(sort_worklogs(df, "issue_key", "asc")["start_date"])
    assert keys == ["2024-04-20", "2024-05-30", "2024-03-15", "2024-05-05", "2024-04-02"]


def test_sort_rejects_unknown_field():
    with pytest.raises(ValueError):
        sort_worklogs(sample_worklogs(), "priority")


def test_group_none_is_single_bucket():
    groups = group_worklogs(sample_worklogs(), "none")
    assert [g.name for g in groups] == [ALL_WORKLOGS_LABEL]
    assert groups[0].total_seconds == 18900


def test_group_by_issue_prefix():
    groups = group_worklogs(sample_worklogs(), "epic")
    assert [(g.name, g.total_seconds) for g in groups] == [("API", 2700), ("WEB", 16200)]


def test_group_by_assignee_is_alphabetical_with_unassigned_bucket():
    groups = group_worklogs(sample_worklogs(), "assignee")
    assert [g.name for g in groups] == ["Alice", "bob", "Carol", UNASSIGNED_LABEL]
    alice = groups[0]
    assert list(alice.rows["issue_key"]) == ["WEB-2", "API-8"]


def test_paginate_clamps_out_of_range_pages():
    df = pd.DataFrame([worklog_row(f"WEB-{i}", "Alice", 60, "2024-03-01") for i in range(60)])
    last = paginate(df, 5)
    assert last.page == 2
    assert last.page_count == 3
    assert len(last.rows) == 10
    assert (last.first_row, last.last_row) == (51, 60)
    assert last.has_previous and not last.has_next
    assert paginate(df, -3).page == 0


def test_paginate_empty_frame():
    page = paginate(sample_worklogs().iloc[0:0])
    assert page.page_count == 1
    assert page.first_row == 0
    assert not page.has_next


def test_view_paginates_or_groups():
    df = sample_worklogs()
    flat = build_worklog_view(df, WorklogQuery(), page=0)
    assert flat.page is not None and flat.groups == []
    assert list(flat.page.rows["start_date"])[0] == "2024-05-30"
    assert flat.total_seconds == 18900

    grouped = build_worklog_view(df, WorklogQuery(group_by="epic", search_query="web"))
    assert grouped.page is None
    assert [g.name for g in grouped.groups] == ["WEB"]


def test_filter_issues_by_assignee_and_type():
    df = issues_to_dataframe(sample_issues())
    assert list(filter_issues(df, assignees=["Alice"])["key"]) == ["WEB-2"]
    unassigned = filter_issues(df, assignees=[UNASSIGNED_LABEL])
    assert "WEB-2" not in set(unassigned["key"])
    assert list(filter_issues(df, issue_types=["Epic"])["key"]) == ["WEB-1"]
    assert list(filter_issues(df, search_query="web-6")["key"]) == ["WEB-6"]


def test_sort_ties_differing_only_in_case_keep_input_order():
    df = pd.DataFrame(
        [
            worklog_row("WEB-1", "alice", 60, "2024-03-01"),
            worklog_row("WEB-2", "Alice", 60, "2024-03-02"),
            worklog_row("WEB-3", "ALICE", 60, "2024-03-03"),
        ]
    )
    assert list(sort_worklogs(df, "author", "asc")["issue_key"]) == ["WEB-1", "WEB-2", "WEB-3"]
