"""Unit tests for query pattern extraction."""

import pytest

from relay_core.inference import build_jql, detect_operation, extract_issue_key
from relay_core.inference.extraction import (
    contains_word,
    extract_assignee,
    extract_comment_text,
    extract_field_update,
    extract_labels,
    extract_pull_request,
    extract_quoted,
)
from relay_core.inference.types import JiraOperation


class TestExtractIssueKey:
    """Tests for issue key extraction."""

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("please update CAI-42 status", "CAI-42"),
            ("get details for PROJ-5", "PROJ-5"),
            ("look at proj-7 please", "PROJ-7"),
            ("compare AB-1 and CD-2", "AB-1"),
            ("no ids here", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, query, expected):
        assert extract_issue_key(query) == expected


class TestDetectOperation:
    """Tests for Jira operation detection."""

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("get details for PROJ-5", JiraOperation.FETCH),
            ("add a comment on PROJ-5: deployed to staging", JiraOperation.COMMENT),
            ("assign PROJ-5 to jdoe", JiraOperation.ASSIGN),
            ("set the priority of PROJ-5 to High", JiraOperation.UPDATE_FIELD),
            ("please update CAI-42 status", JiraOperation.TRANSITIONS),
            ("move PROJ-5 to Done", JiraOperation.TRANSITIONS),
        ],
    )
    def test_with_key(self, query, expected):
        assert detect_operation(query, extract_issue_key(query)) == expected

    def test_without_key_is_search(self):
        assert detect_operation("comment on the login bug", None) == JiraOperation.SEARCH


class TestFieldExtraction:
    """Tests for comment, assignee, field and label extraction."""

    def test_quoted_comment_wins(self):
        query = 'comment on PROJ-5 “fixed in build 12” thanks'
        assert extract_comment_text(query) == "fixed in build 12"

    def test_comment_after_keyword(self):
        assert extract_comment_text("add a comment to PROJ-5: deployed") == "deployed"

    def test_comment_missing(self):
        assert extract_comment_text("comment") is None

    def test_assignee(self):
        assert extract_assignee("assign PROJ-5 to @jane.doe") == "jane.doe"
        assert extract_assignee("nothing to see") is None

    def test_named_field(self):
        assert extract_field_update("set priority of PROJ-5 to High") == ("priority", {"name": "High"})

    def test_plain_field(self):
        assert extract_field_update('change PROJ-5 summary to "New title"') == ("summary", "New title")

    def test_labels_field(self):
        assert extract_field_update("update labels on PROJ-5 to ui, backend") == (
            "labels",
            ["ui", "backend"],
        )

    def test_status_is_not_a_field(self):
        assert extract_field_update("set status of PROJ-5 to Done") is None

    def test_extract_labels(self):
        assert extract_labels("add labels ui, backend to PROJ-5") == ["ui", "backend"]
        assert extract_labels("no tags") == []

    def test_extract_quoted(self):
        assert extract_quoted('page titled "Release Notes"') == "Release Notes"
        assert extract_quoted("don't split on apostrophes") is None

    def test_contains_word(self):
        assert contains_word("My open bugs", "open")
        assert not contains_word("reopened tickets", "open")


class TestPullRequestExtraction:
    """Tests for pull request references."""

    def test_url(self):
        assert extract_pull_request("diff of https://github.com/acme/api/pull/42") == {
            "owner": "acme",
            "repo": "api",
            "pull_number": 42,
        }

    def test_short_ref(self):
        assert extract_pull_request("review acme/api#7")["pull_number"] == 7

    def test_none(self):
        assert extract_pull_request("no pr") is None


class TestBuildJql:
    """Tests for JQL construction."""

    def test_plain(self):
        assert build_jql("login timeout") == 'text ~ "login timeout"'

    def test_filters(self):
        jql = build_jql("my open bugs", project="CAI")
        assert jql == (
            'project = "CAI" AND text ~ "my open bugs" AND statusCategory != Done '
            "AND issuetype = Bug AND assignee = currentUser()"
        )

    def test_word_boundaries(self):
        """Substrings such as "debug" or "reopened" add no filters."""
        assert build_jql("debug reopened") == 'text ~ "debug reopened"'

    def test_quotes_escaped(self):
        assert build_jql('say "hi"') == 'text ~ "say \\"hi\\""'
