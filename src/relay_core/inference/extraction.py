"""Pattern extraction over free-text queries."""

from __future__ import annotations

import re
from typing import Any

from .types import JiraOperation

ISSUE_KEY_PATTERN = re.compile(r"([A-Z]+-[0-9]+)")
QUOTED_PATTERN = re.compile(r"[\"“]([^\"”]+)[\"”]")
URL_PATTERN = re.compile(r"https?://\S+")
PAGE_ID_PATTERN = re.compile(r"\b(\d{4,})\b")
PULL_REQUEST_URL_PATTERN = re.compile(
    r"github\.[^/\s]+/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/pull/(?P<number>\d+)"
)
PULL_REQUEST_REF_PATTERN = re.compile(r"(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)#(?P<number>\d+)")

_COMMENT_PATTERN = re.compile(
    r"\bcomment\b(?:\s+(?:on|to)\s+[A-Z]+-[0-9]+)?\s*(?::|saying|that)?\s*(.*)",
    re.I,
)
_ASSIGN_PATTERN = re.compile(r"\bassign\s+(?:[A-Z]+-[0-9]+\s+)?to\s+@?([\w.@-]+)", re.I)
_FIELD_UPDATE_PATTERN = re.compile(
    r"\b(?:set|update|change)\s+(?:[A-Z]+-[0-9]+(?:'s)?\s+)?(?:the\s+)?"
    r"(?P<field>[a-z][\w ]*?)\s+(?:(?:of|on|for)\s+[A-Z]+-[0-9]+\s+)?to\s+(?P<value>.+)",
    re.I,
)
_TRANSITION_PATTERN = re.compile(
    r"\btransitions?\b|\b(?:move|moving)\b|\b(?:status|workflow)\b",
    re.I,
)

# Jira fields whose values are objects keyed by name
_NAMED_FIELDS = {"priority", "issuetype", "resolution"}


def extract_issue_key(query: str | None) -> str | None:
    """Extract a ticket-style key such as ``CAI-42`` from a query.

    The query is uppercased first, so ``cai-42`` matches too.

    Args:
        query: Free-text query

    Returns:
        The first key found, or None
    """
    if not query:
        return None
    match = ISSUE_KEY_PATTERN.search(query.upper())
    return match.group(1) if match else None


def contains_word(text: str, *words: str) -> bool:
    """Case-insensitive whole-word (or whole-phrase) containment."""
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(word)}\b", lowered) for word in words)


def extract_quoted(query: str) -> str | None:
    match = QUOTED_PATTERN.search(query)
    return match.group(1).strip() if match else None


def extract_comment_text(query: str) -> str | None:
    """Text to post as a comment: quoted text first, else what follows "comment"."""
    quoted = extract_quoted(query)
    if quoted:
        return quoted
    match = _COMMENT_PATTERN.search(query)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def extract_assignee(query: str) -> str | None:
    match = _ASSIGN_PATTERN.search(query)
    return match.group(1) if match else None


def extract_field_update(query: str) -> tuple[str, Any] | None:
    """Parse "set <field> to <value>" style requests.

    Returns:
        (field id, value) or None. Named fields such as priority get
        ``{"name": value}`` values.
    """
    match = _FIELD_UPDATE_PATTERN.search(query)
    if not match:
        return None
    field = match.group("field").strip().lower().replace(" ", "_")
    if field in {"status", "state"}:
        # Status changes go through transitions, not field updates
        return None
    value: Any = match.group("value").strip().strip("\"'").rstrip(".")
    if field in _NAMED_FIELDS:
        value = {"name": value}
    elif field == "labels":
        value = [label.strip() for label in re.split(r"[,\s]+", value) if label.strip()]
    return field, value


def extract_labels(query: str) -> list[str]:
    """Labels named after "label"/"labels", comma or space separated."""
    match = re.search(r"\blabels?\b\s*:?\s*(.+)", query, re.I)
    if not match:
        return []
    tail = re.split(r"\b(?:to|on|for)\s+[A-Z]+-[0-9]+", match.group(1), maxsplit=1)[0]
    return [label.strip(" \"'") for label in re.split(r"[,\s]+", tail) if label.strip(" \"'")]


def extract_pull_request(query: str) -> dict[str, Any] | None:
    """Owner, repo and number from a PR URL or an ``owner/repo#123`` reference."""
    for pattern in (PULL_REQUEST_URL_PATTERN, PULL_REQUEST_REF_PATTERN):
        match = pattern.search(query)
        if match:
            return {
                "owner": match.group("owner"),
                "repo": match.group("repo"),
                "pull_number": int(match.group("number")),
            }
    return None


def detect_operation(query: str, issue_key: str | None) -> JiraOperation:
    """Pick the Jira operation a query asks for.

    Every operation except search needs an issue key; without one the
    query becomes a search.

    Args:
        query: Free-text query
        issue_key: Key extracted from the query, if any

    Returns:
        JiraOperation
    """
    if issue_key is None:
        return JiraOperation.SEARCH
    if contains_word(query, "comment"):
        return JiraOperation.COMMENT
    if _ASSIGN_PATTERN.search(query):
        return JiraOperation.ASSIGN
    if extract_field_update(query) is not None:
        return JiraOperation.UPDATE_FIELD
    if _TRANSITION_PATTERN.search(query):
        return JiraOperation.TRANSITIONS
    return JiraOperation.FETCH


def build_jql(query: str, project: Any = None) -> str:
    """Build a JQL text search with filters implied by the query's wording.

    Args:
        query: Free-text query
        project: Optional project key to restrict to

    Returns:
        JQL string
    """
    clauses = []
    if project:
        clauses.append(f'project = "{project}"')

    escaped = query.replace("\\", "\\\\").replace('"', '\\"')
    clauses.append(f'text ~ "{escaped}"')

    if contains_word(query, "open", "active"):
        clauses.append("statusCategory != Done")
    if contains_word(query, "bug", "bugs"):
        clauses.append("issuetype = Bug")
    if contains_word(query, "my", "assigned to me"):
        clauses.append("assignee = currentUser()")

    return " AND ".join(clauses)
