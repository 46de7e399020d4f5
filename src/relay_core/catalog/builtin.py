"""Built-in tool definitions seeded into the catalog at startup."""

from .types import Tool

# (name, category, description, capabilities, required_inputs)
_BUILTIN_DEFINITIONS: tuple[tuple[str, str, str, tuple[str, ...], tuple[str, ...]], ...] = (
    # Jira
    (
        "mcp_jira-sjc12_call_jira_rest_api",
        "jira",
        "Direct access to any Jira REST API endpoint. Supports GET, POST, PUT, DELETE operations.",
        ("search", "get", "create", "update", "delete", "jira", "issue", "api"),
        ("endpoint", "method"),
    ),
    (
        "mcp_jira-sjc12_add_labels",
        "jira",
        "Add labels to a Jira issue without overriding existing labels",
        ("add", "labels", "jira", "issue", "update"),
        ("issue_key", "labels"),
    ),
    (
        "mcp_jira-sjc12_get_field_info",
        "jira",
        "Intelligent field lookup with fuzzy search. Find field IDs by name or search by type.",
        ("get", "field", "info", "metadata", "jira", "search"),
        (),
    ),
    # Confluence
    (
        "mcp_confluence_search_confluence_pages",
        "confluence",
        "Search Confluence pages using CQL (Confluence Query Language)",
        ("search", "documentation", "wiki", "knowledge", "confluence", "pages"),
        ("cql_query",),
    ),
    (
        "mcp_confluence_get_confluence_page_by_id",
        "confluence",
        "Get content of a Confluence page by its ID",
        ("read", "get", "documentation", "wiki", "content", "confluence", "page"),
        ("page_id",),
    ),
    (
        "mcp_confluence_get_confluence_page_by_title",
        "confluence",
        "Get content of a Confluence page by space key and title",
        ("read", "get", "documentation", "wiki", "content", "confluence", "page"),
        ("space_key", "title"),
    ),
    (
        "mcp_confluence_get_confluence_page_by_url",
        "confluence",
        "Get content of a Confluence page by URL",
        ("read", "get", "documentation", "wiki", "content", "confluence", "page"),
        ("page_url",),
    ),
    (
        "mcp_confluence_call_confluence_rest_api",
        "confluence",
        "Call any Confluence REST API endpoint",
        ("call", "rest", "api", "confluence", "read", "write"),
        ("endpoint", "method"),
    ),
    # GitHub
    (
        "mcp_aicodinggithub_call_github_graphql_for_query",
        "github",
        "Call GitHub GraphQL API for read operations (queries)",
        ("query", "graphql", "github", "read", "code", "repo", "pull_request", "issues"),
        ("graphql",),
    ),
    (
        "mcp_aicodinggithub_get_pull_request_diff",
        "github",
        "Get the diff of a specific pull request",
        ("get", "diff", "pull_request", "pr", "github", "code", "review"),
        ("owner", "repo", "pull_number"),
    ),
    (
        "mcp_aicodinggithub_call_github_restapi_for_search",
        "github",
        "Call GitHub REST API for search operations (code, users)",
        ("search", "rest", "api", "github", "code", "users"),
        ("resource", "parameters"),
    ),
    (
        "mcp_aicodinggithub_call_github_graphql_for_mutation",
        "github",
        "Call GitHub GraphQL API for write operations (mutations)",
        ("mutation", "graphql", "github", "write", "code", "repo", "create", "update"),
        ("graphql",),
    ),
    # Webex
    (
        "who_am_i",
        "webex",
        "Get the current authenticated Webex user's information",
        ("webex", "user", "profile", "me", "identity"),
        (),
    ),
    (
        "get_person",
        "webex",
        "Get information about a Webex user by their person ID",
        ("webex", "user", "person", "profile", "get"),
        ("personId",),
    ),
    (
        "list_spaces",
        "webex",
        "List Webex spaces (rooms) the user is a member of",
        ("webex", "space", "room", "list", "group", "chat"),
        (),
    ),
    (
        "get_space",
        "webex",
        "Get details of a specific Webex space",
        ("webex", "space", "room", "get", "details"),
        ("spaceId",),
    ),
    (
        "list_memberships",
        "webex",
        "List members of a Webex space",
        ("webex", "space", "members", "membership", "list"),
        ("spaceId",),
    ),
    (
        "search_spaces_by_name",
        "webex",
        "Search for spaces (rooms) by name or partial name match",
        ("webex", "search", "space", "find", "name", "lookup"),
        ("searchTerm",),
    ),
    (
        "list_messages",
        "webex",
        "List messages in a Webex space with pagination",
        ("webex", "message", "chat", "list", "conversation"),
        ("spaceId",),
    ),
    (
        "get_message",
        "webex",
        "Get a specific message by ID",
        ("webex", "message", "get", "read"),
        ("messageId",),
    ),
    (
        "post_message",
        "webex",
        "Post a message to a Webex space with optional citations",
        ("webex", "message", "post", "send", "write", "chat"),
        ("spaceId", "markdown"),
    ),
    (
        "get_context_around_message",
        "webex",
        "Get messages before and after a specific message for context",
        ("webex", "message", "context", "thread", "surrounding"),
        ("spaceId", "messageId"),
    ),
    (
        "index_space_messages",
        "webex",
        "Index messages from a space into local storage for retrieval",
        ("webex", "index", "rag", "search", "space", "messages"),
        ("spaceId",),
    ),
    (
        "retrieve_relevant",
        "webex",
        "Retrieve relevant past messages for a question using RAG-style retrieval",
        ("webex", "rag", "search", "retrieve", "relevant", "question"),
        ("spaceId", "question"),
    ),
    (
        "ask_space",
        "webex",
        "Ask a question and get a synthesized answer based on conversation history in the space",
        ("webex", "ask", "question", "answer", "ai", "rag", "search"),
        ("spaceId", "question"),
    ),
)


def builtin_tools() -> list[Tool]:
    """Return the default tool set, in declaration order."""
    return [
        Tool.create(
            name=name,
            category=category,
            description=description,
            capabilities=capabilities,
            required_inputs=required_inputs,
        )
        for name, category, description, capabilities, required_inputs in _BUILTIN_DEFINITIONS
    ]
