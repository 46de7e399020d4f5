"""Reference call shapes handed to the argument generator."""

from relay_core.catalog.types import Tool

JIRA_REST_REFERENCE = """Jira REST API call shapes:
- Get issue: endpoint='issue/{KEY}', method='GET'
- Add comment: endpoint='issue/{KEY}/comment', method='POST', data={body: 'comment text'}
- Update issue: endpoint='issue/{KEY}', method='PUT', data={fields: {...}}
- Assign issue: endpoint='issue/{KEY}/assignee', method='PUT', data={name: 'user'}
- Search: endpoint='search', method='GET', params={jql: '...', maxResults: 50}
- Transitions: endpoint='issue/{KEY}/transitions', method='GET'
  or method='POST' with data={transition: {id: '...'}}"""

JIRA_REFERENCE = """Jira tool arguments:
- add_labels: {issue_key: 'KEY-1', labels: ['a', 'b']}
- get_field_info: {search_term: 'field name'} or {field_names: ['...']}"""

CONFLUENCE_REFERENCE = """Confluence tool arguments:
- search_confluence_pages: {cql_query: 'text ~ "words"', limit: 25}
- get_confluence_page_by_id: {page_id: '12345'}
- get_confluence_page_by_title: {space_key: 'SPACE', title: 'Page title'}
- get_confluence_page_by_url: {page_url: 'https://...'}
- call_confluence_rest_api: {endpoint: 'content/search', method: 'GET', params: {cql: '...'}}"""

GITHUB_REFERENCE = """GitHub tool arguments:
- call_github_graphql_for_query / _for_mutation: {graphql: 'query { ... }'}
- get_pull_request_diff: {owner: 'org', repo: 'name', pull_number: 123}
- call_github_restapi_for_search: {resource: 'code' | 'users', parameters: {q: '...'}}"""

WEBEX_REFERENCE = """Webex tool arguments use camelCase ids:
- spaceId, messageId, personId identify objects
- search_spaces_by_name: {searchTerm: '...'}
- retrieve_relevant / ask_space: {spaceId: '...', question: '...'}
- list_* tools accept max (default 50)"""

_CATEGORY_REFERENCES = {
    "confluence": CONFLUENCE_REFERENCE,
    "github": GITHUB_REFERENCE,
    "webex": WEBEX_REFERENCE,
}


def call_shape_reference(tool: Tool) -> str:
    """Category-specific reference of valid call shapes for a tool.

    Args:
        tool: Tool being called

    Returns:
        Reference text, empty when nothing is known about the category
    """
    category = tool.category.lower()
    if category == "jira":
        if "rest_api" in tool.remote_tool_name():
            return JIRA_REST_REFERENCE
        return JIRA_REFERENCE

    reference = _CATEGORY_REFERENCES.get(category, "")
    if tool.required_inputs:
        required = ", ".join(tool.required_inputs)
        reference = f"{reference}\nRequired inputs for this tool: {required}".strip()
    return reference
