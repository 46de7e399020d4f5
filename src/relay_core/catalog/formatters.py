"""CLI formatters for the tool catalog."""

from .types import Tool


def format_tool_list(tools: list[Tool]) -> str:
    """Format tool list for CLI display.

    Args:
        tools: List of tools to format

    Returns:
        Formatted string for CLI output
    """
    if not tools:
        return "No tools found."

    lines = [f"Found {len(tools)} tool(s):\n"]

    for tool in tools:
        category_label = f"[{tool.category}]"
        lines.append(f"  {tool.name:45} {category_label:14} {tool.description}")

    return "\n".join(lines)


def format_tool_detail(tool: Tool) -> str:
    """Format tool detail for CLI display.

    Args:
        tool: Tool to format

    Returns:
        Formatted string for CLI output
    """
    lines = [f"Tool: {tool.name}", "=" * 60]

    lines.append(f"Description:  {tool.description}")
    lines.append(f"Category:     {tool.category}")
    lines.append(f"Remote name:  {tool.remote_tool_name()}")
    lines.append(f"Capabilities: {', '.join(sorted(tool.capabilities)) or '-'}")
    lines.append(f"Required:     {', '.join(tool.required_inputs) or '-'}")

    return "\n".join(lines)
