"""Tool allow-list helpers."""

import logging
import os

logger = logging.getLogger("jira-mcp.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Read the ENABLED_TOOLS allow-list.

    The variable holds a comma-separated list of registered tool names
    (for example ``jira_get_issue,jira_search_issue``).

    Returns:
        The list of tool names, or None when the variable is unset or
        contains no names (meaning every tool is enabled).
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw:
        logger.debug("ENABLED_TOOLS not set; all tools enabled.")
        return None

    tools = [name.strip() for name in raw.split(",") if name.strip()]
    logger.debug(f"Parsed enabled tools from environment: {tools}")
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Return True if the tool passes the allow-list."""
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
