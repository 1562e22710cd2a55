"""Server implementations for the Jira MCP server."""

from .jira import jira_mcp
from .main import main_mcp

__all__ = ["jira_mcp", "main_mcp"]
