class MCPJiraError(Exception):
    """Base exception for Jira MCP errors."""


class MCPJiraAuthenticationError(MCPJiraError):
    """Raised when Jira API authentication fails (401/403)."""


class MCPJiraNotFoundError(MCPJiraError):
    """Raised when a Jira resource cannot be found (404)."""


class MCPJiraUpstreamError(MCPJiraError):
    """Raised when the Jira API fails for any other reason."""


class DevelopmentInfoCancelledError(MCPJiraError):
    """Raised when a development information lookup is cancelled mid-flight."""
