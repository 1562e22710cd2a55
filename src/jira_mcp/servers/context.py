from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jira_mcp.jira.config import JiraConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context holding the Jira configuration loaded from environment variables
    at server startup, together with the server-wide tool filters.
    The configuration carries the global/default authentication details.
    """

    full_jira_config: JiraConfig | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
