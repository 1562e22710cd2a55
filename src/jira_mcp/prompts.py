"""MCP prompts that chain the Jira tools into development overviews."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from jira_mcp.utils.decorators import require_non_empty

logger = logging.getLogger("jira-mcp.prompts")


def issue_development_tree_prompt(issue_key: str) -> str:
    require_non_empty(issue_key=issue_key)
    return f"""Please analyze all development work for issue {issue_key} and its child issues:

1. First, use jira_get_issue with issue_key={issue_key} and expand=subtasks to retrieve the parent issue and all its subtasks
2. Then, use jira_get_development_information to get branches, pull requests, and commits for the parent issue {issue_key}
3. For each subtask found, call jira_get_development_information to get their development work
4. Format the results as a hierarchical tree showing:
   - Parent issue: {issue_key}
     - Development work (branches, PRs, commits)
   - Each subtask:
     - Development work (branches, PRs, commits)

Please provide a clear summary of all development activity across the entire issue tree."""


def release_development_overview_prompt(version: str, project_key: str) -> str:
    require_non_empty(version=version, project_key=project_key)
    return f"""Please provide a comprehensive development overview for release "{version}" in project {project_key}:

1. First, use jira_search_issue with JQL: fixVersion = "{version}" AND project = {project_key}
2. For each issue found in the search results, call jira_get_development_information to retrieve:
   - Branches associated with the issue
   - Pull requests (status, reviewers, etc.)
   - Commits and code changes
3. Organize the results by issue and provide a summary that includes:
   - Total number of issues in the release
   - List each issue with its key, summary, and status
   - Development work for each issue (branches, PRs, commits)
   - Overall statistics (total PRs, merged PRs, open branches, etc.)

Please format the output clearly so it's easy to review the entire release's development status."""


def register_prompts(server: FastMCP) -> None:
    """Register the development overview prompts on ``server``."""

    @server.prompt(name="issue_development_tree", tags={"jira"})
    async def issue_development_tree(
        issue_key: Annotated[
            str, Field(description="The Jira issue key to analyze (e.g., PROJ-123)")
        ],
    ) -> str:
        """List all development work (branches, PRs, commits) for a Jira issue and all its child issues/subtasks."""
        return issue_development_tree_prompt(issue_key)

    @server.prompt(name="release_development_overview", tags={"jira"})
    async def release_development_overview(
        version: Annotated[
            str,
            Field(description="The version/release name (e.g., v1.0.0, Sprint 23)"),
        ],
        project_key: Annotated[
            str, Field(description="The Jira project key (e.g., PROJ, KP)")
        ],
    ) -> str:
        """List all issues and their development work (branches, PRs, commits) for a specific release/version."""
        return release_development_overview_prompt(version, project_key)

    logger.debug("Registered development prompts")
