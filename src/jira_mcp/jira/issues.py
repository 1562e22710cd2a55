"""Module for Jira issue operations."""

import logging
from typing import Any

from requests.exceptions import HTTPError

from ..models.jira import JiraChangelog, JiraIssue
from .client import JiraClient
from .constants import DEFAULT_CHILD_ISSUE_TYPE, DEFAULT_ISSUE_EXPAND

logger = logging.getLogger("jira-mcp.jira.issues")


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def get_issue(
        self,
        issue_key: str,
        fields: str | list[str] | None = None,
        expand: str | None = DEFAULT_ISSUE_EXPAND,
    ) -> JiraIssue:
        """
        Get a Jira issue by key.

        Args:
            issue_key: The issue key (e.g., PROJECT-123)
            fields: Fields to return (comma-separated string or list); all
                fields when omitted
            expand: Comma-separated expansions

        Returns:
            JiraIssue model with issue data

        Raises:
            MCPJiraAuthenticationError: If authentication fails with the Jira API (401/403)
            HTTPError: If Jira rejects the request for another reason
        """
        fields_param = ",".join(fields) if isinstance(fields, list) else fields
        try:
            issue = self.jira.get_issue(
                issue_key, fields=fields_param or None, expand=expand or None
            )
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get issue {issue_key}")

        if not isinstance(issue, dict):
            msg = f"Unexpected return value type from `jira.get_issue`: {type(issue)}"
            logger.error(msg)
            raise TypeError(msg)

        return JiraIssue.from_api_response(issue)

    def create_issue(
        self,
        project_key: str,
        summary: str,
        issue_type: str,
        description: str = "",
        parent_key: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a new Jira issue.

        Args:
            project_key: The key of the project
            summary: The issue summary
            issue_type: The issue type name (Task, Bug, Story, Subtask, ...)
            description: The issue description
            parent_key: Parent issue key, for sub-tasks and child issues

        Returns:
            The created issue reference: ``id``, ``key`` and ``self``
        """
        fields: dict[str, Any] = {
            "project": {"key": project_key},
            "summary": summary,
            "issuetype": {"name": issue_type},
            "description": description,
        }
        if parent_key:
            fields["parent"] = {"key": parent_key}

        try:
            result = self.jira.create_issue(fields=fields)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"create issue in {project_key}")

        if not isinstance(result, dict):
            msg = f"Unexpected return value type from `jira.create_issue`: {type(result)}"
            logger.error(msg)
            raise TypeError(msg)

        logger.info(f"Created issue {result.get('key')} in project {project_key}")
        return result

    def create_child_issue(
        self,
        parent_issue_key: str,
        summary: str,
        description: str = "",
        issue_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Create an issue under a parent, in the parent's project.

        Args:
            parent_issue_key: The parent issue key
            summary: The child issue summary
            description: The child issue description
            issue_type: Issue type name; ``Subtask`` when omitted

        Returns:
            The created issue reference: ``id``, ``key`` and ``self``
        """
        parent = self.get_issue(parent_issue_key, fields="project", expand=None)
        if parent.project is None or not parent.project.key:
            raise ValueError(f"Could not determine the project of issue {parent_issue_key}")

        return self.create_issue(
            project_key=parent.project.key,
            summary=summary,
            issue_type=issue_type or DEFAULT_CHILD_ISSUE_TYPE,
            description=description,
            parent_key=parent_issue_key,
        )

    def update_issue(
        self,
        issue_key: str,
        summary: str | None = None,
        description: str | None = None,
    ) -> None:
        """
        Update the summary and/or description of an issue.

        Raises:
            ValueError: If neither a summary nor a description is given
        """
        fields: dict[str, Any] = {}
        if summary:
            fields["summary"] = summary
        if description:
            fields["description"] = description
        if not fields:
            raise ValueError("At least one of summary or description must be provided")

        try:
            self.jira.update_issue_field(issue_key, fields)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"update issue {issue_key}")

        logger.info(f"Updated fields {sorted(fields)} of issue {issue_key}")

    def get_issue_history(self, issue_key: str) -> list[JiraChangelog]:
        """
        Get the changelog of an issue, oldest entry first.

        Args:
            issue_key: The issue key

        Returns:
            The changelog entries; empty when the issue has no history
        """
        issue = self.get_issue(issue_key, fields="summary", expand="changelog")
        return issue.changelogs
