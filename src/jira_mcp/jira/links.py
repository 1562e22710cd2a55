"""Module for Jira issue link operations."""

import logging
from typing import Any

from requests.exceptions import HTTPError

from ..models.jira import JiraIssueLink
from .client import JiraClient

logger = logging.getLogger("jira-mcp.jira.links")


class LinksMixin(JiraClient):
    """Mixin for Jira issue link operations."""

    def get_issue_links(self, issue_key: str) -> list[JiraIssueLink]:
        """
        Get the links of an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')

        Returns:
            The issue's links, in the order Jira returns them
        """
        try:
            issue = self.jira.get_issue(issue_key, fields="issuelinks")
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get links of {issue_key}")

        fields = issue.get("fields") if isinstance(issue, dict) else None
        links = (fields or {}).get("issuelinks") or []
        return [JiraIssueLink.from_api_response(link) for link in links]

    def link_issues(
        self,
        inward_issue: str,
        outward_issue: str,
        link_type: str,
        comment: str | None = None,
    ) -> None:
        """
        Create a link between two issues.

        Args:
            inward_issue: The key of the inward issue
            outward_issue: The key of the outward issue
            link_type: The link type name (e.g. 'Blocks', 'Duplicate')
            comment: Optional comment added along with the link
        """
        data: dict[str, Any] = {
            "type": {"name": link_type},
            "inwardIssue": {"key": inward_issue},
            "outwardIssue": {"key": outward_issue},
        }
        if comment:
            data["comment"] = {"body": comment}

        try:
            self.jira.create_issue_link(data)
        except HTTPError as http_err:
            self._raise_http_error(
                http_err, f"link {inward_issue} and {outward_issue}"
            )

        logger.info(f"Linked {inward_issue} -> {outward_issue} ({link_type})")
