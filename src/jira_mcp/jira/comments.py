"""Module for Jira comment operations."""

import logging

from requests.exceptions import HTTPError

from ..models.jira import JiraComment
from .client import JiraClient
from .constants import COMMENTS_MAX_RESULTS

logger = logging.getLogger("jira-mcp.jira.comments")


class CommentsMixin(JiraClient):
    """Mixin for Jira comment operations."""

    def get_issue_comments(
        self, issue_key: str, limit: int = COMMENTS_MAX_RESULTS
    ) -> list[JiraComment]:
        """
        Get comments for a specific issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            limit: Maximum number of comments to return

        Returns:
            The comments, oldest first
        """
        try:
            comments = self.jira.issue_get_comments(issue_key)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get comments of {issue_key}")

        if not isinstance(comments, dict):
            msg = f"Unexpected return value type from `jira.issue_get_comments`: {type(comments)}"
            logger.error(msg)
            raise TypeError(msg)

        return [
            JiraComment.from_api_response(comment)
            for comment in comments.get("comments", [])[:limit]
        ]

    def add_comment(self, issue_key: str, comment: str) -> JiraComment:
        """
        Add a comment to an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            comment: Comment text to add

        Returns:
            The created comment
        """
        try:
            result = self.jira.issue_add_comment(issue_key, comment)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"add a comment to {issue_key}")

        if not isinstance(result, dict):
            msg = f"Unexpected return value type from `jira.issue_add_comment`: {type(result)}"
            logger.error(msg)
            raise TypeError(msg)

        return JiraComment.from_api_response(result)
