"""
Jira worklog models.

This module provides Pydantic models for Jira worklogs (time tracking entries).
"""

import logging
from typing import Any

from ..base import ApiModel, TimestampMixin
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID
from .adf import adf_to_text
from .common import JiraUser

logger = logging.getLogger("jira-mcp.models.worklog")


class JiraWorklog(ApiModel, TimestampMixin):
    """
    Model representing a Jira worklog entry.

    This model contains information about time spent on an issue,
    including the author, time spent, and related metadata.
    """

    id: str = JIRA_DEFAULT_ID
    author: JiraUser | None = None
    comment: str | None = None
    started: str = EMPTY_STRING
    time_spent: str = EMPTY_STRING
    time_spent_seconds: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraWorklog":
        """
        Create a JiraWorklog from a Jira API response.

        Args:
            data: The worklog data from the Jira API

        Returns:
            A JiraWorklog instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary worklog data, returning default")
            return cls()

        author = None
        if author_data := data.get("author"):
            author = JiraUser.from_api_response(author_data)

        time_spent_seconds = data.get("timeSpentSeconds", 0)
        try:
            time_spent_seconds = (
                int(time_spent_seconds) if time_spent_seconds is not None else 0
            )
        except (ValueError, TypeError):
            time_spent_seconds = 0

        comment = data.get("comment")
        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            author=author,
            comment=adf_to_text(comment) if comment else None,
            started=str(data.get("started", EMPTY_STRING)),
            time_spent=str(data.get("timeSpent", EMPTY_STRING)),
            time_spent_seconds=time_spent_seconds,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "time_spent": self.time_spent,
            "time_spent_seconds": self.time_spent_seconds,
        }
        if self.author:
            result["author"] = self.author.display_name
        if self.comment:
            result["comment"] = self.comment
        if self.started:
            result["started"] = self.started
        return result
