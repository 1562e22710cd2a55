"""
Jira comment models.
"""

import logging
from typing import Any

from ..base import ApiModel, TimestampMixin
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID
from .adf import adf_to_text
from .common import JiraUser

logger = logging.getLogger("jira-mcp.models.comment")


class JiraComment(ApiModel, TimestampMixin):
    """
    Model representing a Jira issue comment.

    Cloud returns comment bodies as ADF documents and Server/DC as wiki
    text; ``body`` always holds the plain-text rendering.
    """

    id: str = JIRA_DEFAULT_ID
    body: str = EMPTY_STRING
    created: str = EMPTY_STRING
    updated: str = EMPTY_STRING
    author: JiraUser | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraComment":
        """
        Create a JiraComment from a Jira API response.

        Args:
            data: The comment data from the Jira API

        Returns:
            A JiraComment instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary comment data, returning default")
            return cls()

        author = None
        if author_data := data.get("author"):
            author = JiraUser.from_api_response(author_data)

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            body=adf_to_text(data.get("body")),
            created=str(data.get("created", EMPTY_STRING)),
            updated=str(data.get("updated", EMPTY_STRING)),
            author=author,
        )

    @property
    def author_name(self) -> str:
        return self.author.display_name if self.author else EMPTY_STRING

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "body": self.body}
        if self.author:
            result["author"] = self.author.display_name
        if self.created:
            result["created"] = self.format_timestamp(self.created)
        if self.updated:
            result["updated"] = self.format_timestamp(self.updated)
        return result
