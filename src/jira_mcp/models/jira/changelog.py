"""
Jira changelog models.

An issue fetched with ``expand=changelog`` carries ``changelog.histories``:
one entry per edit, each with the author, a timestamp and the list of
fields that changed.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import Field

from ...utils.date import format_display_datetime, parse_date
from ..base import ApiModel
from ..constants import EMPTY_HISTORY_VALUE, EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN
from .common import JiraUser

logger = logging.getLogger("jira-mcp.models.changelog")


class JiraChangeItem(ApiModel):
    """
    Model representing a single change item within a changelog entry.

    Each change item represents a field that was modified, including
    its previous and new values.
    """

    field: str = EMPTY_STRING
    fieldtype: str = EMPTY_STRING
    from_string: str | None = None
    to_string: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraChangeItem":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            field=str(data.get("field", EMPTY_STRING)),
            fieldtype=str(data.get("fieldtype", EMPTY_STRING)),
            from_string=data.get("fromString"),
            to_string=data.get("toString"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Render the change with blank values shown as ``(empty)``."""
        return {
            "field": self.field,
            "from_string": self.from_string or EMPTY_HISTORY_VALUE,
            "to_string": self.to_string or EMPTY_HISTORY_VALUE,
        }


class JiraChangelog(ApiModel):
    """
    Model representing one Jira issue changelog entry.
    """

    id: str = JIRA_DEFAULT_ID
    author: JiraUser | None = None
    created: str = EMPTY_STRING
    items: list[JiraChangeItem] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraChangelog":
        """
        Create a JiraChangelog from one entry of ``changelog.histories``.

        Args:
            data: The changelog entry from the Jira API

        Returns:
            A JiraChangelog instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        author = None
        if author_data := data.get("author"):
            author = JiraUser.from_api_response(author_data)

        items = [
            JiraChangeItem.from_api_response(item)
            for item in data.get("items") or []
            if isinstance(item, dict)
        ]

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            author=author,
            created=str(data.get("created") or EMPTY_STRING),
            items=items,
        )

    @property
    def created_at(self) -> datetime | None:
        """The entry timestamp, or None when it cannot be parsed."""
        try:
            return parse_date(self.created)
        except (ValueError, OverflowError):
            logger.debug(f"Unparseable changelog timestamp: {self.created}")
            return None

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "date": format_display_datetime(self.created),
            "author": self.author.display_name if self.author else UNKNOWN,
            "changes": [item.to_simplified_dict() for item in self.items],
        }


def parse_histories(issue_data: dict[str, Any]) -> list[JiraChangelog]:
    """Extract the changelog entries from an issue payload."""
    changelog = issue_data.get("changelog") if isinstance(issue_data, dict) else None
    if not isinstance(changelog, dict):
        return []
    return [
        JiraChangelog.from_api_response(entry)
        for entry in changelog.get("histories") or []
        if isinstance(entry, dict)
    ]
