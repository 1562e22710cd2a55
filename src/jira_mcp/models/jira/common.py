"""
Common Jira entity models.

Users, statuses, issue types, priorities, resolutions, components and
attachments appear in many payloads (issues, comments, worklogs, search
results), so they live together here.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import (
    EMPTY_STRING,
    JIRA_DEFAULT_ID,
    NONE_VALUE,
    UNASSIGNED,
    UNKNOWN,
)

logger = logging.getLogger("jira-mcp.models.common")


def _string_id(data: dict[str, Any]) -> str:
    """Jira sometimes sends numeric ids; normalize them to strings."""
    value = data.get("id", JIRA_DEFAULT_ID)
    return str(value) if value is not None else JIRA_DEFAULT_ID


class JiraUser(ApiModel):
    """
    Model representing a Jira user.

    Cloud identifies users by ``accountId``; Server/Data Center by ``name``
    (and ``key``). Both are kept so callers can pick whichever is present.
    """

    account_id: str | None = None
    name: str | None = None
    display_name: str = UNASSIGNED
    email: str | None = None
    active: bool = True

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraUser":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            account_id=data.get("accountId"),
            name=data.get("name"),
            display_name=str(data.get("displayName", UNASSIGNED)),
            email=data.get("emailAddress"),
            active=bool(data.get("active", True)),
        )

    def format_with_email(self) -> str:
        """Render ``Display Name (email)``, or just the name without an email."""
        if self.email:
            return f"{self.display_name} ({self.email})"
        return self.display_name

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"display_name": self.display_name}
        if self.email:
            result["email"] = self.email
        if self.account_id:
            result["account_id"] = self.account_id
        elif self.name:
            result["name"] = self.name
        return result


class JiraStatusCategory(ApiModel):
    """
    Model representing a Jira status category (To Do, In Progress, Done).
    """

    id: int = 0
    key: str = EMPTY_STRING
    name: str = UNKNOWN

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraStatusCategory":
        if not data or not isinstance(data, dict):
            return cls()

        try:
            category_id = int(data.get("id", 0))
        except (ValueError, TypeError):
            category_id = 0

        return cls(
            id=category_id,
            key=str(data.get("key", EMPTY_STRING)),
            name=str(data.get("name", UNKNOWN)),
        )


class JiraStatus(ApiModel):
    """
    Model representing a Jira issue status.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    description: str | None = None
    category: JiraStatusCategory | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraStatus":
        """
        Create a JiraStatus from a Jira API response.

        Args:
            data: The status data from the Jira API

        Returns:
            A JiraStatus instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary status data, returning default")
            return cls()

        category = None
        if category_data := data.get("statusCategory"):
            category = JiraStatusCategory.from_api_response(category_data)

        return cls(
            id=_string_id(data),
            name=str(data.get("name", UNKNOWN)),
            description=data.get("description") or None,
            category=category,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.category:
            result["category"] = self.category.name
        return result


class JiraIssueType(ApiModel):
    """
    Model representing a Jira issue type.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    description: str | None = None
    icon_url: str | None = None
    subtask: bool = False
    scope: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraIssueType":
        """
        Create a JiraIssueType from a Jira API response.

        Team-managed projects attach a ``scope`` to their issue types; its
        ``type`` (for example ``PROJECT``) is kept.

        Args:
            data: The issue type data from the Jira API

        Returns:
            A JiraIssueType instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        scope = None
        scope_data = data.get("scope")
        if isinstance(scope_data, dict):
            scope = scope_data.get("type")

        return cls(
            id=_string_id(data),
            name=str(data.get("name", UNKNOWN)),
            description=data.get("description") or None,
            icon_url=data.get("iconUrl") or None,
            subtask=bool(data.get("subtask", False)),
            scope=scope,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"name": self.name}


class JiraPriority(ApiModel):
    """Model representing a Jira priority."""

    id: str = JIRA_DEFAULT_ID
    name: str = NONE_VALUE

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraPriority":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(id=_string_id(data), name=str(data.get("name", NONE_VALUE)))


class JiraResolution(ApiModel):
    """Model representing a Jira issue resolution."""

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraResolution":
        if not isinstance(data, dict):
            return cls()
        return cls(
            id=_string_id(data),
            name=data.get("name", UNKNOWN),
            description=data.get("description") or None,
        )


class JiraComponent(ApiModel):
    """
    Model for a named project element listed on an issue.

    Used for components as well as fix/affected versions, which share the
    ``name``/``description`` shape on issue payloads.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = EMPTY_STRING
    description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraComponent":
        if not isinstance(data, dict):
            return cls()
        return cls(
            id=_string_id(data),
            name=str(data.get("name", EMPTY_STRING)),
            description=data.get("description") or None,
        )

    def format_line(self) -> str:
        """Render ``name (description)`` for list output."""
        if self.description:
            return f"{self.name} ({self.description})"
        return self.name


class JiraAttachment(ApiModel):
    """
    Model representing a Jira issue attachment.

    This model contains information about files attached to Jira issues,
    including the filename, size, content type, and download URL.
    """

    id: str = JIRA_DEFAULT_ID
    filename: str = EMPTY_STRING
    size: int = 0
    content_type: str | None = None
    created: str = EMPTY_STRING
    author: JiraUser | None = None
    url: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraAttachment":
        """
        Create a JiraAttachment from a Jira API response.

        Args:
            data: The attachment data from the Jira API

        Returns:
            A JiraAttachment instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary attachment data, returning default")
            return cls()

        author = None
        if author_data := data.get("author"):
            author = JiraUser.from_api_response(author_data)

        size = data.get("size", 0)
        try:
            size = int(size) if size is not None else 0
        except (ValueError, TypeError):
            size = 0

        return cls(
            id=_string_id(data),
            filename=str(data.get("filename", EMPTY_STRING)),
            size=size,
            content_type=data.get("mimeType"),
            created=str(data.get("created", EMPTY_STRING)),
            author=author,
            url=data.get("content"),  # the download URL
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "filename": self.filename,
            "size": self.size,
        }
        if self.content_type:
            result["content_type"] = self.content_type
        if self.url:
            result["url"] = self.url
        return result
