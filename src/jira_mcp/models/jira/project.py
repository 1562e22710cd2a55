"""
Jira project models.

Projects, their versions, and the per-issue-type status listing returned
by ``GET /rest/api/2/project/{key}/statuses``.
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN
from .common import JiraStatus

logger = logging.getLogger("jira-mcp.models.project")


class JiraProject(ApiModel):
    """
    Model representing a Jira project as embedded in an issue.
    """

    id: str = JIRA_DEFAULT_ID
    key: str = EMPTY_STRING
    name: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraProject":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            key=str(data.get("key", EMPTY_STRING)),
            name=str(data.get("name", UNKNOWN)),
        )

    def format_label(self) -> str:
        """Render ``Name (KEY)``."""
        if self.key:
            return f"{self.name} ({self.key})"
        return self.name


class JiraVersion(ApiModel):
    """
    Model representing a project version (release).
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    description: str | None = None
    project_id: str | None = None
    released: bool = False
    archived: bool = False
    release_date: str | None = None
    start_date: str | None = None
    url: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraVersion":
        """
        Create a JiraVersion from a Jira API response.

        Args:
            data: The version data from the Jira API

        Returns:
            A JiraVersion instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        project_id = data.get("projectId")
        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            name=str(data.get("name", UNKNOWN)),
            description=data.get("description") or None,
            project_id=str(project_id) if project_id else None,
            released=bool(data.get("released", False)),
            archived=bool(data.get("archived", False)),
            release_date=data.get("releaseDate") or None,
            start_date=data.get("startDate") or None,
            url=data.get("self"),
        )

    @property
    def status(self) -> str:
        """Release state; an archived version reports Archived even if released."""
        if self.archived:
            return "Archived"
        if self.released:
            return "Released"
        return "In Development"

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "status": self.status,
        }
        if self.description:
            result["description"] = self.description
        if self.release_date:
            result["release_date"] = self.release_date
        return result


class JiraIssueTypeStatuses(ApiModel):
    """The statuses available to one issue type of a project."""

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    statuses: list[JiraStatus] = Field(default_factory=list)

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraIssueTypeStatuses":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            name=str(data.get("name", UNKNOWN)),
            statuses=[
                JiraStatus.from_api_response(status)
                for status in data.get("statuses") or []
                if isinstance(status, dict)
            ],
        )
