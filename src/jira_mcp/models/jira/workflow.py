"""
Jira workflow models.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID
from .common import JiraStatus

logger = logging.getLogger("jira-mcp.models.workflow")


class JiraTransition(ApiModel):
    """
    Model representing a Jira issue transition.

    Transitions come either from ``GET /issue/{key}/transitions`` or from an
    issue fetched with ``expand=transitions``; both use the same shape.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = EMPTY_STRING
    to_status: JiraStatus | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraTransition":
        """
        Create a JiraTransition from a Jira API response.

        Args:
            data: The transition data from the Jira API

        Returns:
            A JiraTransition instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        to_status = None
        if to_data := data.get("to"):
            to_status = JiraStatus.from_api_response(to_data)

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            name=str(data.get("name", EMPTY_STRING)),
            to_status=to_status,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.to_status:
            result["to_status"] = self.to_status.name
        return result
