"""
Jira issue link models.

Each entry of an issue's ``issuelinks`` field holds the link type and
exactly one of ``inwardIssue`` / ``outwardIssue``, the issue on the other
end of the relationship.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, JIRA_DEFAULT_ID, UNKNOWN

logger = logging.getLogger("jira-mcp.models.link")


class JiraIssueLinkType(ApiModel):
    """
    Model representing a Jira issue link type.
    """

    id: str = JIRA_DEFAULT_ID
    name: str = UNKNOWN
    inward: str = EMPTY_STRING
    outward: str = EMPTY_STRING

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraIssueLinkType":
        if not data or not isinstance(data, dict):
            return cls()

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            name=str(data.get("name", UNKNOWN)),
            inward=str(data.get("inward", EMPTY_STRING)),
            outward=str(data.get("outward", EMPTY_STRING)),
        )


class JiraLinkedIssue(ApiModel):
    """A lightweight view of an issue referenced from another issue."""

    key: str = EMPTY_STRING
    summary: str = EMPTY_STRING
    status: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraLinkedIssue":
        if not data or not isinstance(data, dict):
            return cls()

        fields = data.get("fields") or {}
        status = fields.get("status") or {}
        return cls(
            key=str(data.get("key", EMPTY_STRING)),
            summary=str(fields.get("summary") or EMPTY_STRING),
            status=str(status.get("name") or UNKNOWN)
            if isinstance(status, dict)
            else UNKNOWN,
        )


class JiraIssueLink(ApiModel):
    """
    Model representing one link attached to an issue.
    """

    id: str = JIRA_DEFAULT_ID
    type: JiraIssueLinkType = JiraIssueLinkType()
    inward_issue: JiraLinkedIssue | None = None
    outward_issue: JiraLinkedIssue | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraIssueLink":
        if not data or not isinstance(data, dict):
            return cls()

        inward = data.get("inwardIssue")
        outward = data.get("outwardIssue")
        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            type=JiraIssueLinkType.from_api_response(data.get("type") or {}),
            inward_issue=JiraLinkedIssue.from_api_response(inward) if inward else None,
            outward_issue=JiraLinkedIssue.from_api_response(outward)
            if outward
            else None,
        )

    @property
    def related(self) -> tuple[str, JiraLinkedIssue] | None:
        """
        The relationship text and the issue on the other end.

        The inward side wins when a payload carries both; None when the
        link references no issue at all.
        """
        if self.inward_issue is not None:
            return self.type.inward, self.inward_issue
        if self.outward_issue is not None:
            return self.type.outward, self.outward_issue
        return None
