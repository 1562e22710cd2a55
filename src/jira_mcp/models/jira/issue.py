"""
Jira issue models.

This module provides the Pydantic model for a Jira issue, parsed from the
``GET /rest/api/2/issue/{key}`` or search payloads. It carries everything
the text formatter prints plus the changelog-derived values used by the
sprint report.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import Field

from ..base import ApiModel, TimestampMixin
from ..constants import (
    DONE_STATUS_NAMES,
    EMPTY_STRING,
    JIRA_DEFAULT_ID,
    JIRA_DEFAULT_KEY,
    STORY_POINT_FIELD,
)
from .adf import adf_to_text
from .changelog import JiraChangelog, parse_histories
from .common import (
    JiraAttachment,
    JiraComponent,
    JiraIssueType,
    JiraPriority,
    JiraResolution,
    JiraStatus,
    JiraUser,
)
from .link import JiraIssueLink, JiraLinkedIssue
from .project import JiraProject
from .workflow import JiraTransition

logger = logging.getLogger("jira-mcp.models.issue")


def _total(container: Any) -> int:
    """Read ``total`` from a comment/worklog page, tolerating junk."""
    if not isinstance(container, dict):
        return 0
    try:
        return int(container.get("total") or 0)
    except (ValueError, TypeError):
        return 0


class JiraIssue(ApiModel, TimestampMixin):
    """
    Model representing a Jira issue.

    ``description`` is the plain-text rendering of the field, whether Jira
    returned wiki text or an ADF document. Optional sub-objects stay None
    when the payload lacks them so the formatter can skip those lines.
    """

    id: str = JIRA_DEFAULT_ID
    key: str = JIRA_DEFAULT_KEY
    url: str | None = None
    summary: str = EMPTY_STRING
    description: str | None = None
    issue_type: JiraIssueType | None = None
    status: JiraStatus | None = None
    priority: JiraPriority | None = None
    resolution: JiraResolution | None = None
    resolution_date: str | None = None
    reporter: JiraUser | None = None
    assignee: JiraUser | None = None
    creator: JiraUser | None = None
    created: str = EMPTY_STRING
    updated: str = EMPTY_STRING
    project: JiraProject | None = None
    parent: JiraLinkedIssue | None = None
    labels: list[str] = Field(default_factory=list)
    components: list[JiraComponent] = Field(default_factory=list)
    fix_versions: list[JiraComponent] = Field(default_factory=list)
    affected_versions: list[JiraComponent] = Field(default_factory=list)
    subtasks: list[JiraLinkedIssue] = Field(default_factory=list)
    issue_links: list[JiraIssueLink] = Field(default_factory=list)
    attachments: list[JiraAttachment] = Field(default_factory=list)
    watch_count: int | None = None
    votes: int | None = None
    comment_total: int = 0
    worklog_total: int = 0
    transitions: list[JiraTransition] = Field(default_factory=list)
    changelogs: list[JiraChangelog] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraIssue":
        """
        Create a JiraIssue from a Jira API response.

        Args:
            data: The issue data from the Jira API
            **kwargs: Unused; accepted for interface compatibility

        Returns:
            A JiraIssue instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary issue data, returning default")
            return cls()

        fields = data.get("fields") or {}
        if not isinstance(fields, dict):
            fields = {}

        def _user(name: str) -> JiraUser | None:
            value = fields.get(name)
            return JiraUser.from_api_response(value) if value else None

        def _named_items(name: str) -> list[JiraComponent]:
            return [
                JiraComponent.from_api_response(item)
                for item in fields.get(name) or []
                if isinstance(item, dict)
            ]

        description = fields.get("description")
        issue_type = fields.get("issuetype")
        status = fields.get("status")
        priority = fields.get("priority")
        resolution = fields.get("resolution")
        project = fields.get("project")
        parent = fields.get("parent")
        watches = fields.get("watches")
        votes = fields.get("votes")

        return cls(
            id=str(data.get("id", JIRA_DEFAULT_ID)),
            key=str(data.get("key", JIRA_DEFAULT_KEY)),
            url=data.get("self"),
            summary=str(fields.get("summary") or EMPTY_STRING),
            description=adf_to_text(description) if description else None,
            issue_type=JiraIssueType.from_api_response(issue_type)
            if issue_type
            else None,
            status=JiraStatus.from_api_response(status) if status else None,
            priority=JiraPriority.from_api_response(priority) if priority else None,
            resolution=JiraResolution.from_api_response(resolution)
            if resolution
            else None,
            resolution_date=fields.get("resolutiondate") or None,
            reporter=_user("reporter"),
            assignee=_user("assignee"),
            creator=_user("creator"),
            created=str(fields.get("created") or EMPTY_STRING),
            updated=str(fields.get("updated") or EMPTY_STRING),
            project=JiraProject.from_api_response(project) if project else None,
            parent=JiraLinkedIssue.from_api_response(parent) if parent else None,
            labels=[str(label) for label in fields.get("labels") or []],
            components=_named_items("components"),
            fix_versions=_named_items("fixVersions"),
            affected_versions=_named_items("versions"),
            subtasks=[
                JiraLinkedIssue.from_api_response(subtask)
                for subtask in fields.get("subtasks") or []
                if isinstance(subtask, dict)
            ],
            issue_links=[
                JiraIssueLink.from_api_response(link)
                for link in fields.get("issuelinks") or []
                if isinstance(link, dict)
            ],
            attachments=[
                JiraAttachment.from_api_response(attachment)
                for attachment in fields.get("attachment") or []
                if isinstance(attachment, dict)
            ],
            watch_count=watches.get("watchCount")
            if isinstance(watches, dict)
            else None,
            votes=votes.get("votes") if isinstance(votes, dict) else None,
            comment_total=_total(fields.get("comment")),
            worklog_total=_total(fields.get("worklog")),
            transitions=[
                JiraTransition.from_api_response(transition)
                for transition in data.get("transitions") or []
                if isinstance(transition, dict)
            ],
            changelogs=parse_histories(data),
        )

    @property
    def story_point_estimate(self) -> str | None:
        """The most recent non-empty story point estimate in the changelog."""
        estimate = None
        for history in self.changelogs:
            for item in history.items:
                if item.field == STORY_POINT_FIELD and item.to_string:
                    estimate = item.to_string
        return estimate

    @property
    def story_points(self) -> float:
        """The story point estimate as a number; 0 when absent or invalid."""
        estimate = self.story_point_estimate
        if estimate is None:
            return 0.0
        try:
            return float(estimate)
        except ValueError:
            logger.debug(f"Ignoring non-numeric story points '{estimate}' on {self.key}")
            return 0.0

    @property
    def done_at(self) -> datetime | None:
        """When the issue first moved to a finished status, if ever."""
        for history in self.changelogs:
            for item in history.items:
                if item.field == "status" and item.to_string in DONE_STATUS_NAMES:
                    created_at = history.created_at
                    if created_at is not None:
                        return created_at
        return None

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "key": self.key,
            "summary": self.summary,
        }
        if self.status:
            result["status"] = self.status.name
        if self.issue_type:
            result["issue_type"] = self.issue_type.name
        if self.assignee:
            result["assignee"] = self.assignee.display_name
        if self.priority:
            result["priority"] = self.priority.name
        if self.created:
            result["created"] = self.format_timestamp(self.created)
        if self.updated:
            result["updated"] = self.format_timestamp(self.updated)
        return result
