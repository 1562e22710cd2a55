"""
Jira data models.

This package provides Pydantic models for Jira API data structures,
organized by entity type.
"""

from .adf import adf_to_text
from .agile import JiraBoard, JiraSprint, JiraSprintReport
from .changelog import JiraChangeItem, JiraChangelog
from .comment import JiraComment
from .common import (
    JiraAttachment,
    JiraComponent,
    JiraIssueType,
    JiraPriority,
    JiraResolution,
    JiraStatus,
    JiraStatusCategory,
    JiraUser,
)
from .development import (
    DevBranch,
    DevBuild,
    DevelopmentInformation,
    DevPullRequest,
    DevRepository,
    DevStatusDetail,
    DevStatusResponse,
)
from .issue import JiraIssue
from .link import JiraIssueLink, JiraIssueLinkType, JiraLinkedIssue
from .project import JiraIssueTypeStatuses, JiraProject, JiraVersion
from .workflow import JiraTransition
from .worklog import JiraWorklog

__all__ = [
    "adf_to_text",
    # Common models
    "JiraUser",
    "JiraStatusCategory",
    "JiraStatus",
    "JiraIssueType",
    "JiraPriority",
    "JiraResolution",
    "JiraComponent",
    "JiraAttachment",
    # Entity-specific models
    "JiraIssue",
    "JiraComment",
    "JiraWorklog",
    "JiraChangeItem",
    "JiraChangelog",
    "JiraIssueLink",
    "JiraIssueLinkType",
    "JiraLinkedIssue",
    "JiraProject",
    "JiraVersion",
    "JiraIssueTypeStatuses",
    "JiraTransition",
    "JiraBoard",
    "JiraSprint",
    "JiraSprintReport",
    # Development information
    "DevBranch",
    "DevBuild",
    "DevPullRequest",
    "DevRepository",
    "DevStatusDetail",
    "DevStatusResponse",
    "DevelopmentInformation",
]
