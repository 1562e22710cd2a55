"""
Pydantic models for Jira API responses.

This package provides type-safe models for working with Jira API data,
including conversion methods from API responses to structured models and
simplified dictionaries for tool output.
"""

from .base import ApiModel, TimestampMixin
from .constants import (
    EMPTY_STRING,
    JIRA_DEFAULT_ID,
    JIRA_DEFAULT_KEY,
    NONE_VALUE,
    UNASSIGNED,
    UNKNOWN,
)
from .jira import (
    DevelopmentInformation,
    JiraAttachment,
    JiraBoard,
    JiraComment,
    JiraIssue,
    JiraIssueType,
    JiraPriority,
    JiraProject,
    JiraResolution,
    JiraSprint,
    JiraStatus,
    JiraStatusCategory,
    JiraTransition,
    JiraUser,
    JiraVersion,
    JiraWorklog,
)

__all__ = [
    # Base models
    "ApiModel",
    "TimestampMixin",
    # Constants
    "EMPTY_STRING",
    "JIRA_DEFAULT_ID",
    "JIRA_DEFAULT_KEY",
    "NONE_VALUE",
    "UNASSIGNED",
    "UNKNOWN",
    # Jira models
    "JiraUser",
    "JiraStatus",
    "JiraStatusCategory",
    "JiraIssueType",
    "JiraPriority",
    "JiraComment",
    "JiraIssue",
    "JiraProject",
    "JiraResolution",
    "JiraTransition",
    "JiraVersion",
    "JiraWorklog",
    "JiraAttachment",
    "JiraBoard",
    "JiraSprint",
    "DevelopmentInformation",
]
