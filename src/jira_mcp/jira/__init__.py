"""Jira API module for jira_mcp.

This module provides the Jira API client used by the MCP tools.
"""

# flake8: noqa

from .client import JiraClient
from .attachments import AttachmentsMixin
from .boards import BoardsMixin
from .comments import CommentsMixin
from .config import JiraConfig
from .development import DevelopmentMixin
from .formatting import FormattingMixin
from .issues import IssuesMixin
from .links import LinksMixin
from .projects import ProjectsMixin
from .search import SearchMixin
from .sprints import SprintsMixin
from .transitions import TransitionsMixin
from .worklog import WorklogMixin


class JiraFetcher(
    ProjectsMixin,
    FormattingMixin,
    TransitionsMixin,
    WorklogMixin,
    CommentsMixin,
    SearchMixin,
    IssuesMixin,
    LinksMixin,
    BoardsMixin,
    SprintsMixin,
    AttachmentsMixin,
    DevelopmentMixin,
):
    """
    The main Jira client class providing access to all Jira operations.

    This class inherits from multiple mixins that provide specific functionality:
    - ProjectsMixin: Issue types, statuses and versions of a project
    - FormattingMixin: Plain-text rendering of tool results
    - TransitionsMixin: Issue transition operations
    - WorklogMixin: Worklog operations
    - CommentsMixin: Comment operations
    - SearchMixin: JQL search
    - IssuesMixin: Issue create/read/update and history
    - LinksMixin: Issue link operations
    - BoardsMixin: Board lookup
    - SprintsMixin: Sprint operations and sprint reports
    - AttachmentsMixin: Attachment download operations
    - DevelopmentMixin: Branches, pull requests, commits and builds
    """

    pass


__all__ = ["JiraFetcher", "JiraConfig", "JiraClient"]
