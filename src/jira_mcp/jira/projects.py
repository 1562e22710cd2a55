"""Module for Jira project operations."""

import logging

from requests.exceptions import HTTPError

from ..models.jira import JiraIssueType, JiraIssueTypeStatuses, JiraVersion
from .client import JiraClient

logger = logging.getLogger("jira-mcp.jira.projects")


class ProjectsMixin(JiraClient):
    """Mixin for Jira project operations."""

    def get_project_issue_types(self, project_key: str) -> list[JiraIssueType]:
        """
        Get the issue types available in a project.

        Args:
            project_key: The project key

        Returns:
            The project's issue types
        """
        try:
            project = self.jira.project(project_key)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get project {project_key}")

        if not isinstance(project, dict):
            msg = f"Unexpected return value type from `jira.project`: {type(project)}"
            logger.error(msg)
            raise TypeError(msg)

        return [
            JiraIssueType.from_api_response(issue_type)
            for issue_type in project.get("issueTypes") or []
        ]

    def get_project_statuses(self, project_key: str) -> list[JiraIssueTypeStatuses]:
        """
        Get the statuses of a project, grouped by issue type.

        Args:
            project_key: The project key

        Returns:
            One entry per issue type with its statuses
        """
        url = f"{self.jira.resource_url('project')}/{project_key}/statuses"
        try:
            response = self.jira.get(url)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get statuses of project {project_key}")

        if not isinstance(response, list):
            msg = f"Unexpected return value type for project statuses: {type(response)}"
            logger.error(msg)
            raise TypeError(msg)

        return [JiraIssueTypeStatuses.from_api_response(item) for item in response]

    def get_project_versions(self, project_key: str) -> list[JiraVersion]:
        """
        Get all versions of a project.

        Args:
            project_key: The project key

        Returns:
            The project's versions
        """
        try:
            versions = self.jira.get_project_versions(project_key)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get versions of project {project_key}")

        return [
            JiraVersion.from_api_response(version)
            for version in versions or []
            if isinstance(version, dict)
        ]

    def get_version(self, version_id: str) -> JiraVersion:
        """
        Get a single version by id.

        Args:
            version_id: The version id

        Returns:
            The version
        """
        url = f"{self.jira.resource_url('version')}/{version_id}"
        try:
            version = self.jira.get(url)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get version {version_id}")

        if not isinstance(version, dict):
            msg = f"Unexpected return value type for version {version_id}: {type(version)}"
            logger.error(msg)
            raise TypeError(msg)

        return JiraVersion.from_api_response(version)
