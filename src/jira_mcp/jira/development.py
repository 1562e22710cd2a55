"""Module for Jira development information (branches, PRs, commits, builds).

Jira exposes what connected VCS and CI integrations know about an issue
through the undocumented ``/rest/dev-status`` API, which only accepts the
numeric issue id and wants one request per (integration, data type) pair.
Gathering the information therefore takes three steps:

1. resolve the issue key to its numeric id;
2. read the summary endpoint to discover which pairs exist;
3. fetch the detail endpoint for each pair and merge the results.

The steps fail differently. A failed resolve aborts the call. A missing
summary endpoint or an issue without integrations yields an empty result
that says so. A failed detail fetch only drops that pair's contribution.
"""

import logging
import threading
from typing import Any

from pydantic import ValidationError
from requests.exceptions import RequestException

from ..exceptions import (
    DevelopmentInfoCancelledError,
    MCPJiraAuthenticationError,
    MCPJiraNotFoundError,
    MCPJiraUpstreamError,
)
from ..models.constants import DEV_STATUS_DATA_TYPES
from ..models.jira import DevelopmentInformation, DevStatusDetail, DevStatusResponse
from .client import JiraClient
from .constants import (
    DEV_STATUS_DETAIL_PATH,
    DEV_STATUS_SUMMARY_PATH,
    ISSUE_LOOKUP_ENDPOINT,
)

logger = logging.getLogger("jira-mcp.jira.development")

ERROR_PREFIX = "failed to retrieve development information"


def _status_code(err: RequestException) -> int | None:
    response = getattr(err, "response", None)
    return response.status_code if response is not None else None


def parse_integration_endpoints(summary: Any) -> list[tuple[str, str]]:
    """
    Extract the (application type, data type) pairs from a summary payload.

    Every key of ``summary.<dataType>.byInstanceType`` names one connected
    integration (``GitHub``, ``bitbucket``, ...) for that data type. The
    pairs are returned sorted so that detail requests go out in a stable
    order.
    """
    if not isinstance(summary, dict):
        logger.debug(f"Ignoring malformed dev-status summary: {type(summary)}")
        return []

    categories = summary.get("summary")
    if not isinstance(categories, dict):
        return []

    pairs: set[tuple[str, str]] = set()
    for data_type in DEV_STATUS_DATA_TYPES:
        category = categories.get(data_type)
        by_instance_type = (
            category.get("byInstanceType") if isinstance(category, dict) else None
        )
        if isinstance(by_instance_type, dict):
            pairs.update((str(app_type), data_type) for app_type in by_instance_type)
    return sorted(pairs)


class DevelopmentMixin(JiraClient):
    """Mixin for Jira development information operations."""

    def get_development_information(
        self,
        issue_key: str,
        include_branches: bool = False,
        include_pull_requests: bool = False,
        include_commits: bool = False,
        include_builds: bool = False,
        cancel_event: threading.Event | None = None,
    ) -> DevelopmentInformation:
        """
        Collect the branches, pull requests, repositories and builds of an issue.

        When all four ``include_*`` flags are False every category is
        included. Commits are nested in repositories, so ``include_commits``
        controls the ``repositories`` category. Results from different
        integrations are concatenated in fetch order without deduplication.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            include_branches: Include branches
            include_pull_requests: Include pull requests
            include_commits: Include repositories and their commits
            include_builds: Include CI/CD builds
            cancel_event: When set, no further request is sent and the call
                fails instead of returning partial data

        Returns:
            The merged development information

        Raises:
            MCPJiraNotFoundError: If the issue does not exist
            MCPJiraAuthenticationError: If Jira rejects the credentials
            MCPJiraUpstreamError: If the issue lookup or the summary fails
            DevelopmentInfoCancelledError: If ``cancel_event`` is set mid-way
        """
        if not any(
            (include_branches, include_pull_requests, include_commits, include_builds)
        ):
            include_branches = include_pull_requests = True
            include_commits = include_builds = True

        issue_id = self._resolve_issue_id(issue_key, cancel_event)

        self._raise_if_cancelled(cancel_event, issue_key)
        found, summary = self._get_dev_status_summary(issue_key, issue_id)
        if not found:
            return DevelopmentInformation.endpoint_not_found(issue_key)

        endpoints = parse_integration_endpoints(summary)
        if not endpoints:
            logger.debug(f"No development integrations reported for {issue_key}")
            return DevelopmentInformation.no_integrations(issue_key)

        details: list[DevStatusDetail] = []
        dropped = 0
        for application_type, data_type in endpoints:
            self._raise_if_cancelled(cancel_event, issue_key)
            fetched = self._get_dev_status_detail(issue_id, application_type, data_type)
            if fetched is None:
                dropped += 1
                continue
            details.extend(fetched)

        if dropped:
            logger.info(
                f"Dropped {dropped} of {len(endpoints)} development detail "
                f"request(s) for {issue_key}"
            )

        branches = [branch for detail in details for branch in detail.branches]
        pull_requests = [pr for detail in details for pr in detail.pull_requests]
        repositories = [repo for detail in details for repo in detail.repositories]
        builds = [build for detail in details for build in detail.all_builds]

        return DevelopmentInformation(
            issue_key=issue_key,
            branches=branches if include_branches else [],
            pull_requests=pull_requests if include_pull_requests else [],
            repositories=repositories if include_commits else [],
            builds=builds if include_builds else [],
        )

    def _raise_if_cancelled(
        self, cancel_event: threading.Event | None, issue_key: str
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.debug(f"Development information lookup for {issue_key} cancelled")
            raise DevelopmentInfoCancelledError(
                f"{ERROR_PREFIX}: request for {issue_key} was cancelled"
            )

    def _resolve_issue_id(
        self, issue_key: str, cancel_event: threading.Event | None
    ) -> str:
        """Translate an issue key into the numeric id the dev-status API needs."""
        endpoint = ISSUE_LOOKUP_ENDPOINT.format(issue_key=issue_key)
        self._raise_if_cancelled(cancel_event, issue_key)
        try:
            issue = self.jira.get_issue(issue_key, fields="id")
        except RequestException as err:
            status = _status_code(err)
            if status == 404:
                raise MCPJiraNotFoundError(
                    f"{ERROR_PREFIX}: issue not found (endpoint: {endpoint})"
                ) from err
            if status in (401, 403):
                raise MCPJiraAuthenticationError(
                    f"{ERROR_PREFIX}: authentication failed (endpoint: {endpoint})"
                ) from err
            raise MCPJiraUpstreamError(
                f"{ERROR_PREFIX}: {err} (endpoint: {endpoint})"
            ) from err

        issue_id = issue.get("id") if isinstance(issue, dict) else None
        if not issue_id:
            raise MCPJiraUpstreamError(
                f"{ERROR_PREFIX}: issue lookup returned no id (endpoint: {endpoint})"
            )
        logger.debug(f"Resolved {issue_key} to issue id {issue_id}")
        return str(issue_id)

    def _get_dev_status_summary(
        self, issue_key: str, issue_id: str
    ) -> tuple[bool, Any]:
        """
        Fetch the dev-status summary.

        Returns:
            ``(False, None)`` when the endpoint does not exist, otherwise
            ``(True, body)``. The body may be None for an empty response.
        """
        endpoint = f"/{DEV_STATUS_SUMMARY_PATH}?issueId={issue_id}"
        try:
            body = self.jira.get(DEV_STATUS_SUMMARY_PATH, params={"issueId": issue_id})
        except RequestException as err:
            status = _status_code(err)
            if status == 404:
                logger.warning(
                    f"Dev-status API not available on this Jira instance ({endpoint})"
                )
                return False, None
            if status in (401, 403):
                raise MCPJiraAuthenticationError(
                    f"{ERROR_PREFIX}: authentication failed (endpoint: {endpoint})"
                ) from err
            raise MCPJiraUpstreamError(
                f"{ERROR_PREFIX}: development summary for {issue_key} failed: "
                f"{err} (endpoint: {endpoint})"
            ) from err
        return True, body

    def _get_dev_status_detail(
        self, issue_id: str, application_type: str, data_type: str
    ) -> list[DevStatusDetail] | None:
        """
        Fetch the details one integration reports for one data type.

        Returns None when the request fails, the body is malformed, or Jira
        reports errors for this pair.
        """
        params: dict[str, Any] = {
            "issueId": issue_id,
            "applicationType": application_type,
            "dataType": data_type,
        }
        try:
            body = self.jira.get(DEV_STATUS_DETAIL_PATH, params=params)
            response = DevStatusResponse.from_api_response(body)
        except (RequestException, ValidationError) as err:
            logger.debug(
                f"Dropping dev-status detail {application_type}/{data_type}: {err}"
            )
            return None

        if response.errors:
            logger.debug(
                f"Dropping dev-status detail {application_type}/{data_type}: "
                f"Jira reported {response.errors}"
            )
            return None
        return response.detail
