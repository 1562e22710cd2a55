"""Module for Jira worklog operations."""

import logging
from typing import Any

from requests.exceptions import HTTPError

from ..models.jira import JiraWorklog
from ..utils.date import current_jira_timestamp
from .client import JiraClient
from .utils import parse_time_spent

logger = logging.getLogger("jira-mcp.jira.worklog")


class WorklogMixin(JiraClient):
    """Mixin for Jira worklog operations."""

    def add_worklog(
        self,
        issue_key: str,
        time_spent: str,
        comment: str | None = None,
        started: str | None = None,
    ) -> JiraWorklog:
        """
        Add a worklog entry to a Jira issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            time_spent: Time spent in Jira duration format (e.g., '1h 30m')
                or plain seconds
            comment: Optional comment for the worklog
            started: Optional start time in ISO 8601 format (e.g.
                '2023-05-01T10:00:00.000+0000'); now when omitted

        Returns:
            The created worklog

        Raises:
            ValueError: If ``time_spent`` cannot be parsed
        """
        time_spent_seconds = parse_time_spent(time_spent)

        worklog_data: dict[str, Any] = {
            "timeSpentSeconds": time_spent_seconds,
            "started": started or current_jira_timestamp(),
        }
        if comment:
            worklog_data["comment"] = comment

        url = f"{self.jira.resource_url('issue')}/{issue_key}/worklog"
        try:
            result = self.jira.post(
                url, data=worklog_data, params={"adjustEstimate": "auto"}
            )
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"add a worklog to {issue_key}")

        if not isinstance(result, dict):
            msg = f"Unexpected return value type from worklog creation: {type(result)}"
            logger.error(msg)
            raise TypeError(msg)

        logger.info(f"Logged {time_spent_seconds}s on {issue_key}")
        return JiraWorklog.from_api_response(result)
