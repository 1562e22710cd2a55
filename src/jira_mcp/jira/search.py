"""Module for Jira search operations."""

import logging

from requests.exceptions import HTTPError

from ..models.jira import JiraIssue
from .client import JiraClient
from .constants import DEFAULT_ISSUE_EXPAND, SEARCH_MAX_RESULTS
from .utils import apply_projects_filter

logger = logging.getLogger("jira-mcp.jira.search")


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def search_issues(
        self,
        jql: str,
        fields: str | list[str] | None = None,
        expand: str | None = DEFAULT_ISSUE_EXPAND,
        limit: int = SEARCH_MAX_RESULTS,
    ) -> list[JiraIssue]:
        """
        Search for issues using JQL (Jira Query Language).

        Cloud instances are queried through the enhanced ``search/jql``
        endpoint; Server/Data Center through the classic search API. The
        configured projects filter is applied to the query first.

        Args:
            jql: JQL query string
            fields: Fields to return (comma-separated string or list); all
                fields when omitted
            expand: Optional items to expand (comma-separated)
            limit: Maximum issues to return

        Returns:
            The matching issues, at most ``limit``

        Raises:
            MCPJiraAuthenticationError: If authentication fails with the Jira API (401/403)
            HTTPError: If Jira rejects the query for another reason
        """
        jql = apply_projects_filter(jql, self.config.projects_filter)
        if isinstance(fields, list):
            fields = ",".join(fields)
        fields_param = fields or "*all"

        try:
            if self.config.is_cloud:
                issues = self.jira.enhanced_jql_get_list_of_tickets(
                    jql, fields=fields_param, limit=limit, expand=expand
                )
            else:
                response = self.jira.jql(
                    jql, fields=fields_param, start=0, limit=limit, expand=expand
                )
                issues = response.get("issues", []) if isinstance(response, dict) else None
        except HTTPError as http_err:
            self._raise_http_error(http_err, "search issues")

        if not isinstance(issues, list):
            msg = f"Unexpected search response type for JQL '{jql}': {type(issues)}"
            logger.error(msg)
            raise TypeError(msg)

        logger.debug(f"JQL '{jql}' matched {len(issues)} issue(s)")
        return [JiraIssue.from_api_response(issue) for issue in issues[:limit]]
