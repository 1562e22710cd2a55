"""Module for Jira transition operations."""

import logging
from typing import Any

from requests.exceptions import HTTPError

from .client import JiraClient

logger = logging.getLogger("jira-mcp.jira.transitions")


class TransitionsMixin(JiraClient):
    """Mixin for Jira transition operations."""

    def transition_issue(
        self, issue_key: str, transition_id: str, comment: str | None = None
    ) -> None:
        """
        Move an issue through its workflow.

        The optional comment is added in the same request through the
        transition's ``update`` block.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            transition_id: The id of one of the issue's available transitions
            comment: Optional comment to add with the transition
        """
        payload: dict[str, Any] = {"transition": {"id": str(transition_id)}}
        if comment:
            payload["update"] = {"comment": [{"add": {"body": comment}}]}

        url = f"{self.jira.resource_url('issue')}/{issue_key}/transitions"
        try:
            self.jira.post(url, data=payload)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"transition {issue_key}")

        logger.info(f"Transitioned {issue_key} with transition {transition_id}")
