"""Base client module for Jira API interactions."""

import logging
from typing import Any, NoReturn

from atlassian import Jira
from requests.exceptions import HTTPError

from ..exceptions import MCPJiraAuthenticationError
from ..models.jira.adf import adf_to_text
from ..utils.logging import mask_sensitive
from ..utils.ssl import configure_ssl_verification
from .config import JiraConfig

logger = logging.getLogger("jira-mcp.jira.client")


class JiraClient:
    """Base client for Jira API interactions."""

    config: JiraConfig
    _current_user_account_id: str | None

    def __init__(self, config: JiraConfig | None = None) -> None:
        """Initialize the Jira client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If configuration is invalid or required credentials are missing
        """
        self.config = config or JiraConfig.from_env()

        if self.config.auth_type == "token":
            self.jira = Jira(
                url=self.config.url,
                token=self.config.personal_token,
                cloud=self.config.is_cloud,
                verify_ssl=self.config.ssl_verify,
            )
        else:
            self.jira = Jira(
                url=self.config.url,
                username=self.config.username,
                password=self.config.api_token,
                cloud=self.config.is_cloud,
                verify_ssl=self.config.ssl_verify,
            )

        configure_ssl_verification(
            url=self.config.url,
            session=self.jira._session,
            ssl_verify=self.config.ssl_verify,
        )

        if self.config.proxies:
            self.jira._session.proxies.update(self.config.proxies)
            logger.debug(
                f"Jira proxies configured: {list(self.config.proxies)} "
                f"(bypass: {self.config.no_proxy or 'none'})"
            )

        logger.debug(
            f"Jira client initialized for {self.config.url} "
            f"(auth={self.config.auth_type}, user={mask_sensitive(self.config.username)})"
        )
        self._current_user_account_id = None

    def _render_text(self, value: Any) -> str:
        """Render a Jira rich-text field (plain string or ADF) as plain text."""
        return adf_to_text(value)

    def _raise_http_error(self, http_err: HTTPError, action: str) -> NoReturn:
        """Translate an HTTPError, turning 401/403 into an authentication error."""
        status = http_err.response.status_code if http_err.response is not None else None
        if status in (401, 403):
            error_msg = (
                f"Authentication failed for Jira API ({status}) while trying to {action}. "
                "Token may be expired or invalid. Please verify credentials."
            )
            logger.error(error_msg)
            raise MCPJiraAuthenticationError(error_msg) from http_err
        logger.error(f"HTTP error while trying to {action}: {http_err}")
        raise http_err

    def get_current_user_account_id(self) -> str:
        """Return the account id (Cloud) or username (Server/DC) of the caller.

        Raises:
            MCPJiraAuthenticationError: If the credentials are rejected
        """
        if self._current_user_account_id is not None:
            return self._current_user_account_id

        try:
            myself = self.jira.myself()
        except HTTPError as http_err:
            self._raise_http_error(http_err, "get the current user")

        account_id = None
        if isinstance(myself, dict):
            account_id = myself.get("accountId") or myself.get("name") or myself.get("key")
        if not account_id:
            raise ValueError("Could not determine the current Jira user")

        self._current_user_account_id = str(account_id)
        return self._current_user_account_id
