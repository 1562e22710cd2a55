"""Configuration module for Jira API interactions."""

import logging
import os
from dataclasses import dataclass
from typing import Literal

from ..utils.environment import get_env
from ..utils.urls import is_atlassian_cloud_url

logger = logging.getLogger("jira-mcp.jira.config")


@dataclass
class JiraConfig:
    """Jira API configuration.

    Handles authentication for Jira Cloud and Server/Data Center:
    - Cloud: username/API token (basic auth)
    - Server/DC: personal access token or basic auth
    """

    url: str  # Base URL for Jira
    auth_type: Literal["basic", "token"]  # Authentication type
    username: str | None = None  # Email or username
    api_token: str | None = None  # API token
    personal_token: str | None = None  # Personal access token (Server/DC)
    ssl_verify: bool = True  # Whether to verify SSL certificates
    projects_filter: str | None = None  # Comma-separated project keys for searches
    http_proxy: str | None = None
    https_proxy: str | None = None
    no_proxy: str | None = None  # Comma-separated hosts that bypass the proxy
    socks_proxy: str | None = None

    @property
    def is_cloud(self) -> bool:
        """True for Atlassian Cloud (atlassian.net) instances."""
        return is_atlassian_cloud_url(self.url)

    @property
    def proxies(self) -> dict[str, str]:
        """Proxy mapping suitable for a requests session."""
        proxies: dict[str, str] = {}
        if self.http_proxy:
            proxies["http"] = self.http_proxy
        if self.https_proxy:
            proxies["https"] = self.https_proxy
        if self.socks_proxy:
            proxies["socks"] = self.socks_proxy
        return proxies

    @classmethod
    def from_env(cls) -> "JiraConfig":
        """Create configuration from environment variables.

        JIRA_URL, JIRA_USERNAME and JIRA_API_TOKEN may also be supplied as
        ATLASSIAN_HOST, ATLASSIAN_EMAIL and ATLASSIAN_TOKEN.

        Returns:
            JiraConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing
        """
        url = get_env("JIRA_URL")
        if not url:
            raise ValueError("Missing required JIRA_URL environment variable")

        username = get_env("JIRA_USERNAME")
        api_token = get_env("JIRA_API_TOKEN")
        personal_token = os.getenv("JIRA_PERSONAL_TOKEN")

        auth_type: Literal["basic", "token"]
        if is_atlassian_cloud_url(url):
            if not (username and api_token):
                raise ValueError(
                    "Cloud authentication requires JIRA_USERNAME and JIRA_API_TOKEN"
                )
            auth_type = "basic"
        elif personal_token:
            auth_type = "token"
        elif username and api_token:
            auth_type = "basic"
        else:
            raise ValueError(
                "Server/Data Center authentication requires JIRA_PERSONAL_TOKEN "
                "or JIRA_USERNAME and JIRA_API_TOKEN"
            )

        ssl_verify = os.getenv("JIRA_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            url=url.rstrip("/"),
            auth_type=auth_type,
            username=username,
            api_token=api_token,
            personal_token=personal_token,
            ssl_verify=ssl_verify,
            projects_filter=os.getenv("JIRA_PROJECTS_FILTER"),
            http_proxy=os.getenv("JIRA_HTTP_PROXY", os.getenv("HTTP_PROXY")),
            https_proxy=os.getenv("JIRA_HTTPS_PROXY", os.getenv("HTTPS_PROXY")),
            no_proxy=os.getenv("JIRA_NO_PROXY", os.getenv("NO_PROXY")),
            socks_proxy=os.getenv("JIRA_SOCKS_PROXY", os.getenv("SOCKS_PROXY")),
        )

    def is_auth_configured(self) -> bool:
        """Check whether the credentials needed for `auth_type` are present."""
        if self.auth_type == "token":
            return bool(self.personal_token)
        if self.auth_type == "basic":
            return bool(self.username and self.api_token)
        logger.warning(f"Unknown or unsupported auth_type: {self.auth_type}")
        return False
