"""Helpers for reading Jira settings from the environment."""

import logging
import os

from .urls import is_atlassian_cloud_url

logger = logging.getLogger("jira-mcp.utils.environment")

# Primary variable -> legacy alias accepted for the same setting
ENV_ALIASES: dict[str, str] = {
    "JIRA_URL": "ATLASSIAN_HOST",
    "JIRA_USERNAME": "ATLASSIAN_EMAIL",
    "JIRA_API_TOKEN": "ATLASSIAN_TOKEN",
}


def get_env(name: str, default: str | None = None) -> str | None:
    """Read a setting, falling back to its alias when the primary is unset."""
    value = os.getenv(name)
    if value:
        return value
    alias = ENV_ALIASES.get(name)
    if alias and os.getenv(alias):
        return os.getenv(alias)
    return default


def is_jira_configured() -> bool:
    """Determine whether enough environment is present to talk to Jira.

    Cloud instances need a username and API token. Server/Data Center
    instances accept either a personal access token or basic auth.
    """
    url = get_env("JIRA_URL")
    if not url:
        logger.info("Jira is not configured: JIRA_URL is missing.")
        return False

    username = get_env("JIRA_USERNAME")
    api_token = get_env("JIRA_API_TOKEN")

    if is_atlassian_cloud_url(url):
        if username and api_token:
            logger.info("Using Jira Cloud Basic Authentication (API Token)")
            return True
    elif os.getenv("JIRA_PERSONAL_TOKEN") or (username and api_token):
        logger.info("Using Jira Server/Data Center authentication (PAT or Basic Auth)")
        return True

    logger.info("Jira URL found but credentials are missing.")
    return False
