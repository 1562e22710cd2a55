"""URL helpers."""

import re
from urllib.parse import urlparse

_PRIVATE_HOST_PATTERNS = (
    r"^127\.",
    r"^10\.",
    r"^192\.168\.",
    r"^172\.(1[6-9]|2[0-9]|3[0-1])\.",
)

_CLOUD_DOMAINS = (".atlassian.net", ".jira.com", ".jira-dev.com")


def is_atlassian_cloud_url(url: str | None) -> bool:
    """Determine whether a Jira URL points at Atlassian Cloud.

    Localhost and private-network addresses are always treated as
    Server/Data Center.

    Args:
        url: The Jira base URL

    Returns:
        True for Atlassian Cloud, False for Server/Data Center
    """
    if not url:
        return False

    hostname = urlparse(url).hostname or ""
    if hostname == "localhost" or any(
        re.match(pattern, hostname) for pattern in _PRIVATE_HOST_PATTERNS
    ):
        return False

    return any(domain in hostname for domain in _CLOUD_DOMAINS)
