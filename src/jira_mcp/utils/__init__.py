"""
Utility functions for the Jira MCP server.
"""

from .date import parse_date
from .io import is_read_only_mode
from .logging import setup_logging
from .ssl import SSLIgnoreAdapter, configure_ssl_verification
from .urls import is_atlassian_cloud_url

__all__ = [
    "SSLIgnoreAdapter",
    "configure_ssl_verification",
    "is_atlassian_cloud_url",
    "is_read_only_mode",
    "parse_date",
    "setup_logging",
]
