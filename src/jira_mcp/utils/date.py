"""Date helpers shared by the Jira mixins."""

import logging
from datetime import datetime, timezone

import dateutil.parser

logger = logging.getLogger("jira-mcp.utils.date")

JIRA_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.000%z"
DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_date(date_str: str | int | None) -> datetime | None:
    """
    Parse a Jira date value into a datetime.

    Accepts None, epoch milliseconds (as int or digit string), or any
    format understood by `dateutil.parser` (ISO 8601, RFC 3339, ...).

    Args:
        date_str: The raw date value

    Returns:
        The parsed datetime, or None for empty input
    """
    if not date_str:
        return None
    if isinstance(date_str, int) or date_str.isdigit():
        return datetime.fromtimestamp(int(date_str) / 1000, tz=timezone.utc)
    return dateutil.parser.parse(date_str)


def format_display_datetime(value: str | None) -> str:
    """Render a Jira timestamp as ``YYYY-MM-DD HH:MM:SS``.

    Unparseable values are returned unchanged.
    """
    if not value:
        return ""
    try:
        parsed = parse_date(value)
    except (ValueError, OverflowError):
        logger.debug(f"Could not parse date '{value}', returning it unchanged")
        return value
    return parsed.strftime(DISPLAY_DATETIME_FORMAT) if parsed else value


def current_jira_timestamp() -> str:
    """Return the current local time in the format Jira expects for worklogs."""
    return datetime.now().astimezone().strftime(JIRA_TIMESTAMP_FORMAT)
