"""Utility functions for Jira operations."""

import logging
import re

from .constants import MAX_ISSUES_PER_SPRINT_MOVE, SECONDS_PER_UNIT

logger = logging.getLogger("jira-mcp.jira.utils")

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)\s*([wdhms])", re.IGNORECASE)


def parse_time_spent(time_spent: str) -> int:
    """
    Convert a Jira duration such as ``1h 30m`` to seconds.

    A bare integer is taken as seconds. Units follow Jira's defaults
    (1w = 5d, 1d = 8h).

    Args:
        time_spent: The duration text

    Returns:
        The duration in seconds

    Raises:
        ValueError: If the text is not a positive duration
    """
    value = (time_spent or "").strip()
    if value.isdigit():
        seconds = int(value)
    else:
        compact = value.replace(" ", "")
        parts = _DURATION_PART.findall(value)
        if not parts or "".join(f"{n}{u}" for n, u in parts) != compact:
            raise ValueError(f"invalid time_spent format: could not parse time: {time_spent}")
        seconds = int(
            sum(float(number) * SECONDS_PER_UNIT[unit.lower()] for number, unit in parts)
        )

    if seconds <= 0:
        raise ValueError(f"invalid time_spent format: duration must be positive: {time_spent}")
    return seconds


def escape_jql_string(value: str) -> str:
    """
    Escapes characters reserved within JQL string literals ('\\', '"')
    and encloses the result in double quotes.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def apply_projects_filter(jql: str, projects_filter: str | None) -> str:
    """
    Restrict a JQL query to the configured projects.

    Queries that already filter by project are left untouched.
    """
    if not projects_filter:
        return jql

    projects = [p.strip() for p in projects_filter.split(",") if p.strip()]
    if not projects:
        return jql

    if len(projects) == 1:
        project_query = f"project = {escape_jql_string(projects[0])}"
    else:
        project_query = f"project IN ({', '.join(escape_jql_string(p) for p in projects)})"

    if not jql:
        return project_query
    if re.search(r"\bproject\s*(=|in\b)", jql, re.IGNORECASE):
        return jql

    filtered = f"({jql}) AND {project_query}"
    logger.info(f"Applied projects filter to query: {filtered}")
    return filtered


def split_issue_keys(issue_keys: str) -> list[str]:
    """
    Split a comma-separated list of issue keys.

    Raises:
        ValueError: If no key is given or more than the sprint move limit
    """
    keys = [key.strip() for key in (issue_keys or "").split(",") if key.strip()]
    if not keys:
        raise ValueError("at least one issue key is required")
    if len(keys) > MAX_ISSUES_PER_SPRINT_MOVE:
        raise ValueError(
            f"maximum {MAX_ISSUES_PER_SPRINT_MOVE} issues can be moved in one "
            f"operation, got {len(keys)}"
        )
    return keys


def sanitize_filename(filename: str | None, attachment_id: str) -> str:
    """Make an attachment filename safe to join onto a directory."""
    name = filename or f"attachment-{attachment_id}"
    return name.replace("/", "_").replace("\\", "_")


def parse_numeric_id(value: str, name: str) -> int:
    """Parse a numeric Jira id (sprint, board), raising ValueError when invalid."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as err:
        raise ValueError(f"invalid {name}: {value}") from err
