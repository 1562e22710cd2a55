"""
Test fixtures for model testing.
"""

from typing import Any

import pytest

from tests.fixtures.jira_mocks import (
    MOCK_DEV_STATUS_DETAIL_BUILDS,
    MOCK_DEV_STATUS_DETAIL_PULL_REQUEST,
    MOCK_JIRA_COMMENTS,
    MOCK_JIRA_ISSUE_RESPONSE,
)


@pytest.fixture
def jira_issue_data() -> dict[str, Any]:
    """Return mock Jira issue data."""
    return MOCK_JIRA_ISSUE_RESPONSE


@pytest.fixture
def jira_comments_data() -> dict[str, Any]:
    """Return mock Jira comments data."""
    return MOCK_JIRA_COMMENTS


@pytest.fixture
def dev_status_pull_request_data() -> dict[str, Any]:
    return MOCK_DEV_STATUS_DETAIL_PULL_REQUEST


@pytest.fixture
def dev_status_builds_data() -> dict[str, Any]:
    return MOCK_DEV_STATUS_DETAIL_BUILDS
