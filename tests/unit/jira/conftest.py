"""Test fixtures for Jira unit tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from jira_mcp.jira.client import JiraClient
from jira_mcp.jira.config import JiraConfig


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "JIRA_URL": "https://test.atlassian.net",
            "JIRA_USERNAME": "test_username",
            "JIRA_API_TOKEN": "test_token",
        },
        clear=True,  # Clear existing environment variables
    ):
        yield


@pytest.fixture
def mock_config():
    """Create a JiraConfig for a Cloud instance."""
    return JiraConfig(
        url="https://test.atlassian.net",
        auth_type="basic",
        username="test_username",
        api_token="test_token",
    )


@pytest.fixture
def server_config():
    """Create a JiraConfig for a Server/Data Center instance."""
    return JiraConfig(
        url="https://jira.example.com",
        auth_type="token",
        personal_token="test_pat",
    )


@pytest.fixture
def mock_atlassian_jira():
    """Mock the Atlassian Jira client."""
    mock_jira = MagicMock()
    mock_jira.resource_url.side_effect = lambda resource: f"rest/api/2/{resource}"
    return mock_jira


@pytest.fixture
def jira_client(mock_config, mock_atlassian_jira):
    """Create a JiraClient whose underlying Atlassian client is mocked."""
    with patch("jira_mcp.jira.client.Jira", return_value=mock_atlassian_jira):
        client = JiraClient(config=mock_config)
    client.jira = mock_atlassian_jira
    return client
