"""Tests for the Jira Issues mixin."""

from unittest.mock import MagicMock

import pytest
from requests.exceptions import HTTPError

from jira_mcp.exceptions import MCPJiraAuthenticationError
from jira_mcp.jira.issues import IssuesMixin
from jira_mcp.models.jira import JiraIssue
from tests.fixtures.jira_mocks import MOCK_JIRA_ISSUE_RESPONSE


class TestIssuesMixin:
    """Tests for the IssuesMixin class."""

    @pytest.fixture
    def issues_mixin(self, jira_client):
        mixin = IssuesMixin(config=jira_client.config)
        mixin.jira = jira_client.jira
        return mixin

    def test_get_issue(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = MOCK_JIRA_ISSUE_RESPONSE

        issue = issues_mixin.get_issue("PROJ-123")

        issues_mixin.jira.get_issue.assert_called_once_with(
            "PROJ-123",
            fields=None,
            expand="transitions,changelog,subtasks,description",
        )
        assert isinstance(issue, JiraIssue)
        assert issue.key == "PROJ-123"
        assert issue.summary == "Test Issue Summary"
        assert issue.status.name == "In Progress"
        assert issue.assignee.display_name == "Test User"
        assert [t.name for t in issue.transitions] == ["Done"]

    def test_get_issue_joins_field_list(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = MOCK_JIRA_ISSUE_RESPONSE

        issues_mixin.get_issue("PROJ-123", fields=["summary", "status"], expand="")

        issues_mixin.jira.get_issue.assert_called_once_with(
            "PROJ-123", fields="summary,status", expand=None
        )

    def test_get_issue_unexpected_type(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = "not a dict"

        with pytest.raises(TypeError, match="Unexpected return value type"):
            issues_mixin.get_issue("PROJ-123")

    def test_get_issue_authentication_error(self, issues_mixin):
        issues_mixin.jira.get_issue.side_effect = HTTPError(
            response=MagicMock(status_code=401)
        )

        with pytest.raises(MCPJiraAuthenticationError):
            issues_mixin.get_issue("PROJ-123")

    def test_get_issue_other_http_error_propagates(self, issues_mixin):
        error = HTTPError(response=MagicMock(status_code=404))
        issues_mixin.jira.get_issue.side_effect = error

        with pytest.raises(HTTPError) as excinfo:
            issues_mixin.get_issue("PROJ-999")
        assert excinfo.value is error

    def test_create_issue(self, issues_mixin):
        issues_mixin.jira.create_issue.return_value = {
            "id": "10010",
            "key": "PROJ-10",
            "self": "https://test.atlassian.net/rest/api/2/issue/10010",
        }

        result = issues_mixin.create_issue(
            project_key="PROJ",
            summary="New issue",
            issue_type="Task",
            description="Details",
        )

        issues_mixin.jira.create_issue.assert_called_once_with(
            fields={
                "project": {"key": "PROJ"},
                "summary": "New issue",
                "issuetype": {"name": "Task"},
                "description": "Details",
            }
        )
        assert result["key"] == "PROJ-10"

    def test_create_child_issue_uses_parent_project(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = {
            "id": "1",
            "key": "PROJ-1",
            "fields": {"project": {"key": "PROJ", "name": "Project"}},
        }
        issues_mixin.jira.create_issue.return_value = {
            "id": "2",
            "key": "PROJ-2",
            "self": "https://test.atlassian.net/rest/api/2/issue/2",
        }

        issues_mixin.create_child_issue("PROJ-1", summary="Child", description="")

        issues_mixin.jira.get_issue.assert_called_once_with(
            "PROJ-1", fields="project", expand=None
        )
        fields = issues_mixin.jira.create_issue.call_args.kwargs["fields"]
        assert fields["project"] == {"key": "PROJ"}
        assert fields["parent"] == {"key": "PROJ-1"}
        assert fields["issuetype"] == {"name": "Subtask"}

    def test_create_child_issue_with_explicit_type(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = {
            "key": "PROJ-1",
            "fields": {"project": {"key": "PROJ"}},
        }
        issues_mixin.jira.create_issue.return_value = {"id": "3", "key": "PROJ-3"}

        issues_mixin.create_child_issue("PROJ-1", summary="Bug", issue_type="Bug")

        fields = issues_mixin.jira.create_issue.call_args.kwargs["fields"]
        assert fields["issuetype"] == {"name": "Bug"}

    def test_create_child_issue_without_project(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = {"key": "PROJ-1", "fields": {}}

        with pytest.raises(ValueError, match="Could not determine the project"):
            issues_mixin.create_child_issue("PROJ-1", summary="Child")
        issues_mixin.jira.create_issue.assert_not_called()

    def test_update_issue(self, issues_mixin):
        issues_mixin.update_issue("PROJ-1", summary="New title")

        issues_mixin.jira.update_issue_field.assert_called_once_with(
            "PROJ-1", {"summary": "New title"}
        )

    def test_update_issue_requires_a_field(self, issues_mixin):
        with pytest.raises(ValueError, match="At least one of summary or description"):
            issues_mixin.update_issue("PROJ-1")
        issues_mixin.jira.update_issue_field.assert_not_called()

    def test_get_issue_history(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = MOCK_JIRA_ISSUE_RESPONSE

        history = issues_mixin.get_issue_history("PROJ-123")

        issues_mixin.jira.get_issue.assert_called_once_with(
            "PROJ-123", fields="summary", expand="changelog"
        )
        assert len(history) == 1
        assert history[0].items[0].to_string == "5"

    def test_get_issue_history_empty(self, issues_mixin):
        issues_mixin.jira.get_issue.return_value = {"key": "PROJ-1", "fields": {}}

        assert issues_mixin.get_issue_history("PROJ-1") == []
