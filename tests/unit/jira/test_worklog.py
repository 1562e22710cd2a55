"""Tests for the Jira Worklog mixin."""

from unittest.mock import patch

import pytest

from jira_mcp.jira.worklog import WorklogMixin


class TestWorklogMixin:
    """Tests for the WorklogMixin class."""

    @pytest.fixture
    def worklog_mixin(self, jira_client):
        mixin = WorklogMixin(config=jira_client.config)
        mixin.jira = jira_client.jira
        mixin.jira.post.return_value = {
            "id": "30001",
            "author": {"displayName": "Test User"},
            "started": "2024-01-01T10:00:00.000+0000",
            "timeSpent": "1h 30m",
            "timeSpentSeconds": 5400,
        }
        return mixin

    def test_add_worklog(self, worklog_mixin):
        worklog = worklog_mixin.add_worklog(
            "PROJ-1",
            time_spent="1h 30m",
            comment="Investigated",
            started="2024-01-01T10:00:00.000+0000",
        )

        worklog_mixin.jira.post.assert_called_once_with(
            "rest/api/2/issue/PROJ-1/worklog",
            data={
                "timeSpentSeconds": 5400,
                "started": "2024-01-01T10:00:00.000+0000",
                "comment": "Investigated",
            },
            params={"adjustEstimate": "auto"},
        )
        assert worklog.id == "30001"
        assert worklog.time_spent_seconds == 5400
        assert worklog.author.display_name == "Test User"

    def test_add_worklog_defaults_started_to_now(self, worklog_mixin):
        with patch(
            "jira_mcp.jira.worklog.current_jira_timestamp",
            return_value="2024-05-01T12:00:00.000+0000",
        ):
            worklog_mixin.add_worklog("PROJ-1", time_spent="3600")

        data = worklog_mixin.jira.post.call_args.kwargs["data"]
        assert data == {
            "timeSpentSeconds": 3600,
            "started": "2024-05-01T12:00:00.000+0000",
        }

    def test_add_worklog_invalid_time_spent(self, worklog_mixin):
        with pytest.raises(ValueError, match="invalid time_spent format"):
            worklog_mixin.add_worklog("PROJ-1", time_spent="soon")
        worklog_mixin.jira.post.assert_not_called()

    def test_add_worklog_unexpected_response(self, worklog_mixin):
        worklog_mixin.jira.post.return_value = None

        with pytest.raises(TypeError):
            worklog_mixin.add_worklog("PROJ-1", time_spent="1h")
