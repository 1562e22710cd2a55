"""Unit tests for the Jira FastMCP server implementation."""

import asyncio
import json
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastmcp import Client, FastMCP
from fastmcp.client import FastMCPTransport
from fastmcp.exceptions import ToolError

from jira_mcp.exceptions import DevelopmentInfoCancelledError
from jira_mcp.jira import JiraFetcher
from jira_mcp.jira.config import JiraConfig
from jira_mcp.models.jira import (
    DevBranch,
    DevelopmentInformation,
    JiraAttachment,
    JiraChangelog,
)
from jira_mcp.servers.context import MainAppContext
from jira_mcp.servers.jira import jira_mcp
from jira_mcp.servers.main import JiraMCP

WRITE_TOOLS = {
    "jira_create_issue",
    "jira_create_child_issue",
    "jira_update_issue",
    "jira_add_comment",
    "jira_add_worklog",
    "jira_transition_issue",
    "jira_link_issues",
    "jira_move_issues_to_sprint",
}


@pytest.fixture
def mock_jira_fetcher():
    """Create a mock JiraFetcher whose formatters return recognizable text."""
    mock_fetcher = MagicMock(spec=JiraFetcher)
    mock_fetcher.format_issue.return_value = "Key: PROJ-1\n"
    mock_fetcher.format_search_results.return_value = "Key: PROJ-1\n\n===\n\nKey: PROJ-2\n"
    mock_fetcher.format_created_issue.return_value = "Issue created successfully!"
    mock_fetcher.format_worklog.return_value = "Worklog added successfully!"
    mock_fetcher.format_sprint_move.return_value = "Successfully moved 2 issue(s)"
    mock_fetcher.format_downloaded_attachment.return_value = "Attachment downloaded"
    return mock_fetcher


@pytest.fixture
def base_jira_config():
    return JiraConfig(
        url="https://test.atlassian.net",
        auth_type="basic",
        username="test@example.com",
        api_token="test_token",
    )


def make_server(
    jira_config: JiraConfig | None,
    read_only: bool = False,
    enabled_tools: list[str] | None = None,
) -> JiraMCP:
    """Build a server around the real Jira tools with a fixed lifespan context."""

    @asynccontextmanager
    async def test_lifespan(app: FastMCP) -> AsyncGenerator[dict, None]:
        yield {
            "app_lifespan_context": MainAppContext(
                full_jira_config=jira_config,
                read_only=read_only,
                enabled_tools=enabled_tools,
            )
        }

    test_mcp = JiraMCP("TestJira", lifespan=test_lifespan)
    test_mcp.mount("jira", jira_mcp)
    return test_mcp


async def call(server: JiraMCP, fetcher, tool: str, arguments: dict) -> str:
    with patch(
        "jira_mcp.servers.jira.get_jira_fetcher", AsyncMock(return_value=fetcher)
    ):
        async with Client(transport=FastMCPTransport(server)) as client:
            result = await client.call_tool(tool, arguments)
    return result[0].text


async def list_tool_names(server: JiraMCP) -> set[str]:
    async with Client(transport=FastMCPTransport(server)) as client:
        tools = await client.list_tools()
    return {tool.name for tool in tools}


@pytest.mark.anyio
async def test_get_issue(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_get_issue",
        {"issue_key": "PROJ-1"},
    )

    assert text == "Key: PROJ-1\n"
    mock_jira_fetcher.get_issue.assert_called_once_with(
        "PROJ-1",
        fields=None,
        expand="transitions,changelog,subtasks,description",
    )
    mock_jira_fetcher.format_issue.assert_called_once_with(
        mock_jira_fetcher.get_issue.return_value
    )


@pytest.mark.anyio
async def test_get_issue_blank_key(mock_jira_fetcher, base_jira_config):
    with pytest.raises(ToolError, match="issue_key argument is required"):
        await call(
            make_server(base_jira_config),
            mock_jira_fetcher,
            "jira_get_issue",
            {"issue_key": "  "},
        )
    mock_jira_fetcher.get_issue.assert_not_called()


@pytest.mark.anyio
async def test_search_issue(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_search_issue",
        {"jql": "project = PROJ", "fields": "summary,status"},
    )

    assert "===" in text
    mock_jira_fetcher.search_issues.assert_called_once_with(
        "project = PROJ",
        fields="summary,status",
        expand="transitions,changelog,subtasks,description",
    )


@pytest.mark.anyio
async def test_create_issue(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_create_issue",
        {
            "project_key": "PROJ",
            "summary": "New",
            "description": "Body",
            "issue_type": "Task",
        },
    )

    assert text == "Issue created successfully!"
    mock_jira_fetcher.create_issue.assert_called_once_with(
        project_key="PROJ", summary="New", issue_type="Task", description="Body"
    )


@pytest.mark.anyio
async def test_create_child_issue(mock_jira_fetcher, base_jira_config):
    await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_create_child_issue",
        {
            "parent_issue_key": "PROJ-1",
            "summary": "Crash",
            "description": "Steps",
            "issue_type": "Bug",
        },
    )

    mock_jira_fetcher.create_child_issue.assert_called_once_with(
        parent_issue_key="PROJ-1",
        summary="Crash",
        description="Steps",
        issue_type="Bug",
    )
    mock_jira_fetcher.format_created_issue.assert_called_once_with(
        mock_jira_fetcher.create_child_issue.return_value,
        parent_key="PROJ-1",
        issue_type="Bug",
    )


@pytest.mark.anyio
async def test_update_issue(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_update_issue",
        {"issue_key": "PROJ-1", "summary": "Renamed"},
    )

    assert text == "Issue updated successfully!"
    mock_jira_fetcher.update_issue.assert_called_once_with(
        "PROJ-1", summary="Renamed", description=None
    )


@pytest.mark.anyio
async def test_update_issue_requires_a_field(mock_jira_fetcher, base_jira_config):
    with pytest.raises(ToolError, match="At least one of summary or description"):
        await call(
            make_server(base_jira_config),
            mock_jira_fetcher,
            "jira_update_issue",
            {"issue_key": "PROJ-1"},
        )
    mock_jira_fetcher.update_issue.assert_not_called()


@pytest.mark.anyio
async def test_add_worklog(mock_jira_fetcher, base_jira_config):
    await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_add_worklog",
        {"issue_key": "PROJ-1", "time_spent": "1h 30m", "comment": "pairing"},
    )

    mock_jira_fetcher.add_worklog.assert_called_once_with(
        "PROJ-1", time_spent="1h 30m", comment="pairing", started=None
    )
    mock_jira_fetcher.format_worklog.assert_called_once_with(
        "PROJ-1", mock_jira_fetcher.add_worklog.return_value, "1h 30m", 5400
    )


@pytest.mark.anyio
async def test_add_worklog_invalid_time(mock_jira_fetcher, base_jira_config):
    with pytest.raises(ToolError, match="invalid time_spent format"):
        await call(
            make_server(base_jira_config),
            mock_jira_fetcher,
            "jira_add_worklog",
            {"issue_key": "PROJ-1", "time_spent": "a while"},
        )
    mock_jira_fetcher.add_worklog.assert_not_called()


@pytest.mark.anyio
async def test_transition_issue(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_transition_issue",
        {"issue_key": "PROJ-1", "transition_id": "21"},
    )

    assert text == "Issue transition completed successfully"
    mock_jira_fetcher.transition_issue.assert_called_once_with(
        "PROJ-1", "21", comment=None
    )


@pytest.mark.anyio
async def test_link_issues(mock_jira_fetcher, base_jira_config):
    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_link_issues",
        {"inward_issue": "PROJ-1", "outward_issue": "PROJ-2", "link_type": "Blocks"},
    )

    assert text == 'Successfully linked issues PROJ-1 and PROJ-2 with link type "Blocks"'


@pytest.mark.anyio
async def test_get_issue_history(mock_jira_fetcher, base_jira_config):
    mock_jira_fetcher.get_issue_history.return_value = [
        JiraChangelog.from_api_response(
            {
                "id": "1",
                "author": {"displayName": "Ann"},
                "created": "2024-01-01T10:00:00.000+0000",
                "items": [{"field": "status", "fromString": "Open", "toString": "Done"}],
            }
        )
    ]

    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_get_issue_history",
        {"issue_key": "PROJ-1"},
    )

    payload = json.loads(text)
    assert payload["issue_key"] == "PROJ-1"
    assert payload["count"] == 1
    assert payload["history"][0]["author"] == "Ann"
    assert payload["history"][0]["changes"] == [
        {"field": "status", "from_string": "Open", "to_string": "Done"}
    ]


@pytest.mark.anyio
async def test_get_issue_history_empty(mock_jira_fetcher, base_jira_config):
    mock_jira_fetcher.get_issue_history.return_value = []

    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_get_issue_history",
        {"issue_key": "PROJ-1"},
    )

    assert text == "No history found for issue PROJ-1"


@pytest.mark.anyio
async def test_move_issues_to_sprint(mock_jira_fetcher, base_jira_config):
    await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_move_issues_to_sprint",
        {"sprint_id": "7", "issue_keys": "PROJ-1, PROJ-2"},
    )

    mock_jira_fetcher.move_issues_to_sprint.assert_called_once_with(
        "7", ["PROJ-1", "PROJ-2"]
    )


@pytest.mark.anyio
async def test_list_sprints_for_project(mock_jira_fetcher, base_jira_config):
    mock_jira_fetcher.resolve_board_ids.return_value = [3, 4]
    mock_jira_fetcher.format_sprint_list.return_value = "No sprints found."

    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_list_sprints",
        {"project_key": "PROJ"},
    )

    assert text == "No sprints found."
    mock_jira_fetcher.resolve_board_ids.assert_called_once_with(
        board_id=None, project_key="PROJ"
    )
    mock_jira_fetcher.list_open_sprints.assert_called_once_with([3, 4])


@pytest.mark.anyio
async def test_download_attachment(mock_jira_fetcher, base_jira_config, tmp_path):
    target = tmp_path / "50_log.txt"
    target.write_bytes(b"hello")
    attachment = JiraAttachment(id="50", filename="log.txt")
    mock_jira_fetcher.download_attachment.return_value = (target, attachment)

    await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_download_attachment",
        {"attachment_id": "50"},
    )

    mock_jira_fetcher.format_downloaded_attachment.assert_called_once_with(
        str(target), attachment, 5
    )


@pytest.mark.anyio
async def test_get_development_information(mock_jira_fetcher, base_jira_config):
    mock_jira_fetcher.get_development_information.return_value = DevelopmentInformation(
        issue_key="PROJ-1", branches=[DevBranch.from_api_response({"name": "feature/x"})]
    )

    text = await call(
        make_server(base_jira_config),
        mock_jira_fetcher,
        "jira_get_development_information",
        {"issue_key": "PROJ-1", "include_branches": True},
    )

    assert json.loads(text) == {
        "issueKey": "PROJ-1",
        "branches": [{"name": "feature/x"}],
        "pullRequests": [],
        "repositories": [],
        "builds": [],
    }
    _, kwargs = mock_jira_fetcher.get_development_information.call_args
    assert kwargs["include_branches"] is True
    assert kwargs["include_builds"] is False
    assert kwargs["cancel_event"].is_set() is False


@pytest.mark.anyio
async def test_cancelled_development_information_stops_the_lookup(mock_jira_fetcher):
    started = threading.Event()
    seen_events: list[threading.Event] = []

    def blocking_lookup(issue_key, **kwargs):
        cancel_event = kwargs["cancel_event"]
        seen_events.append(cancel_event)
        started.set()
        cancel_event.wait(5)
        raise DevelopmentInfoCancelledError(f"request for {issue_key} was cancelled")

    mock_jira_fetcher.get_development_information.side_effect = blocking_lookup
    tool = (await jira_mcp.get_tools())["get_development_information"]

    with patch(
        "jira_mcp.servers.jira.get_jira_fetcher",
        AsyncMock(return_value=mock_jira_fetcher),
    ):
        task = asyncio.create_task(tool.fn(MagicMock(), issue_key="PROJ-1"))
        assert await asyncio.to_thread(started.wait, 5)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    assert seen_events[0].is_set()
    mock_jira_fetcher.get_development_information.assert_called_once()


@pytest.mark.anyio
async def test_fetcher_errors_surface_as_tool_errors(
    mock_jira_fetcher, base_jira_config
):
    mock_jira_fetcher.get_issue.side_effect = ValueError("Issue PROJ-404 not found")

    with pytest.raises(ToolError, match="Issue PROJ-404 not found"):
        await call(
            make_server(base_jira_config),
            mock_jira_fetcher,
            "jira_get_issue",
            {"issue_key": "PROJ-404"},
        )


@pytest.mark.anyio
async def test_no_fetcher_configuration(base_jira_config):
    missing_fetcher = AsyncMock(
        side_effect=ValueError("Jira client (fetcher) not available")
    )

    with patch("jira_mcp.servers.jira.get_jira_fetcher", missing_fetcher):
        async with Client(transport=FastMCPTransport(make_server(None))) as client:
            with pytest.raises(ToolError, match="not available"):
                await client.call_tool("jira_get_issue", {"issue_key": "PROJ-1"})


class TestToolListing:
    @pytest.mark.anyio
    async def test_all_tools_listed(self, base_jira_config):
        names = await list_tool_names(make_server(base_jira_config))

        assert WRITE_TOOLS <= names
        assert {
            "jira_get_issue",
            "jira_search_issue",
            "jira_get_development_information",
            "jira_sprint_report",
        } <= names

    @pytest.mark.anyio
    async def test_read_only_hides_write_tools(self, base_jira_config):
        names = await list_tool_names(make_server(base_jira_config, read_only=True))

        assert not WRITE_TOOLS & names
        assert "jira_get_issue" in names

    @pytest.mark.anyio
    async def test_enabled_tools_filter(self, base_jira_config):
        names = await list_tool_names(
            make_server(
                base_jira_config,
                enabled_tools=["jira_get_issue", "jira_search_issue"],
            )
        )

        assert names == {"jira_get_issue", "jira_search_issue"}

    @pytest.mark.anyio
    async def test_unconfigured_jira_hides_jira_tools(self):
        names = await list_tool_names(make_server(None))

        assert not any(name.startswith("jira_") for name in names)


@pytest.mark.anyio
async def test_read_only_rejects_write_calls(mock_jira_fetcher, base_jira_config):
    with pytest.raises(ToolError, match="Cannot create issue in read-only mode"):
        await call(
            make_server(base_jira_config, read_only=True),
            mock_jira_fetcher,
            "jira_create_issue",
            {
                "project_key": "PROJ",
                "summary": "New",
                "description": "Body",
                "issue_type": "Task",
            },
        )
    mock_jira_fetcher.create_issue.assert_not_called()
