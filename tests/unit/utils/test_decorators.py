from unittest.mock import MagicMock

import pytest

from jira_mcp.servers.context import MainAppContext
from jira_mcp.utils.decorators import check_write_access, require_non_empty


class DummyContext:
    def __init__(self, read_only):
        self.request_context = MagicMock()
        self.request_context.lifespan_context = {
            "app_lifespan_context": MainAppContext(read_only=read_only)
        }


@check_write_access
async def create_issue(ctx, x):
    return x * 2


@pytest.mark.anyio
async def test_check_write_access_blocks_in_read_only():
    ctx = DummyContext(read_only=True)
    with pytest.raises(ValueError) as exc:
        await create_issue(ctx, 3)
    assert str(exc.value) == "Cannot create issue in read-only mode."


@pytest.mark.anyio
async def test_check_write_access_allows_in_writable():
    ctx = DummyContext(read_only=False)
    result = await create_issue(ctx, 4)
    assert result == 8


@pytest.mark.anyio
async def test_check_write_access_without_app_context():
    ctx = MagicMock()
    ctx.request_context.lifespan_context = None

    assert await create_issue(ctx, 1) == 2


def test_check_write_access_keeps_tool_name():
    assert create_issue.__name__ == "create_issue"


def test_require_non_empty():
    require_non_empty(issue_key="PROJ-1", comment="text")

    with pytest.raises(ValueError, match="^comment argument is required$"):
        require_non_empty(issue_key="PROJ-1", comment="   ")
    with pytest.raises(ValueError, match="^issue_key argument is required$"):
        require_non_empty(issue_key=None)
