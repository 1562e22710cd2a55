import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context

logger = logging.getLogger("jira-mcp.utils.decorators")

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def check_write_access(func: F) -> F:
    """
    Block a FastMCP tool when the server runs in read-only mode.

    The decorated tool must be async and take `ctx: Context` as its first
    argument. In read-only mode a ValueError is raised before the tool body
    runs, so no request reaches Jira.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx_dict = ctx.request_context.lifespan_context
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
            tool_name = func.__name__
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            raise ValueError(f"Cannot {tool_name.replace('_', ' ')} in read-only mode.")

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def require_non_empty(**values: str | None) -> None:
    """Raise ValueError naming the first required argument that is blank."""
    for name, value in values.items():
        if value is None or not str(value).strip():
            raise ValueError(f"{name} argument is required")
