"""Main FastMCP server setup for the Jira integration."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse

from jira_mcp.jira.config import JiraConfig
from jira_mcp.prompts import register_prompts
from jira_mcp.utils.environment import is_jira_configured
from jira_mcp.utils.io import is_read_only_mode
from jira_mcp.utils.logging import mask_sensitive
from jira_mcp.utils.tools import get_enabled_tools, should_include_tool

from .context import MainAppContext
from .jira import jira_mcp

logger = logging.getLogger("jira-mcp.servers.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Jira MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    loaded_jira_config: JiraConfig | None = None
    if is_jira_configured():
        try:
            jira_config = JiraConfig.from_env()
            if jira_config.is_auth_configured():
                loaded_jira_config = jira_config
                logger.info(
                    "Jira configuration loaded and authentication is configured."
                )
            else:
                logger.warning(
                    "Jira URL found, but authentication is not fully configured. Jira tools will be unavailable."
                )
        except ValueError as e:
            logger.error(f"Failed to load Jira configuration: {e}", exc_info=True)
    else:
        logger.warning("Jira is not configured. Jira tools will be unavailable.")

    app_context = MainAppContext(
        full_jira_config=loaded_jira_config,
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
    yield {"app_lifespan_context": app_context}
    logger.info("Jira MCP server lifespan shutting down.")


class JiraMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class for the Jira integration with tool filtering."""

    async def _mcp_list_tools(self) -> list[MCPTool]:
        # Filter tools by enabled_tools, read-only mode and Jira configuration from the lifespan context.
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            logger.warning("Lifespan context not available during _mcp_list_tools call.")
            return []

        lifespan_ctx_dict = req_context.lifespan_context
        app_lifespan_state: MainAppContext | None = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )
        read_only = app_lifespan_state.read_only if app_lifespan_state else False
        enabled_tools_filter = (
            app_lifespan_state.enabled_tools if app_lifespan_state else None
        )
        logger.debug(
            f"_mcp_list_tools: read_only={read_only}, enabled_tools_filter={enabled_tools_filter}"
        )

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        logger.debug(
            f"Aggregated {len(all_tools)} tools before filtering: {list(all_tools.keys())}"
        )

        filtered_tools: list[MCPTool] = []
        for registered_name, tool_obj in all_tools.items():
            tool_tags = tool_obj.tags

            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue

            if read_only and "write" in tool_tags:
                logger.debug(
                    f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
                )
                continue

            if "jira" in tool_tags:
                if app_lifespan_state is None:
                    logger.warning(
                        f"Excluding tool '{registered_name}' as application context is unavailable to verify Jira configuration."
                    )
                    continue
                if not app_lifespan_state.full_jira_config:
                    logger.debug(
                        f"Excluding Jira tool '{registered_name}' as Jira configuration/authentication is incomplete."
                    )
                    continue

            filtered_tools.append(tool_obj.to_mcp_tool(name=registered_name))

        logger.debug(
            f"_mcp_list_tools: Total tools after filtering: {len(filtered_tools)}"
        )
        return filtered_tools

    def http_app(
        self,
        path: str | None = None,
        middleware: list[Middleware] | None = None,
        transport: Literal["streamable-http", "sse"] = "streamable-http",
    ) -> "Starlette":
        user_token_mw = Middleware(UserTokenMiddleware, mcp_server_ref=self)
        final_middleware_list = [user_token_mw]
        if middleware:
            final_middleware_list.extend(middleware)
        return super().http_app(
            path=path, middleware=final_middleware_list, transport=transport
        )


def parse_basic_credentials(encoded: str) -> tuple[str, str] | None:
    """Decode a Basic auth value into (email, api_token); None when malformed."""
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    email, sep, token = decoded.partition(":")
    if not sep or not email or not token:
        return None
    return email, token


class UserTokenMiddleware(BaseHTTPMiddleware):
    """Middleware to extract Jira user credentials from Authorization headers.

    Supported schemes are ``Token <PAT>`` (Server/Data Center) and
    ``Basic <base64(email:api_token)>`` (Cloud). Requests without an
    Authorization header fall back to the server's global configuration.
    """

    def __init__(self, app: Any, mcp_server_ref: Optional["JiraMCP"] = None) -> None:
        super().__init__(app)
        self.mcp_server_ref = mcp_server_ref
        if not self.mcp_server_ref:
            logger.warning(
                "UserTokenMiddleware initialized without mcp_server_ref. Path matching for MCP endpoint might fail if settings are needed."
            )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> JSONResponse:
        mcp_server_instance = self.mcp_server_ref
        if mcp_server_instance is None:
            return await call_next(request)

        mcp_path = mcp_server_instance.settings.streamable_http_path.rstrip("/")
        request_path = request.url.path.rstrip("/")
        if request_path == mcp_path and request.method == "POST":
            auth_header = request.headers.get("Authorization")
            logger.debug(
                f"UserTokenMiddleware: Path='{request.url.path}', AuthHeader='{mask_sensitive(auth_header)}'"
            )
            if auth_header and auth_header.startswith("Token "):
                token = auth_header.split(" ", 1)[1].strip()
                if not token:
                    return JSONResponse(
                        {"error": "Unauthorized: Empty Token (PAT)"},
                        status_code=401,
                    )
                request.state.user_atlassian_token = token
                request.state.user_atlassian_auth_type = "pat"
                request.state.user_atlassian_email = None
                logger.debug("UserTokenMiddleware.dispatch: Set request.state for PAT auth.")
            elif auth_header and auth_header.startswith("Basic "):
                credentials = parse_basic_credentials(
                    auth_header.split(" ", 1)[1].strip()
                )
                if credentials is None:
                    return JSONResponse(
                        {"error": "Unauthorized: Malformed Basic credentials"},
                        status_code=401,
                    )
                email, token = credentials
                request.state.user_atlassian_token = token
                request.state.user_atlassian_auth_type = "basic"
                request.state.user_atlassian_email = email
                logger.debug(
                    f"UserTokenMiddleware.dispatch: Set request.state for basic auth ({email})."
                )
            elif auth_header:
                logger.warning(
                    f"Unsupported Authorization type for {request.url.path}: {auth_header.split(' ', 1)[0] if ' ' in auth_header else 'UnknownType'}"
                )
                return JSONResponse(
                    {
                        "error": "Unauthorized: Only 'Token <PAT>' or 'Basic <credentials>' types are supported."
                    },
                    status_code=401,
                )
            else:
                logger.debug(
                    f"No Authorization header provided for {request.url.path}. Will proceed with global server configuration."
                )
        return await call_next(request)


main_mcp = JiraMCP(name="Jira MCP", lifespan=main_lifespan)
main_mcp.mount("jira", jira_mcp)
register_prompts(main_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
