import asyncio
import logging
import os
import sys

import click
from dotenv import load_dotenv

from jira_mcp.utils.io import is_env_truthy
from jira_mcp.utils.logging import log_config_param, setup_logging

__version__ = "0.3.0"

# Initialize logging with appropriate level
logging_level = logging.WARNING
if is_env_truthy("MCP_VERBOSE"):
    logging_level = logging.DEBUG

logger = setup_logging(logging_level)


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport (default: 0.0.0.0)",
)
@click.option(
    "--path",
    default="/mcp",
    help="Path for Streamable HTTP transport (e.g., /mcp).",
)
@click.option(
    "--jira-url",
    help="Jira URL (e.g., https://your-domain.atlassian.net or https://jira.your-company.com)",
)
@click.option("--jira-username", help="Jira username/email")
@click.option("--jira-token", help="Jira API token")
@click.option(
    "--jira-personal-token",
    help="Jira Personal Access Token (for Jira Server/Data Center)",
)
@click.option(
    "--jira-ssl-verify/--no-jira-ssl-verify",
    default=True,
    help="Verify SSL certificates for Jira Server/Data Center (default: verify)",
)
@click.option(
    "--jira-projects-filter",
    help="Comma-separated list of Jira project keys to filter search results",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (enables all if not specified)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    jira_url: str | None,
    jira_username: str | None,
    jira_token: str | None,
    jira_personal_token: str | None,
    jira_ssl_verify: bool,
    jira_projects_filter: str | None,
    read_only: bool,
    enabled_tools: str | None,
) -> None:
    """Jira MCP Server - Jira issues, sprints and development information for MCP

    Supports both Atlassian Cloud and Jira Server/Data Center deployments.
    Authentication methods supported:
    - Username and API token (Cloud, or basic auth on Server/Data Center)
    - Personal Access Token (Server/Data Center)
    """
    if verbose == 1:
        current_logging_level = logging.INFO
    elif verbose >= 2:  # -vv or more
        current_logging_level = logging.DEBUG
    else:
        if is_env_truthy("MCP_VERY_VERBOSE"):
            current_logging_level = logging.DEBUG
        elif is_env_truthy("MCP_VERBOSE"):
            current_logging_level = logging.INFO
        else:
            current_logging_level = logging.WARNING

    global logger
    logger = setup_logging(current_logging_level)
    logger.debug(f"Logging level set to: {logging.getLevelName(current_logging_level)}")

    def was_option_provided(ctx: click.Context, param_name: str) -> bool:
        return ctx.get_parameter_source(param_name) not in (
            click.core.ParameterSource.DEFAULT_MAP,
            click.core.ParameterSource.DEFAULT,
        )

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        logger.debug(
            "Attempting to load environment from default .env file if it exists"
        )
        load_dotenv(override=True)

    click_ctx = click.get_current_context(silent=True)

    # Transport precedence
    final_transport = os.getenv("TRANSPORT", "stdio").lower()
    if click_ctx and was_option_provided(click_ctx, "transport"):
        final_transport = transport
    if final_transport not in ["stdio", "sse", "streamable-http"]:
        logger.warning(
            f"Invalid transport '{final_transport}' from env/default, using 'stdio'."
        )
        final_transport = "stdio"

    # Port precedence
    final_port = 8000
    env_port = os.getenv("PORT")
    if env_port and env_port.isdigit():
        final_port = int(env_port)
    if click_ctx and was_option_provided(click_ctx, "port"):
        final_port = port

    # Host precedence
    final_host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    if click_ctx and was_option_provided(click_ctx, "host"):
        final_host = host

    # Path precedence
    final_path: str | None = os.getenv("STREAMABLE_HTTP_PATH", None)
    if click_ctx and was_option_provided(click_ctx, "path"):
        final_path = path

    # Set env vars for downstream config
    env_overrides = {
        "enabled_tools": "ENABLED_TOOLS",
        "jira_url": "JIRA_URL",
        "jira_username": "JIRA_USERNAME",
        "jira_token": "JIRA_API_TOKEN",
        "jira_personal_token": "JIRA_PERSONAL_TOKEN",
        "jira_projects_filter": "JIRA_PROJECTS_FILTER",
    }
    option_values = {
        "enabled_tools": enabled_tools,
        "jira_url": jira_url,
        "jira_username": jira_username,
        "jira_token": jira_token,
        "jira_personal_token": jira_personal_token,
        "jira_projects_filter": jira_projects_filter,
    }
    for option_name, env_name in env_overrides.items():
        value = option_values[option_name]
        if click_ctx and was_option_provided(click_ctx, option_name) and value:
            os.environ[env_name] = value
    if click_ctx and was_option_provided(click_ctx, "read_only"):
        os.environ["READ_ONLY_MODE"] = str(read_only).lower()
    if click_ctx and was_option_provided(click_ctx, "jira_ssl_verify"):
        os.environ["JIRA_SSL_VERIFY"] = str(jira_ssl_verify).lower()

    log_config_param(logger, "URL", os.getenv("JIRA_URL"))
    log_config_param(logger, "username", os.getenv("JIRA_USERNAME"))
    log_config_param(logger, "API token", os.getenv("JIRA_API_TOKEN"), sensitive=True)
    log_config_param(
        logger, "personal token", os.getenv("JIRA_PERSONAL_TOKEN"), sensitive=True
    )
    log_config_param(logger, "projects filter", os.getenv("JIRA_PROJECTS_FILTER"))

    from jira_mcp.servers import main_mcp

    run_kwargs: dict[str, str | int] = {"transport": final_transport}

    if final_transport == "stdio":
        logger.info("Starting server with STDIO transport.")
    else:
        run_kwargs["host"] = final_host
        run_kwargs["port"] = final_port
        run_kwargs["log_level"] = logging.getLevelName(current_logging_level).lower()

        if final_path is not None:
            run_kwargs["path"] = final_path

        log_display_path = final_path
        if log_display_path is None:
            if final_transport == "sse":
                log_display_path = main_mcp.settings.sse_path or "/sse"
            else:
                log_display_path = main_mcp.settings.streamable_http_path or "/mcp"

        logger.info(
            f"Starting server with {final_transport.upper()} transport on http://{final_host}:{final_port}{log_display_path}"
        )

    try:
        asyncio.run(main_mcp.run_async(**run_kwargs))
    except KeyboardInterrupt:
        logger.info("Server stopped.")
        sys.exit(0)


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
