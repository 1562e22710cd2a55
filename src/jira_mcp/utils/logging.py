"""Logging helpers for the Jira MCP server.

All output goes to a single stream handler on stderr so that the stdio
transport keeps stdout free for protocol traffic.
"""

import logging

APP_LOGGER_NAME = "jira-mcp"

# Third-party loggers that should follow the application verbosity
_MANAGED_LOGGERS = (APP_LOGGER_NAME, "mcp.server", "mcp.server.lowlevel.server")


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure root and application logging.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The application logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    root_logger.addHandler(handler)

    for logger_name in _MANAGED_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)

    return logging.getLogger(APP_LOGGER_NAME)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret for logging, keeping a few characters at each end.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        The masked string, or "Not Provided" for empty values
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    hidden = "*" * (len(value) - keep_chars * 2)
    return f"{value[:keep_chars]}{hidden}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Log one configuration parameter at INFO, masking it if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"Jira {param}: {display_value}")
