"""Dependency provider for JiraFetcher with context awareness.

Provides get_jira_fetcher for use in tool functions.
"""

from __future__ import annotations

import dataclasses
import hashlib
import logging
from typing import Any

from cachetools import TTLCache
from fastmcp import Context
from fastmcp.server.dependencies import get_http_request
from starlette.requests import Request

from jira_mcp.jira import JiraConfig, JiraFetcher
from jira_mcp.servers.context import MainAppContext
from jira_mcp.utils.logging import mask_sensitive

logger = logging.getLogger("jira-mcp.servers.dependencies")

# Validated per-user fetchers, keyed by a digest of the credentials.
user_fetcher_cache: TTLCache[str, JiraFetcher] = TTLCache(maxsize=100, ttl=300)


def _credentials_cache_key(auth_type: str, token: str, email: str | None) -> str:
    return hashlib.sha256(f"{auth_type}:{email or ''}:{token}".encode()).hexdigest()


def _create_user_config_for_fetcher(
    base_config: JiraConfig,
    auth_type: str,
    credentials: dict[str, Any],
) -> JiraConfig:
    """Create a user-specific Jira configuration.

    Args:
        base_config: The global JiraConfig to clone (URL, SSL and proxy settings).
        auth_type: The user authentication type ('pat' or 'basic').
        credentials: Dictionary with the token and, for basic auth, the email.

    Returns:
        JiraConfig with user-specific credentials.

    Raises:
        ValueError: If required credentials are missing or auth_type is unsupported.
    """
    if auth_type not in ["pat", "basic"]:
        raise ValueError(
            f"Unsupported auth_type '{auth_type}' for user-specific config creation. Expected 'pat' or 'basic'."
        )

    token = credentials.get("token")
    if not token:
        raise ValueError(f"Token missing in credentials for user auth_type '{auth_type}'")

    if auth_type == "pat":
        user_args: dict[str, Any] = {
            "auth_type": "token",
            "personal_token": token,
            "username": None,
            "api_token": None,
        }
    else:
        email = credentials.get("email")
        if not email:
            raise ValueError("Email missing in credentials for user auth_type 'basic'")
        user_args = {
            "auth_type": "basic",
            "personal_token": None,
            "username": email,
            "api_token": token,
        }

    return dataclasses.replace(base_config, **user_args)


def _get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


async def get_jira_fetcher(ctx: Context) -> JiraFetcher:
    """Returns a JiraFetcher instance appropriate for the current request context.

    HTTP requests carrying user credentials (set by UserTokenMiddleware) get a
    fetcher for that user, validated once against ``/myself`` and cached.
    Everything else uses the global configuration.

    Args:
        ctx: The FastMCP context.

    Returns:
        JiraFetcher instance for the current user or global config.

    Raises:
        ValueError: If configuration or credentials are invalid.
    """
    try:
        request: Request = get_http_request()
        if getattr(request.state, "jira_fetcher", None):
            logger.debug("get_jira_fetcher: Returning JiraFetcher from request.state.")
            return request.state.jira_fetcher

        user_auth_type = getattr(request.state, "user_atlassian_auth_type", None)
        if user_auth_type in ["pat", "basic"]:
            user_token = getattr(request.state, "user_atlassian_token", None)
            user_email = getattr(request.state, "user_atlassian_email", None)
            if not user_token:
                raise ValueError("User Atlassian token found in state but is empty.")

            cache_key = _credentials_cache_key(user_auth_type, user_token, user_email)
            cached = user_fetcher_cache.get(cache_key)
            if cached is not None:
                logger.debug("get_jira_fetcher: Using cached user-specific JiraFetcher.")
                request.state.jira_fetcher = cached
                return cached

            app_lifespan_ctx = _get_app_context(ctx)
            if not app_lifespan_ctx or not app_lifespan_ctx.full_jira_config:
                raise ValueError(
                    "Jira global configuration (URL, SSL) is not available from lifespan context."
                )
            logger.info(
                f"Creating user-specific JiraFetcher (type: {user_auth_type}) for user "
                f"{user_email or 'unknown'} (token {mask_sensitive(user_token)})"
            )
            user_specific_config = _create_user_config_for_fetcher(
                base_config=app_lifespan_ctx.full_jira_config,
                auth_type=user_auth_type,
                credentials={"token": user_token, "email": user_email},
            )
            try:
                user_jira_fetcher = JiraFetcher(config=user_specific_config)
                current_user_id = user_jira_fetcher.get_current_user_account_id()
                logger.debug(
                    f"get_jira_fetcher: Validated Jira token for user ID: {current_user_id}"
                )
            except Exception as e:
                logger.error(
                    f"get_jira_fetcher: Failed to create/validate user-specific JiraFetcher: {e}",
                    exc_info=True,
                )
                raise ValueError(f"Invalid user Jira token or configuration: {e}") from e

            user_fetcher_cache[cache_key] = user_jira_fetcher
            request.state.jira_fetcher = user_jira_fetcher
            return user_jira_fetcher

        logger.debug(
            f"get_jira_fetcher: No user-specific credentials (auth type: {user_auth_type}). "
            "Will use global fallback."
        )
    except RuntimeError:
        logger.debug(
            "Not in an HTTP request context. Attempting global JiraFetcher for non-HTTP."
        )

    app_lifespan_ctx_global = _get_app_context(ctx)
    if app_lifespan_ctx_global and app_lifespan_ctx_global.full_jira_config:
        logger.debug(
            "get_jira_fetcher: Using global JiraFetcher from lifespan_context. "
            f"Global config auth_type: {app_lifespan_ctx_global.full_jira_config.auth_type}"
        )
        return JiraFetcher(config=app_lifespan_ctx_global.full_jira_config)
    logger.error("Jira configuration could not be resolved.")
    raise ValueError(
        "Jira client (fetcher) not available. Ensure server is configured correctly."
    )
