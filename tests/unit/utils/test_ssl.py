"""Tests for the SSL utilities module."""

import ssl
from unittest.mock import MagicMock, patch

from requests.adapters import HTTPAdapter
from requests.sessions import Session

from jira_mcp.utils.ssl import SSLIgnoreAdapter, configure_ssl_verification


def test_ssl_ignore_adapter_cert_verify():
    """SSLIgnoreAdapter always passes verify=False to the base adapter."""
    adapter = SSLIgnoreAdapter()
    connection = MagicMock()

    with patch.object(HTTPAdapter, "cert_verify") as mock_super_cert_verify:
        adapter.cert_verify(connection, "https://jira.local", verify=True, cert=None)

    mock_super_cert_verify.assert_called_once_with(
        connection, "https://jira.local", verify=False, cert=None
    )


def test_ssl_ignore_adapter_init_poolmanager():
    adapter = SSLIgnoreAdapter()

    with (
        patch("ssl.create_default_context") as mock_create_context,
        patch("jira_mcp.utils.ssl.PoolManager") as mock_pool_manager_cls,
    ):
        mock_context = mock_create_context.return_value
        adapter.init_poolmanager(5, 10, block=True)

    assert mock_context.check_hostname is False
    assert mock_context.verify_mode == ssl.CERT_NONE
    _, kwargs = mock_pool_manager_cls.call_args
    assert kwargs["num_pools"] == 5
    assert kwargs["maxsize"] == 10
    assert kwargs["block"] is True
    assert kwargs["ssl_context"] is mock_context
    assert adapter.poolmanager is mock_pool_manager_cls.return_value


def test_configure_ssl_verification_enabled():
    session = Session()
    original_adapters = dict(session.adapters)

    configure_ssl_verification("https://jira.local", session, ssl_verify=True)

    assert dict(session.adapters) == original_adapters


def test_configure_ssl_verification_disabled():
    """Both schemes of the Jira host get the SSL-ignoring adapter."""
    session = Session()

    configure_ssl_verification("https://jira.local:8443/jira", session, ssl_verify=False)

    assert isinstance(session.adapters["https://jira.local:8443"], SSLIgnoreAdapter)
    assert isinstance(session.adapters["http://jira.local:8443"], SSLIgnoreAdapter)
    assert session.get_adapter("https://other.example.com") is not session.adapters[
        "https://jira.local:8443"
    ]
