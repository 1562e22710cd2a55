"""Test the masking utility functions."""

import logging
from unittest.mock import MagicMock

from jira_mcp.utils.logging import log_config_param, mask_sensitive


class TestMaskSensitive:
    """Test the mask_sensitive function."""

    def test_empty_value(self):
        assert mask_sensitive(None) == "Not Provided"
        assert mask_sensitive("") == "Not Provided"

    def test_short_value(self):
        assert mask_sensitive("abc") == "***"
        assert mask_sensitive("abcdefgh", keep_chars=4) == "********"

    def test_normal_value(self):
        assert mask_sensitive("abcdefghijkl", keep_chars=2) == "ab********kl"
        assert mask_sensitive("abcdefghijkl") == "abcd****ijkl"


class TestLogConfigParam:
    """Test the log_config_param function."""

    def test_normal_param(self):
        mock_logger = MagicMock(spec=logging.Logger)
        log_config_param(mock_logger, "URL", "https://jira.example.com")
        mock_logger.info.assert_called_once_with("Jira URL: https://jira.example.com")

    def test_none_param(self):
        mock_logger = MagicMock(spec=logging.Logger)
        log_config_param(mock_logger, "projects filter", None)
        mock_logger.info.assert_called_once_with("Jira projects filter: Not Provided")

    def test_sensitive_param(self, caplog):
        logger = logging.getLogger("test-masking-logger")
        with caplog.at_level(logging.INFO, logger="test-masking-logger"):
            log_config_param(logger, "API token", "abcdefghijklmnop", sensitive=True)
        assert caplog.records[-1].message == "Jira API token: abcd********mnop"
