"""
Tests for the base models and utility classes.
"""

from typing import Any

import pytest

from jira_mcp.models.base import ApiModel, TimestampMixin
from jira_mcp.models.constants import EMPTY_STRING


class TestApiModel:
    """Tests for the ApiModel base class."""

    def test_base_from_api_response_not_implemented(self):
        with pytest.raises(NotImplementedError):
            ApiModel.from_api_response({})

    def test_base_to_simplified_dict(self):
        """None values are left out of the simplified dict."""

        class SampleModel(ApiModel):
            field1: str = "test"
            field2: int = 123
            field3: str | None = None

            @classmethod
            def from_api_response(cls, data: dict[str, Any], **kwargs):
                return cls()

        result = SampleModel().to_simplified_dict()

        assert result == {"field1": "test", "field2": 123}


class TestTimestampMixin:
    """Tests for the TimestampMixin utility class."""

    @pytest.mark.parametrize(
        "timestamp,expected",
        [
            ("2024-01-01T12:34:56.789+0000", "2024-01-01 12:34:56"),
            ("2024-01-01T12:34:56.789Z", "2024-01-01 12:34:56"),
            ("2024-01-01T12:34:56.789-0500", "2024-01-01 12:34:56"),
        ],
    )
    def test_format_timestamp_valid(self, timestamp, expected):
        assert TimestampMixin.format_timestamp(timestamp) == expected

    def test_format_timestamp_invalid(self):
        assert TimestampMixin.format_timestamp("garbage") == "garbage"

    @pytest.mark.parametrize("timestamp", [None, ""])
    def test_format_timestamp_empty(self, timestamp):
        assert TimestampMixin.format_timestamp(timestamp) == EMPTY_STRING
