"""Tests for the date helpers."""

import re
from datetime import datetime, timezone

import pytest

from jira_mcp.utils.date import (
    current_jira_timestamp,
    format_display_datetime,
    parse_date,
)


@pytest.mark.parametrize("value", [None, "", 0])
def test_parse_date_empty_input(value):
    assert parse_date(value) is None


def test_parse_date_epoch_as_str():
    assert parse_date("1672531200000") == datetime(2023, 1, 1, tzinfo=timezone.utc)


def test_parse_date_epoch_as_int():
    assert parse_date(1672531200000) == datetime(2023, 1, 1, tzinfo=timezone.utc)


def test_parse_date_jira_timestamp():
    parsed = parse_date("2024-03-04T09:30:00.000+0000")

    assert parsed == datetime(2024, 3, 4, 9, 30, tzinfo=timezone.utc)


def test_parse_date_rfc3339():
    parsed = parse_date("2024-03-04T09:30:00Z")

    assert parsed.utcoffset().total_seconds() == 0
    assert parsed.hour == 9


class TestFormatDisplayDatetime:
    def test_jira_timestamp(self):
        assert (
            format_display_datetime("2024-01-01T10:00:00.000+0000")
            == "2024-01-01 10:00:00"
        )

    def test_empty(self):
        assert format_display_datetime(None) == ""
        assert format_display_datetime("") == ""

    def test_unparseable_value_is_returned_unchanged(self):
        assert format_display_datetime("garbage") == "garbage"


def test_current_jira_timestamp():
    assert re.fullmatch(
        r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.000[+-]\d{4}", current_jira_timestamp()
    )
