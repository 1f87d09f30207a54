"""Unit tests for ISO-8601 date-time parsing."""

from datetime import datetime, timedelta, timezone

import pytest

from xform_submissions.utils.exceptions import MalformedDateError, ValidationError
from xform_submissions.utils.iso8601 import parse_datetime


class TestParseDatetime:
    """Test parse_datetime accepted and rejected values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2020-01-01T00:00:00.000+00:00", datetime(2020, 1, 1, tzinfo=timezone.utc)),
            ("2020-01-01T00:00:00Z", datetime(2020, 1, 1, tzinfo=timezone.utc)),
            (
                "2020-06-15T12:30:45.123-05:00",
                datetime(2020, 6, 15, 12, 30, 45, 123000, tzinfo=timezone(timedelta(hours=-5))),
            ),
            (
                "2020-06-15T12:30:45+0130",
                datetime(2020, 6, 15, 12, 30, 45, tzinfo=timezone(timedelta(hours=1, minutes=30))),
            ),
        ],
    )
    def test_valid_values(self, value, expected):
        parsed = parse_datetime(value)

        assert parsed == expected
        assert parsed.utcoffset() == expected.utcoffset()

    def test_surrounding_whitespace(self):
        assert parse_datetime(" 2020-01-01T00:00:00Z\n") == datetime(2020, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "yesterday", "2020-13-01T00:00:00Z", "01/01/2020"])
    def test_malformed_values(self, value):
        with pytest.raises(MalformedDateError) as exc_info:
            parse_datetime(value)

        assert exc_info.value.value == value

    def test_missing_offset_is_rejected(self):
        with pytest.raises(MalformedDateError) as exc_info:
            parse_datetime("2020-01-01T00:00:00")

        assert "missing UTC offset" in str(exc_info.value)

    def test_malformed_date_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_datetime("not a date")
