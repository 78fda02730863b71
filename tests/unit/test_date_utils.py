"""Tests for date utility functions."""
from datetime import date, datetime, timedelta, timezone

import pytest

from src.utils.date_utils import (
    format_registration_date,
    iso_date,
    parse_iso_timestamp,
    to_iso_timestamp,
)


class TestFormatRegistrationDate:
    """Tests for the display format of registration dates."""

    def test_morning(self):
        """Morning times use AM and an unpadded day."""
        moment = datetime(2024, 1, 1, 10, 0)
        assert format_registration_date(moment) == "Jan 1, 2024, 10:00 AM"

    def test_single_digit_hour_is_padded(self):
        """Hours are always two digits."""
        moment = datetime(2024, 3, 15, 9, 5)
        assert format_registration_date(moment) == "Mar 15, 2024, 09:05 AM"

    def test_afternoon(self):
        """Afternoon times use the 12-hour clock with PM."""
        moment = datetime(2024, 12, 31, 15, 30)
        assert format_registration_date(moment) == "Dec 31, 2024, 03:30 PM"

    def test_noon(self):
        """Noon is 12 PM."""
        moment = datetime(2024, 6, 1, 12, 0)
        assert format_registration_date(moment) == "Jun 1, 2024, 12:00 PM"


class TestIsoTimestamp:
    """Tests for machine-sortable timestamps."""

    def test_utc_with_milliseconds_and_z(self):
        """Timestamps are UTC, millisecond precision, 'Z' suffix."""
        moment = datetime(2024, 1, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert to_iso_timestamp(moment) == "2024-01-01T10:00:00.123Z"

    def test_converts_offset_to_utc(self):
        """Aware datetimes in other zones are converted to UTC."""
        taipei = timezone(timedelta(hours=8))
        moment = datetime(2024, 1, 1, 8, 0, tzinfo=taipei)
        assert to_iso_timestamp(moment) == "2024-01-01T00:00:00.000Z"

    def test_parse_accepts_z_suffix(self):
        """Parsing understands the 'Z' suffix."""
        parsed = parse_iso_timestamp("2024-01-01T10:00:00.000Z")
        assert parsed == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_parse_invalid_raises(self):
        """Garbage raises ValueError."""
        with pytest.raises(ValueError):
            parse_iso_timestamp("not a timestamp")

    def test_parse_non_string_raises(self):
        """Non-strings raise ValueError."""
        with pytest.raises(ValueError):
            parse_iso_timestamp(None)


class TestIsoDate:
    """Tests for iso_date."""

    def test_given_date(self):
        """Dates render as YYYY-MM-DD."""
        assert iso_date(date(2024, 5, 6)) == "2024-05-06"

    def test_defaults_to_today(self):
        """Without an argument the current local date is used."""
        assert iso_date() == datetime.now().astimezone().date().isoformat()
