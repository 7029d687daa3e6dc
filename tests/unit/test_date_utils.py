"""Unit tests for date helpers"""

from datetime import date, datetime, timedelta, timezone

from university_erp.utils.date_utils import as_aware, inclusive_days


def test_naive_datetime_taken_as_utc():
    """Test values read back without an offset are treated as UTC"""
    assert as_aware(datetime(2025, 3, 1, 9, 30)) == datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_offset_datetime_converted_to_utc():
    karachi = timezone(timedelta(hours=5))
    converted = as_aware(datetime(2025, 3, 1, 14, 30, tzinfo=karachi))
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 9


def test_inclusive_days():
    assert inclusive_days(date(2025, 3, 10), date(2025, 3, 10)) == 1
    assert inclusive_days(date(2025, 3, 10), date(2025, 3, 12)) == 3
