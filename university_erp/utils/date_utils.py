"""Date manipulation utilities"""

import calendar
import re
from datetime import date, datetime, timezone
from typing import Tuple

from university_erp.domain.exceptions import ValidationError

PAYROLL_PERIOD_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_payroll_period(period: str) -> Tuple[int, int]:
    """Split a YYYY-MM payroll period into (year, month)"""
    if not period or not PAYROLL_PERIOD_PATTERN.match(period):
        raise ValidationError("Payroll period must be in YYYY-MM format")
    year, month = (int(part) for part in period.split("-"))
    if not 1 <= month <= 12:
        raise ValidationError("Payroll period must be in YYYY-MM format")
    return year, month


def days_in_period(period: str) -> int:
    """Number of calendar days in a YYYY-MM payroll period"""
    year, month = parse_payroll_period(period)
    return calendar.monthrange(year, month)[1]


def inclusive_days(start: date, end: date) -> int:
    """Count days from start to end, both included"""
    return (end - start).days + 1


def as_aware(value: datetime) -> datetime:
    """Normalise to UTC; naive datetimes (e.g. read back from SQLite) are taken as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
