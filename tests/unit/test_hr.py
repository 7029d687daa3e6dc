"""Unit tests for leave validation and balances"""

import pytest
from datetime import date
from types import SimpleNamespace
from university_erp.domain.exceptions import ValidationError
from university_erp.domain.hr import ensure_pending, leave_balances, leave_days

TODAY = date(2025, 3, 10)


def test_leave_days_inclusive():
    """Test both start and end dates count"""
    assert leave_days(date(2025, 3, 10), date(2025, 3, 12), TODAY) == 3


def test_leave_cannot_start_in_past():
    """Test retroactive leave is refused"""
    with pytest.raises(ValidationError):
        leave_days(date(2025, 3, 9), date(2025, 3, 12), TODAY)


def test_leave_end_before_start():
    """Test inverted windows are refused"""
    with pytest.raises(ValidationError):
        leave_days(date(2025, 3, 12), date(2025, 3, 11), TODAY)


def test_only_pending_leave_decided():
    """Test decided requests stay decided"""
    with pytest.raises(ValidationError, match="already approved"):
        ensure_pending("approved")


def test_leave_balances():
    """Test approved days reduce the matching quota only"""
    balances = leave_balances(
        [
            SimpleNamespace(leave_type="annual", number_of_days=4),
            SimpleNamespace(leave_type="sick", number_of_days=12),
            SimpleNamespace(leave_type="unpaid", number_of_days=3),
        ]
    )
    by_type = {balance.leave_type: balance for balance in balances}

    assert by_type["annual"].remaining == 11
    assert by_type["sick"].used == 12
    assert by_type["sick"].remaining == 0
    assert by_type["casual"].remaining == 5
    assert "unpaid" not in by_type
