"""Unit tests for fee status and receipts"""

import re
import pytest
from datetime import date, datetime
from types import SimpleNamespace
from university_erp.domain.exceptions import ValidationError
from university_erp.domain.finance import (
    ensure_payment_allowed,
    fee_status,
    generate_receipt_number,
    summarize_fees,
)

TODAY = date(2025, 3, 15)


def test_receipt_number_format():
    """Test RCP-<timestamp>-<3 digits>"""
    number = generate_receipt_number(datetime(2025, 3, 15, 10, 30, 0))
    assert re.fullmatch(r"RCP-20250315103000-\d{3}", number)


@pytest.mark.parametrize(
    "due,paid,due_date,expected",
    [
        (1000, 1000, date(2025, 3, 1), "paid"),
        (1000, 400, date(2025, 3, 1), "overdue"),
        (1000, 0, date(2025, 3, 1), "overdue"),
        (1000, 400, date(2025, 4, 1), "partial"),
        (1000, 0, date(2025, 4, 1), "pending"),
        (1000, 0, None, "pending"),
    ],
)
def test_fee_status(due, paid, due_date, expected):
    """Test status derivation; overdue wins over partial"""
    assert fee_status(due, paid, due_date, TODAY) == expected


def test_payment_cannot_exceed_balance():
    """Test overpayment is refused"""
    with pytest.raises(ValidationError):
        ensure_payment_allowed(700, 1000, 400)
    ensure_payment_allowed(600, 1000, 400)


def test_payment_must_be_positive():
    """Test zero payments are refused"""
    with pytest.raises(ValidationError):
        ensure_payment_allowed(0, 1000, 0)


def test_summarize_fees():
    """Test totals and status counts across fees"""
    fees = [
        SimpleNamespace(amount_due=1000, amount_paid=1000, due_date=date(2025, 3, 1)),
        SimpleNamespace(amount_due=500, amount_paid=100, due_date=date(2025, 4, 1)),
    ]
    summary = summarize_fees(fees, TODAY)

    assert summary.total_due == 1500
    assert summary.total_paid == 1100
    assert summary.balance == 400
    assert summary.status == "partial"
    assert summary.by_status == {"paid": 1, "partial": 1}
