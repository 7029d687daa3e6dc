"""Fee status rules and receipt numbering"""

import random
from datetime import date, datetime
from typing import Iterable, Optional

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import FeeSummary

PAYMENT_METHODS = ("cash", "bank_transfer", "card", "online", "cheque")


def generate_receipt_number(moment: Optional[datetime] = None) -> str:
    """RCP-<yyyymmddHHMMSS>-<3 digits>"""
    moment = moment or datetime.now()
    return f"RCP-{moment:%Y%m%d%H%M%S}-{random.randint(0, 999):03d}"


def fee_status(amount_due: float, amount_paid: float, due_date: Optional[date], today: Optional[date] = None) -> str:
    """
    Derive the payment status of a fee.

    A fee with a balance left after its due date is overdue; otherwise it
    is paid, partial or pending depending on what has been paid.
    """
    today = today or date.today()
    balance = amount_due - amount_paid
    if balance <= 0:
        return "paid"
    if due_date is not None and due_date < today:
        return "overdue"
    if amount_paid > 0:
        return "partial"
    return "pending"


def ensure_payment_allowed(amount: float, amount_due: float, amount_paid: float) -> None:
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than 0")
    if amount > amount_due - amount_paid:
        raise ValidationError("Payment amount cannot exceed the remaining balance")


def summarize_fees(fees: Iterable, today: Optional[date] = None) -> FeeSummary:
    """Aggregate a student's fees into totals and an overall status"""
    fees = list(fees)
    total_due = sum(fee.amount_due for fee in fees)
    total_paid = sum(fee.amount_paid for fee in fees)
    balance = total_due - total_paid

    statuses = [fee_status(fee.amount_due, fee.amount_paid, fee.due_date, today) for fee in fees]
    if "overdue" in statuses:
        status = "overdue"
    elif balance <= 0:
        status = "paid"
    elif total_paid > 0:
        status = "partial"
    else:
        status = "pending"

    by_status = {}
    for value in statuses:
        by_status[value] = by_status.get(value, 0) + 1

    return FeeSummary(total_due=total_due, total_paid=total_paid, balance=balance, status=status, by_status=by_status)
