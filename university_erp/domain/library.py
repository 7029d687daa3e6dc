"""Overdue fine and circulation rules for the library"""

import math
from datetime import datetime, timedelta
from typing import Optional

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import FineAssessment

SECONDS_PER_DAY = 24 * 60 * 60


def calculate_fine(due_date: datetime, return_date: datetime, fine_per_day: int = 10) -> FineAssessment:
    """
    Assess a return against its due date.

    Any part of a day past the due date counts as a full day.

    Args:
        due_date: When the book was due back
        return_date: When the book came back
        fine_per_day: Fine charged per overdue day

    Returns:
        FineAssessment with the resulting borrowing status
    """
    days_overdue = 0
    if return_date > due_date:
        days_overdue = math.ceil((return_date - due_date).total_seconds() / SECONDS_PER_DAY)

    fine_amount = days_overdue * fine_per_day
    return FineAssessment(
        days_overdue=days_overdue,
        fine_amount=fine_amount,
        status="overdue" if days_overdue > 0 else "returned",
        fine_paid=fine_amount == 0,
    )


def ensure_can_return(status: str, return_date: Optional[datetime]) -> None:
    if status == "returned" or return_date is not None:
        raise ValidationError("Book already returned")


def ensure_can_borrow(active_count: int, has_overdue: bool, max_active: int = 5) -> None:
    """Reject a new borrowing for users with overdue books or a full quota"""
    if has_overdue:
        raise ValidationError("Cannot borrow while an overdue book is outstanding")
    if active_count >= max_active:
        raise ValidationError(f"Borrowing limit of {max_active} active books reached")


def next_due_date(
    status: str,
    renewed_count: int,
    current_due: datetime,
    has_pending_reservation: bool,
    requested_due: Optional[datetime] = None,
    max_renewals: int = 2,
    renewal_days: int = 14,
) -> datetime:
    """
    Validate a renewal and return the new due date.

    Raises:
        ValidationError: When the renewal is not allowed
    """
    if status != "borrowed":
        raise ValidationError("Only borrowed books can be renewed")
    if renewed_count >= max_renewals:
        raise ValidationError("Maximum renewal limit reached")
    if has_pending_reservation:
        raise ValidationError("Book has a pending reservation and cannot be renewed")

    if requested_due is None:
        return current_due + timedelta(days=renewal_days)
    if requested_due <= current_due:
        raise ValidationError("New due date must be after the current due date")
    return requested_due
