"""Leave request validation and leave balance quotas"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import LeaveBalance
from university_erp.utils.date_utils import inclusive_days

LEAVE_TYPES = ("annual", "sick", "casual", "unpaid")

# Yearly allowance per leave type; unpaid leave has no quota
LEAVE_QUOTAS: Dict[str, int] = {"annual": 15, "sick": 10, "casual": 5}


def leave_days(start_date: date, end_date: date, today: Optional[date] = None) -> int:
    """Validate a leave window and return its inclusive length"""
    today = today or date.today()
    if start_date > end_date:
        raise ValidationError("Start date must be before or equal to end date")
    if start_date < today:
        raise ValidationError("Leave cannot start in the past")
    return inclusive_days(start_date, end_date)


def ensure_pending(status: str) -> None:
    if status != "pending":
        raise ValidationError(f"Leave request is already {status}")


def leave_balances(approved_requests: Iterable) -> List[LeaveBalance]:
    """Remaining quota per leave type given the approved requests"""
    used = {leave_type: 0 for leave_type in LEAVE_QUOTAS}
    for request in approved_requests:
        if request.leave_type in used:
            used[request.leave_type] += request.number_of_days

    return [
        LeaveBalance(
            leave_type=leave_type,
            quota=quota,
            used=used[leave_type],
            remaining=max(0, quota - used[leave_type]),
        )
        for leave_type, quota in LEAVE_QUOTAS.items()
    ]
