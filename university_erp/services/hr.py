"""Employees and leave management"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.domain.hr import ensure_pending, leave_balances, leave_days
from university_erp.domain.models import LeaveBalance
from university_erp.infrastructure.database.models import Employee, LeaveRequest
from university_erp.infrastructure.database.repositories.hr import EmployeeRepository, LeaveRequestRepository
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class HRService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.employees = EmployeeRepository(db)
        self.leave_requests = LeaveRequestRepository(db)

    # Employees

    def list_employees(self, offset: int, limit: int, **filters) -> Tuple[List[Employee], int]:
        return self.employees.list(offset, limit, **filters)

    def get_employee(self, employee_id) -> Employee:
        return self.require(self.employees.get(employee_id), "Employee")

    def create_employee(self, data) -> Employee:
        if self.employees.code_exists(data.employee_code):
            raise ConflictError("Employee with this ID already exists")
        with self.transaction(ConflictError("Employee with this ID already exists")):
            employee = self.employees.create(**data.model_dump())
        logger.info("Employee created", extra={"employee_id": str(employee.id), "code": employee.employee_code})
        return employee

    def update_employee(self, employee_id, data) -> Employee:
        employee = self.get_employee(employee_id)
        with self.transaction():
            self.employees.update(employee, **data.model_dump(exclude_unset=True))
        return employee

    # Leave

    def list_leave_requests(self, offset: int, limit: int, **filters) -> Tuple[List[LeaveRequest], int]:
        return self.leave_requests.list(offset, limit, **filters)

    def get_leave_request(self, request_id) -> LeaveRequest:
        return self.require(self.leave_requests.get(request_id), "Leave request")

    def request_leave(self, data) -> LeaveRequest:
        self.get_employee(data.employee_id)
        days = leave_days(data.start_date, data.end_date)
        with self.transaction():
            request = self.leave_requests.create(
                employee_id=data.employee_id,
                leave_type=data.leave_type,
                start_date=data.start_date,
                end_date=data.end_date,
                number_of_days=days,
                reason=data.reason,
                status="pending",
            )
        logger.info("Leave requested", extra={"leave_request_id": str(request.id), "days": days})
        return request

    def decide_leave(self, request_id, status: str, actor, rejection_reason: Optional[str] = None) -> LeaveRequest:
        request = self.get_leave_request(request_id)
        ensure_pending(request.status)
        if status == "rejected" and not rejection_reason:
            raise ValidationError("Rejection reason is required")

        with self.transaction():
            self.leave_requests.update(
                request,
                status=status,
                approved_by=as_uuid(actor),
                approved_at=utcnow(),
                rejection_reason=rejection_reason if status == "rejected" else None,
            )
        logger.info("Leave request decided", extra={"leave_request_id": str(request.id), "status": status})
        return request

    def leave_balance(self, employee_id, year: Optional[int] = None) -> Tuple[int, List[LeaveBalance]]:
        self.get_employee(employee_id)
        year = year or date.today().year
        return year, leave_balances(self.leave_requests.approved_in_year(employee_id, year))
