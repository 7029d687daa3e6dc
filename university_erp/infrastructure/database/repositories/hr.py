"""Data access for employees and leave requests"""

from datetime import date
from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import Employee, LeaveRequest
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate, search_filter


class EmployeeRepository(BaseRepository[Employee]):
    model = Employee

    def code_exists(self, employee_code: str) -> bool:
        return self.exists(employee_code=employee_code)

    def list(
        self,
        offset: int,
        limit: int,
        department: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Employee], int]:
        query = self.db.query(Employee)
        if department:
            query = query.filter(Employee.department == department)
        if status:
            query = query.filter(Employee.status == status)
        if search:
            query = query.filter(
                search_filter(search, Employee.employee_code, Employee.first_name, Employee.last_name, Employee.email)
            )
        return paginate(query.order_by(Employee.employee_code), offset, limit)


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    model = LeaveRequest

    def list(
        self,
        offset: int,
        limit: int,
        employee_id=None,
        status: Optional[str] = None,
        leave_type: Optional[str] = None,
    ) -> Tuple[List[LeaveRequest], int]:
        query = self.db.query(LeaveRequest)
        if employee_id:
            query = query.filter(LeaveRequest.employee_id == employee_id)
        if status:
            query = query.filter(LeaveRequest.status == status)
        if leave_type:
            query = query.filter(LeaveRequest.leave_type == leave_type)
        return paginate(query.order_by(LeaveRequest.start_date.desc()), offset, limit)

    def approved_in_year(self, employee_id, year: int) -> List[LeaveRequest]:
        return (
            self.db.query(LeaveRequest)
            .filter(
                LeaveRequest.employee_id == employee_id,
                LeaveRequest.status == "approved",
                LeaveRequest.start_date >= date(year, 1, 1),
                LeaveRequest.start_date <= date(year, 12, 31),
            )
            .all()
        )
