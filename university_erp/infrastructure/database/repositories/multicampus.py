"""Data access for campus transfers and per-campus headcounts"""

from typing import List, Optional, Tuple

from sqlalchemy import func

from university_erp.infrastructure.database.models import Course, Employee, StaffTransfer, Student, StudentTransfer, User
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class TransferRepository(BaseRepository[StudentTransfer]):
    model = StudentTransfer

    def list(self, offset: int, limit: int, student_id=None, status: Optional[str] = None, campus_id=None) -> Tuple[List[StudentTransfer], int]:
        query = self.db.query(StudentTransfer)
        if student_id:
            query = query.filter(StudentTransfer.student_id == student_id)
        if status:
            query = query.filter(StudentTransfer.status == status)
        if campus_id:
            query = query.filter(
                (StudentTransfer.from_campus_id == campus_id) | (StudentTransfer.to_campus_id == campus_id)
            )
        return paginate(query.order_by(StudentTransfer.created_at.desc()), offset, limit)

    def has_pending(self, student_id) -> bool:
        return self.exists(student_id=student_id, status="pending")


class StaffTransferRepository(BaseRepository[StaffTransfer]):
    model = StaffTransfer

    def list(
        self,
        offset: int,
        limit: int,
        employee_id=None,
        status: Optional[str] = None,
        transfer_type: Optional[str] = None,
        campus_id=None,
    ) -> Tuple[List[StaffTransfer], int]:
        query = self.db.query(StaffTransfer)
        if employee_id:
            query = query.filter(StaffTransfer.employee_id == employee_id)
        if status:
            query = query.filter(StaffTransfer.status == status)
        if transfer_type:
            query = query.filter(StaffTransfer.transfer_type == transfer_type)
        if campus_id:
            query = query.filter(
                (StaffTransfer.from_campus_id == campus_id) | (StaffTransfer.to_campus_id == campus_id)
            )
        return paginate(query.order_by(StaffTransfer.created_at.desc()), offset, limit)

    def has_pending(self, employee_id) -> bool:
        return self.exists(employee_id=employee_id, status="pending")


class CampusReportRepository:
    """Headcounts for a single campus"""

    def __init__(self, db):
        self.db = db

    def count_students(self, campus_id, enrollment_status: Optional[str] = None) -> int:
        query = self.db.query(func.count(Student.id)).filter(Student.campus_id == campus_id)
        if enrollment_status:
            query = query.filter(Student.enrollment_status == enrollment_status)
        return query.scalar() or 0

    def count_staff(self, campus_id, role: Optional[str] = None) -> int:
        query = self.db.query(func.count(Employee.id)).filter(
            Employee.campus_id == campus_id, Employee.status == "active"
        )
        if role:
            query = query.join(User, User.id == Employee.user_id).filter(User.role == role)
        return query.scalar() or 0

    def program_ids(self, campus_id) -> List:
        rows = (
            self.db.query(Student.program_id)
            .filter(Student.campus_id == campus_id, Student.program_id.isnot(None))
            .distinct()
            .all()
        )
        return [row[0] for row in rows]

    def count_courses(self, program_ids) -> int:
        if not program_ids:
            return 0
        return (
            self.db.query(func.count(Course.id))
            .filter(Course.program_id.in_(program_ids), Course.is_active.is_(True))
            .scalar()
            or 0
        )
