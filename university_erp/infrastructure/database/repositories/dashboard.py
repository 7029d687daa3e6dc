"""Aggregate counts for the dashboard"""

from datetime import date, datetime

from sqlalchemy import func

from university_erp.infrastructure.database.models import (
    AdmissionApplication,
    Book,
    BookBorrowing,
    CertificateRequest,
    Employee,
    Exam,
    LeaveRequest,
    Payment,
    Program,
    Student,
)
from university_erp.infrastructure.database.repositories.library import overdue_clause


class DashboardRepository:
    """Read-only COUNT/SUM queries"""

    def __init__(self, db):
        self.db = db

    def count_students(self) -> int:
        return self.db.query(func.count(Student.id)).scalar() or 0

    def count_employees(self) -> int:
        return self.db.query(func.count(Employee.id)).scalar() or 0

    def count_pending_applications(self) -> int:
        return (
            self.db.query(func.count(AdmissionApplication.id))
            .filter(AdmissionApplication.status.in_(("submitted", "under_review")))
            .scalar()
            or 0
        )

    def count_upcoming_exams(self, today: date) -> int:
        return self.db.query(func.count(Exam.id)).filter(Exam.exam_date >= today).scalar() or 0

    def count_active_programs(self) -> int:
        return self.db.query(func.count(Program.id)).filter(Program.is_active.is_(True)).scalar() or 0

    def count_books(self) -> int:
        return self.db.query(func.count(Book.id)).scalar() or 0

    def count_overdue_borrowings(self, now: datetime) -> int:
        return (
            self.db.query(func.count(BookBorrowing.id))
            .filter(overdue_clause(now))
            .scalar()
            or 0
        )

    def count_pending_leave_requests(self) -> int:
        return self.db.query(func.count(LeaveRequest.id)).filter(LeaveRequest.status == "pending").scalar() or 0

    def count_pending_certificate_requests(self) -> int:
        return (
            self.db.query(func.count(CertificateRequest.id))
            .filter(CertificateRequest.status == "pending")
            .scalar()
            or 0
        )

    def total_payments_amount(self) -> int:
        return self.db.query(func.coalesce(func.sum(Payment.amount), 0)).scalar() or 0
