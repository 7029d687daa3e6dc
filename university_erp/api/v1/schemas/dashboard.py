"""Schema for dashboard statistics"""

from university_erp.api.v1.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_students: int
    total_employees: int
    pending_applications: int
    upcoming_exams: int
    active_programs: int
    total_books: int
    overdue_borrowings: int
    pending_leave_requests: int
    pending_certificate_requests: int
    total_payments_amount: float
