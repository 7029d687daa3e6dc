"""Headline counts across all modules"""

from datetime import date
from typing import Dict

from university_erp.infrastructure.database.repositories.dashboard import DashboardRepository
from university_erp.services.base import BaseService
from university_erp.utils.date_utils import utcnow


class DashboardService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.stats = DashboardRepository(db)

    def get_stats(self) -> Dict[str, float]:
        """Each figure is one aggregate query; any failure fails the whole call"""
        today = date.today()
        return {
            "total_students": self.stats.count_students(),
            "total_employees": self.stats.count_employees(),
            "pending_applications": self.stats.count_pending_applications(),
            "upcoming_exams": self.stats.count_upcoming_exams(today),
            "active_programs": self.stats.count_active_programs(),
            "total_books": self.stats.count_books(),
            "overdue_borrowings": self.stats.count_overdue_borrowings(utcnow()),
            "pending_leave_requests": self.stats.count_pending_leave_requests(),
            "pending_certificate_requests": self.stats.count_pending_certificate_requests(),
            "total_payments_amount": self.stats.total_payments_amount(),
        }
