"""Data access for fee structures, student fees and payments"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func

from university_erp.infrastructure.database.models import FeeStructure, Payment, StudentFee
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class FeeStructureRepository(BaseRepository[FeeStructure]):
    model = FeeStructure

    def list(
        self,
        offset: int,
        limit: int,
        program_id=None,
        semester: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[FeeStructure], int]:
        query = self.db.query(FeeStructure)
        if program_id:
            query = query.filter(FeeStructure.program_id == program_id)
        if semester:
            query = query.filter(FeeStructure.semester == semester)
        if is_active is not None:
            query = query.filter(FeeStructure.is_active.is_(is_active))
        return paginate(query.order_by(FeeStructure.created_at.desc()), offset, limit)


class StudentFeeRepository(BaseRepository[StudentFee]):
    model = StudentFee

    def list(
        self,
        offset: int,
        limit: int,
        student_id=None,
        semester: Optional[str] = None,
        payment_status: Optional[str] = None,
    ) -> Tuple[List[StudentFee], int]:
        query = self.db.query(StudentFee)
        if student_id:
            query = query.filter(StudentFee.student_id == student_id)
        if semester:
            query = query.filter(StudentFee.semester == semester)
        if payment_status:
            query = query.filter(StudentFee.payment_status == payment_status)
        return paginate(query.order_by(StudentFee.due_date), offset, limit)

    def for_student(self, student_id, semester: Optional[str] = None) -> List[StudentFee]:
        query = self.db.query(StudentFee).filter(StudentFee.student_id == student_id)
        if semester:
            query = query.filter(StudentFee.semester == semester)
        return query.all()

    def for_semester(self, semester: Optional[str] = None) -> List[StudentFee]:
        query = self.db.query(StudentFee)
        if semester:
            query = query.filter(StudentFee.semester == semester)
        return query.all()


class PaymentRepository(BaseRepository[Payment]):
    model = Payment

    def receipt_exists(self, receipt_number: str) -> bool:
        return self.exists(receipt_number=receipt_number)

    def list(
        self,
        offset: int,
        limit: int,
        student_id=None,
        student_fee_id=None,
        payment_method: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[Payment], int]:
        query = self._filtered(student_id, student_fee_id, payment_method, start_date, end_date)
        return paginate(query.order_by(Payment.payment_date.desc()), offset, limit)

    def for_fees(self, fee_ids: List) -> List[Payment]:
        if not fee_ids:
            return []
        return self.db.query(Payment).filter(Payment.student_fee_id.in_(fee_ids)).order_by(Payment.payment_date).all()

    def method_breakdown(self, start_date: Optional[date], end_date: Optional[date]) -> Dict[str, Dict[str, float]]:
        """Amount and count of payments per method in a date range"""
        query = self.db.query(Payment.payment_method, func.sum(Payment.amount), func.count(Payment.id))
        if start_date:
            query = query.filter(Payment.payment_date >= start_date)
        if end_date:
            query = query.filter(Payment.payment_date <= end_date)
        rows = query.group_by(Payment.payment_method).all()
        return {method: {"amount": amount or 0, "count": count} for method, amount, count in rows}

    def _filtered(self, student_id, student_fee_id, payment_method, start_date, end_date):
        query = self.db.query(Payment)
        if student_id:
            query = query.filter(Payment.student_id == student_id)
        if student_fee_id:
            query = query.filter(Payment.student_fee_id == student_fee_id)
        if payment_method:
            query = query.filter(Payment.payment_method == payment_method)
        if start_date:
            query = query.filter(Payment.payment_date >= start_date)
        if end_date:
            query = query.filter(Payment.payment_date <= end_date)
        return query
