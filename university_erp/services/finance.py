"""Fee structures, student fees, payments and financial reporting"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from university_erp.config import settings
from university_erp.domain.exceptions import ConflictError
from university_erp.domain.finance import ensure_payment_allowed, fee_status, generate_receipt_number, summarize_fees
from university_erp.infrastructure.database.models import FeeStructure, Payment, StudentFee
from university_erp.infrastructure.database.repositories.academics import ProgramRepository, StudentRepository
from university_erp.infrastructure.database.repositories.finance import (
    FeeStructureRepository,
    PaymentRepository,
    StudentFeeRepository,
)
from university_erp.infrastructure.observability.metrics import payments_counter
from university_erp.services.base import BaseService, as_uuid

logger = logging.getLogger(__name__)


class FinanceService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.fee_structures = FeeStructureRepository(db)
        self.student_fees = StudentFeeRepository(db)
        self.payments = PaymentRepository(db)
        self.students = StudentRepository(db)
        self.programs = ProgramRepository(db)

    # Fee structures

    def list_fee_structures(self, offset: int, limit: int, **filters) -> Tuple[List[FeeStructure], int]:
        return self.fee_structures.list(offset, limit, **filters)

    def get_fee_structure(self, structure_id) -> FeeStructure:
        return self.require(self.fee_structures.get(structure_id), "Fee structure")

    def create_fee_structure(self, data) -> FeeStructure:
        if data.program_id:
            self.require(self.programs.get(data.program_id), "Program")
        with self.transaction():
            structure = self.fee_structures.create(**data.model_dump())
        return structure

    def update_fee_structure(self, structure_id, data) -> FeeStructure:
        structure = self.get_fee_structure(structure_id)
        with self.transaction():
            self.fee_structures.update(structure, **data.model_dump(exclude_unset=True))
        return structure

    # Student fees

    def list_student_fees(self, offset: int, limit: int, **filters) -> Tuple[List[StudentFee], int]:
        return self.student_fees.list(offset, limit, **filters)

    def get_student_fee(self, fee_id) -> StudentFee:
        return self.require(self.student_fees.get(fee_id), "Student fee")

    def assign_fee(self, data) -> StudentFee:
        """Charge a fee structure to a student"""
        self.require(self.students.get(data.student_id), "Student")
        structure = self.get_fee_structure(data.fee_structure_id)
        amount_due = data.amount_due or structure.amount
        due_date = data.due_date or structure.due_date

        with self.transaction():
            fee = self.student_fees.create(
                student_id=data.student_id,
                fee_structure_id=structure.id,
                semester=data.semester or structure.semester,
                amount_due=amount_due,
                amount_paid=0,
                due_date=due_date,
                payment_status=fee_status(amount_due, 0, due_date),
            )
        return fee

    # Payments

    def list_payments(self, offset: int, limit: int, **filters) -> Tuple[List[Payment], int]:
        return self.payments.list(offset, limit, **filters)

    def get_payment(self, payment_id) -> Payment:
        return self.require(self.payments.get(payment_id), "Payment")

    def _unique_receipt_number(self) -> str:
        for _ in range(settings.identifier_max_attempts):
            number = generate_receipt_number()
            if not self.payments.receipt_exists(number):
                return number
        raise ConflictError("Could not allocate a unique receipt number")

    def record_payment(self, data, received_by) -> Tuple[Payment, StudentFee]:
        """
        Record a payment against a student fee and recompute its status.

        Raises:
            NotFoundError: Unknown student fee
            ValidationError: Amount is not positive or exceeds the balance
        """
        fee = self.get_student_fee(data.student_fee_id)
        ensure_payment_allowed(data.amount, fee.amount_due, fee.amount_paid)

        amount_paid = fee.amount_paid + data.amount
        with self.transaction():
            payment = self.payments.create(
                receipt_number=self._unique_receipt_number(),
                student_fee_id=fee.id,
                student_id=fee.student_id,
                amount=data.amount,
                payment_date=data.payment_date,
                payment_method=data.payment_method,
                transaction_id=data.transaction_id,
                remarks=data.remarks,
                received_by=as_uuid(received_by),
            )
            status = fee_status(fee.amount_due, amount_paid, fee.due_date)
            self.student_fees.update(
                fee,
                amount_paid=amount_paid,
                payment_status=status,
                paid_date=data.payment_date if status == "paid" else fee.paid_date,
            )

        payments_counter.labels(method=data.payment_method).inc()
        logger.info(
            "Payment recorded",
            extra={"payment_id": str(payment.id), "receipt_number": payment.receipt_number, "amount": data.amount},
        )
        return payment, fee

    # Reporting

    def student_summary(self, student_id, semester: Optional[str] = None) -> Dict:
        self.require(self.students.get(student_id), "Student")
        fees = self.student_fees.for_student(student_id, semester)
        summary = summarize_fees(fees)
        return {
            "student_id": student_id,
            "semester": semester,
            "total_fees_due": summary.total_due,
            "total_fees_paid": summary.total_paid,
            "balance": summary.balance,
            "payment_status": summary.status,
            "fees": fees,
            "payments": self.payments.for_fees([fee.id for fee in fees]),
        }

    def financial_report(self, start_date: Optional[date], end_date: Optional[date], semester: Optional[str] = None) -> Dict:
        """Totals across all fees plus payment methods used within the date range"""
        today = date.today()
        fees = self.student_fees.for_semester(semester)
        summary = summarize_fees(fees, today)

        pending = 0
        overdue = 0
        for fee in fees:
            status = fee_status(fee.amount_due, fee.amount_paid, fee.due_date, today)
            if status in ("pending", "partial"):
                pending += fee.amount_due - fee.amount_paid
            elif status == "overdue":
                overdue += fee.amount_due - fee.amount_paid

        breakdown = self.payments.method_breakdown(start_date, end_date)
        return {
            "period": f"{start_date or 'beginning'} to {end_date or 'today'}",
            "total_fees_due": summary.total_due,
            "total_fees_paid": summary.total_paid,
            "total_pending": pending,
            "total_overdue": overdue,
            "fees_by_status": summary.by_status,
            "payment_breakdown": [
                {"payment_method": method, "amount": values["amount"], "count": values["count"]}
                for method, values in sorted(breakdown.items())
            ],
        }
