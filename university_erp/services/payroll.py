"""Salary structures, monthly salary processing and payroll reporting"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from university_erp.domain.exceptions import NotFoundError, ValidationError
from university_erp.domain.payroll import calculate_salary, ensure_transition, slip_number, structure_totals
from university_erp.domain.taxation import calculate_income_tax
from university_erp.infrastructure.database.models import SalaryProcessing, SalarySlip, SalaryStructure
from university_erp.infrastructure.database.repositories.hr import EmployeeRepository
from university_erp.infrastructure.database.repositories.payroll import (
    SalaryProcessingRepository,
    SalarySlipRepository,
    SalaryStructureRepository,
)
from university_erp.infrastructure.observability.metrics import record_salary_status, salary_processed_counter
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import parse_payroll_period, utcnow

logger = logging.getLogger(__name__)

DUPLICATE_PERIOD_MESSAGE = "Salary already processed for this period"

STRUCTURE_COMPONENTS = (
    "basic_salary",
    "house_rent_allowance",
    "medical_allowance",
    "transport_allowance",
    "other_allowances",
    "provident_fund",
    "tax_deduction",
    "other_deductions",
)


class PayrollService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.structures = SalaryStructureRepository(db)
        self.processings = SalaryProcessingRepository(db)
        self.slips = SalarySlipRepository(db)
        self.employees = EmployeeRepository(db)

    # Salary structures

    def list_structures(self, offset: int, limit: int, **filters) -> Tuple[List[SalaryStructure], int]:
        return self.structures.list(offset, limit, **filters)

    def get_structure(self, structure_id) -> SalaryStructure:
        return self.require(self.structures.get(structure_id), "Salary structure")

    def get_active_structure(self, employee_id) -> SalaryStructure:
        return self.require(self.structures.get_active(employee_id), "Active salary structure")

    def create_structure(self, data) -> SalaryStructure:
        """
        Replace the employee's active salary structure.

        The previous structure is deactivated and the new one inserted in
        the same transaction; a partial unique index guarantees a single
        active row per employee.
        """
        self.require(self.employees.get(data.employee_id), "Employee")
        components = data.model_dump(include=set(STRUCTURE_COMPONENTS))
        totals = structure_totals(**components)

        with self.transaction():
            self.structures.deactivate_for_employee(data.employee_id)
            structure = self.structures.create(
                employee_id=data.employee_id,
                effective_date=data.effective_date,
                gross_salary=totals.gross_salary,
                net_salary=totals.net_salary,
                is_active=True,
                **components,
            )

        logger.info(
            "Salary structure created",
            extra={"structure_id": str(structure.id), "employee_id": str(data.employee_id), "gross": totals.gross_salary},
        )
        return structure

    def update_structure(self, structure_id, data) -> SalaryStructure:
        structure = self.get_structure(structure_id)
        fields = data.model_dump(exclude_unset=True)
        components = {name: fields.get(name, getattr(structure, name)) for name in STRUCTURE_COMPONENTS}
        totals = structure_totals(**components)

        with self.transaction():
            self.structures.update(structure, gross_salary=totals.gross_salary, net_salary=totals.net_salary, **fields)
        return structure

    # Salary processing

    def list_processings(self, offset: int, limit: int, **filters) -> Tuple[List[SalaryProcessing], int]:
        return self.processings.list(offset, limit, **filters)

    def get_processing(self, processing_id) -> SalaryProcessing:
        return self.require(self.processings.get(processing_id), "Salary processing")

    def process_salary(self, data) -> SalaryProcessing:
        """
        Compute and store an employee's salary for a payroll period.

        Raises:
            ValidationError: Bad period format, bad days worked, or the period
                was already processed for this employee
            NotFoundError: Employee has no active salary structure
        """
        parse_payroll_period(data.payroll_period)
        self.require(self.employees.get(data.employee_id), "Employee")
        if self.processings.find_for_period(data.employee_id, data.payroll_period):
            raise ValidationError(DUPLICATE_PERIOD_MESSAGE)

        structure = self.structures.get_active(data.employee_id)
        if structure is None:
            raise NotFoundError("Active salary structure")

        breakdown = calculate_salary(
            structure,
            data.payroll_period,
            days_worked=data.days_worked,
            bonus=data.bonus,
            overtime=data.overtime,
            advance_deduction=data.advance_deduction,
        )

        with self.transaction(ValidationError(DUPLICATE_PERIOD_MESSAGE)):
            processing = self.processings.create(
                employee_id=data.employee_id,
                salary_structure_id=structure.id,
                payroll_period=data.payroll_period,
                days_in_month=breakdown.days_in_month,
                days_worked=breakdown.days_worked,
                basic_salary=breakdown.basic_salary,
                allowances=breakdown.allowances,
                bonus=breakdown.bonus,
                overtime=breakdown.overtime,
                gross_salary=breakdown.gross_salary,
                provident_fund=breakdown.provident_fund,
                tax_amount=breakdown.tax_amount,
                advance_deduction=breakdown.advance_deduction,
                deductions=breakdown.deductions,
                net_salary=breakdown.net_salary,
                status="pending",
                remarks=data.remarks,
            )

        salary_processed_counter.inc()
        logger.info(
            "Salary processed",
            extra={
                "processing_id": str(processing.id),
                "employee_id": str(data.employee_id),
                "payroll_period": data.payroll_period,
                "net_salary": breakdown.net_salary,
            },
        )
        return processing

    def mark_processed(self, processing_id, actor) -> SalaryProcessing:
        processing = self.get_processing(processing_id)
        ensure_transition(processing.status, "processed")
        with self.transaction():
            self.processings.update(processing, status="processed", processed_by=as_uuid(actor), processed_at=utcnow())
        record_salary_status("processed")
        return processing

    def approve(self, processing_id, status: str, actor, remarks: Optional[str] = None) -> SalaryProcessing:
        """Approve (issuing a salary slip) or send a processed salary back to pending"""
        processing = self.get_processing(processing_id)
        if processing.status != "processed":
            raise ValidationError("Only processed salaries can be approved or rejected")

        with self.transaction():
            if status == "approved":
                self.processings.update(processing, status="approved", approved_by=as_uuid(actor), approved_at=utcnow())
                self.slips.create(
                    salary_processing_id=processing.id,
                    employee_id=processing.employee_id,
                    payroll_period=processing.payroll_period,
                    slip_number=slip_number(processing.payroll_period, processing.employee_id),
                    gross_salary=processing.gross_salary,
                    deductions=processing.deductions,
                    net_salary=processing.net_salary,
                )
            else:
                self.processings.update(processing, status="pending", processed_by=None, processed_at=None)
            if remarks is not None:
                self.processings.update(processing, remarks=remarks)

        record_salary_status("approved" if status == "approved" else "rejected")
        logger.info("Salary approval decided", extra={"processing_id": str(processing.id), "status": status})
        return processing

    def pay(self, processing_id, payment_date: Optional[date] = None) -> SalaryProcessing:
        processing = self.get_processing(processing_id)
        ensure_transition(processing.status, "paid")
        with self.transaction():
            self.processings.update(
                processing,
                status="paid",
                paid_at=utcnow(),
                payment_date=payment_date or date.today(),
            )
        record_salary_status("paid")
        return processing

    # Reporting

    def salary_slips(self, employee_id, limit: int = 12) -> List[SalarySlip]:
        self.require(self.employees.get(employee_id), "Employee")
        return self.slips.for_employee(employee_id, limit)

    def payroll_summary(self, payroll_period: str) -> Dict:
        parse_payroll_period(payroll_period)
        processings = self.processings.for_period(payroll_period)
        return {
            "payroll_period": payroll_period,
            "total_employees": len(processings),
            "total_gross_salary": sum(p.gross_salary for p in processings),
            "total_deductions": sum(p.deductions for p in processings),
            "total_net_salary": sum(p.net_salary for p in processings),
            "total_tax": sum(p.tax_amount for p in processings),
            "processed_count": sum(1 for p in processings if p.status in ("processed", "approved", "paid")),
            "pending_count": sum(1 for p in processings if p.status == "pending"),
        }

    def employee_tax(self, employee_id, year: int) -> Dict:
        """Compare tax withheld from paid salaries against the year's liability"""
        self.require(self.employees.get(employee_id), "Employee")
        paid = self.processings.paid_in_year(employee_id, year)
        annual_salary = sum(p.gross_salary for p in paid)
        tax_paid = sum(p.tax_amount for p in paid)
        liability = calculate_income_tax(annual_salary)
        return {
            "employee_id": employee_id,
            "year": year,
            "annual_salary": annual_salary,
            "tax_paid": tax_paid,
            "tax_liability": liability,
            "refund_due": max(0, tax_paid - liability),
            "months_paid": len(paid),
        }
