"""Data access for salary structures, processings and slips"""

from typing import List, Optional, Tuple

from sqlalchemy import update

from university_erp.infrastructure.database.models import SalaryProcessing, SalarySlip, SalaryStructure
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class SalaryStructureRepository(BaseRepository[SalaryStructure]):
    model = SalaryStructure

    def get_active(self, employee_id) -> Optional[SalaryStructure]:
        return (
            self.db.query(SalaryStructure)
            .filter(SalaryStructure.employee_id == employee_id, SalaryStructure.is_active.is_(True))
            .first()
        )

    def deactivate_for_employee(self, employee_id) -> int:
        """Deactivate every active structure of the employee"""
        self.db.flush()
        result = self.db.execute(
            update(SalaryStructure)
            .where(SalaryStructure.employee_id == employee_id, SalaryStructure.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def list(self, offset: int, limit: int, employee_id=None, is_active: Optional[bool] = None) -> Tuple[List[SalaryStructure], int]:
        query = self.db.query(SalaryStructure)
        if employee_id:
            query = query.filter(SalaryStructure.employee_id == employee_id)
        if is_active is not None:
            query = query.filter(SalaryStructure.is_active.is_(is_active))
        return paginate(query.order_by(SalaryStructure.effective_date.desc()), offset, limit)

    def count_active(self, employee_id) -> int:
        return (
            self.db.query(SalaryStructure)
            .filter(SalaryStructure.employee_id == employee_id, SalaryStructure.is_active.is_(True))
            .count()
        )


class SalaryProcessingRepository(BaseRepository[SalaryProcessing]):
    model = SalaryProcessing

    def find_for_period(self, employee_id, payroll_period: str) -> Optional[SalaryProcessing]:
        return (
            self.db.query(SalaryProcessing)
            .filter(SalaryProcessing.employee_id == employee_id, SalaryProcessing.payroll_period == payroll_period)
            .first()
        )

    def list(
        self,
        offset: int,
        limit: int,
        employee_id=None,
        payroll_period: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[SalaryProcessing], int]:
        query = self.db.query(SalaryProcessing)
        if employee_id:
            query = query.filter(SalaryProcessing.employee_id == employee_id)
        if payroll_period:
            query = query.filter(SalaryProcessing.payroll_period == payroll_period)
        if status:
            query = query.filter(SalaryProcessing.status == status)
        return paginate(query.order_by(SalaryProcessing.payroll_period.desc()), offset, limit)

    def for_period(self, payroll_period: str) -> List[SalaryProcessing]:
        return self.db.query(SalaryProcessing).filter(SalaryProcessing.payroll_period == payroll_period).all()

    def paid_in_year(self, employee_id, year: int) -> List[SalaryProcessing]:
        return (
            self.db.query(SalaryProcessing)
            .filter(
                SalaryProcessing.employee_id == employee_id,
                SalaryProcessing.status == "paid",
                SalaryProcessing.payroll_period.like(f"{year}-%"),
            )
            .all()
        )


class SalarySlipRepository(BaseRepository[SalarySlip]):
    model = SalarySlip

    def for_employee(self, employee_id, limit: int = 12) -> List[SalarySlip]:
        return (
            self.db.query(SalarySlip)
            .filter(SalarySlip.employee_id == employee_id)
            .order_by(SalarySlip.payroll_period.desc())
            .limit(limit)
            .all()
        )
