"""Campuses and the transfers and reports tied to them"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.infrastructure.database.models import Campus, StaffTransfer, StudentTransfer
from university_erp.infrastructure.database.repositories.academics import CampusRepository, StudentRepository
from university_erp.infrastructure.database.repositories.hr import EmployeeRepository
from university_erp.infrastructure.database.repositories.multicampus import (
    CampusReportRepository,
    StaffTransferRepository,
    TransferRepository,
)
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class CampusService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.campuses = CampusRepository(db)
        self.transfers = TransferRepository(db)
        self.students = StudentRepository(db)
        self.staff_transfers = StaffTransferRepository(db)
        self.employees = EmployeeRepository(db)
        self.headcounts = CampusReportRepository(db)

    def list_campuses(self, offset: int, limit: int, **filters) -> Tuple[List[Campus], int]:
        return self.campuses.list(offset, limit, **filters)

    def get_campus(self, campus_id) -> Campus:
        return self.require(self.campuses.get(campus_id), "Campus")

    def create_campus(self, data) -> Campus:
        if self.campuses.exists(code=data.code):
            raise ConflictError("Campus with this code already exists")
        with self.transaction(ConflictError("Campus with this code already exists")):
            campus = self.campuses.create(**data.model_dump())
        logger.info("Campus created", extra={"campus_id": str(campus.id), "code": campus.code})
        return campus

    def update_campus(self, campus_id, data) -> Campus:
        campus = self.get_campus(campus_id)
        with self.transaction():
            self.campuses.update(campus, **data.model_dump(exclude_unset=True))
        return campus

    # Transfers

    def list_transfers(self, offset: int, limit: int, **filters) -> Tuple[List[StudentTransfer], int]:
        return self.transfers.list(offset, limit, **filters)

    def get_transfer(self, transfer_id) -> StudentTransfer:
        return self.require(self.transfers.get(transfer_id), "Transfer")

    def _active_campus(self, campus_id, label: str) -> Campus:
        campus = self.require(self.campuses.get(campus_id), label)
        if not campus.is_active:
            raise ValidationError(f"{label} is not active")
        return campus

    def request_transfer(self, data) -> StudentTransfer:
        if data.from_campus_id == data.to_campus_id:
            raise ValidationError("Source and destination campus must be different")
        self.require(self.students.get(data.student_id), "Student")
        self._active_campus(data.from_campus_id, "Source campus")
        self._active_campus(data.to_campus_id, "Destination campus")
        if self.transfers.has_pending(data.student_id):
            raise ConflictError("Student already has a pending transfer request")

        with self.transaction():
            transfer = self.transfers.create(status="pending", **data.model_dump())
        logger.info("Transfer requested", extra={"transfer_id": str(transfer.id), "student_id": str(data.student_id)})
        return transfer

    def decide_transfer(
        self,
        transfer_id,
        status: str,
        actor,
        effective_date: Optional[date] = None,
        rejection_reason: Optional[str] = None,
    ) -> StudentTransfer:
        """Approve (moving the student) or reject a pending transfer"""
        transfer = self.get_transfer(transfer_id)
        if transfer.status != "pending":
            raise ValidationError(f"Transfer is already {transfer.status}")
        if status == "approved" and effective_date is None:
            raise ValidationError("Effective date is required for approval")
        if status == "rejected" and not rejection_reason:
            raise ValidationError("Rejection reason is required")

        with self.transaction():
            if status == "approved":
                self._active_campus(transfer.to_campus_id, "Destination campus")
                student = self.require(self.students.get(transfer.student_id), "Student")
                self.students.update(student, campus_id=transfer.to_campus_id)
                self.transfers.update(
                    transfer,
                    status="approved",
                    effective_date=effective_date,
                    approved_by=as_uuid(actor),
                    approved_at=utcnow(),
                )
            else:
                self.transfers.update(
                    transfer,
                    status="rejected",
                    rejection_reason=rejection_reason,
                    approved_by=as_uuid(actor),
                    approved_at=utcnow(),
                )

        logger.info("Transfer decided", extra={"transfer_id": str(transfer.id), "status": status})
        return transfer

    # Staff transfers

    def list_staff_transfers(self, offset: int, limit: int, **filters) -> Tuple[List[StaffTransfer], int]:
        return self.staff_transfers.list(offset, limit, **filters)

    def get_staff_transfer(self, transfer_id) -> StaffTransfer:
        return self.require(self.staff_transfers.get(transfer_id), "Staff transfer")

    def request_staff_transfer(self, data) -> StaffTransfer:
        if data.from_campus_id == data.to_campus_id:
            raise ValidationError("Source and destination campus must be different")
        self.require(self.employees.get(data.employee_id), "Employee")
        self._active_campus(data.from_campus_id, "Source campus")
        self._active_campus(data.to_campus_id, "Destination campus")
        if self.staff_transfers.has_pending(data.employee_id):
            raise ConflictError("Employee already has a pending transfer request")

        fields = data.model_dump()
        if fields.get("requested_date") is None:
            fields["requested_date"] = date.today()
        with self.transaction():
            transfer = self.staff_transfers.create(status="pending", **fields)
        logger.info(
            "Staff transfer requested",
            extra={
                "transfer_id": str(transfer.id),
                "employee_id": str(data.employee_id),
                "transfer_type": transfer.transfer_type,
            },
        )
        return transfer

    def decide_staff_transfer(
        self,
        transfer_id,
        status: str,
        actor,
        effective_date: Optional[date] = None,
        rejection_reason: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> StaffTransfer:
        """Approve (moving the employee to the destination campus) or reject a pending staff transfer"""
        transfer = self.get_staff_transfer(transfer_id)
        if transfer.status != "pending":
            raise ValidationError(f"Transfer is already {transfer.status}")
        if status == "approved" and effective_date is None:
            raise ValidationError("Effective date is required for approval")
        if status == "rejected" and not rejection_reason:
            raise ValidationError("Rejection reason is required")

        with self.transaction():
            if status == "approved":
                self._active_campus(transfer.to_campus_id, "Destination campus")
                employee = self.require(self.employees.get(transfer.employee_id), "Employee")
                self.employees.update(employee, campus_id=transfer.to_campus_id)
                self.staff_transfers.update(
                    transfer,
                    status="approved",
                    effective_date=effective_date,
                    transfer_date=date.today(),
                    remarks=remarks,
                    approved_by=as_uuid(actor),
                    approved_at=utcnow(),
                )
            else:
                self.staff_transfers.update(
                    transfer,
                    status="rejected",
                    rejection_reason=rejection_reason,
                    remarks=remarks,
                    approved_by=as_uuid(actor),
                    approved_at=utcnow(),
                )

        logger.info("Staff transfer decided", extra={"transfer_id": str(transfer.id), "status": status})
        return transfer

    # Reports

    def campus_report(self, campus_id, report_period: Optional[date] = None) -> Dict[str, Any]:
        """Headcounts for one campus; programs are those its students are enrolled in"""
        campus = self.get_campus(campus_id)
        program_ids = self.headcounts.program_ids(campus.id)
        return {
            "campus_id": campus.id,
            "campus_name": campus.name,
            "total_students": self.headcounts.count_students(campus.id),
            "total_staff": self.headcounts.count_staff(campus.id),
            "total_faculty": self.headcounts.count_staff(campus.id, role="faculty"),
            "total_programs": len(program_ids),
            "total_courses": self.headcounts.count_courses(program_ids),
            "active_enrollments": self.headcounts.count_students(campus.id, enrollment_status="active"),
            "report_period": report_period or date.today(),
        }
