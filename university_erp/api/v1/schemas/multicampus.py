"""Schemas for campuses, campus transfers and campus reports"""

import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from university_erp.api.v1.schemas.common import CamelModel


class CampusCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=2, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    is_active: bool = True


class CampusUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    is_active: Optional[bool] = None


class CampusSchema(CamelModel):
    id: uuid.UUID
    name: str
    code: str
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    is_active: bool


class TransferCreate(CamelModel):
    student_id: uuid.UUID
    from_campus_id: uuid.UUID
    to_campus_id: uuid.UUID
    reason: Optional[str] = None


class TransferDecision(CamelModel):
    status: Literal["approved", "rejected"]
    effective_date: Optional[date] = None
    rejection_reason: Optional[str] = None


class TransferSchema(CamelModel):
    id: uuid.UUID
    student_id: uuid.UUID
    from_campus_id: uuid.UUID
    to_campus_id: uuid.UUID
    reason: Optional[str] = None
    status: str
    effective_date: Optional[date] = None
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None


class StaffTransferCreate(CamelModel):
    employee_id: uuid.UUID
    from_campus_id: uuid.UUID
    to_campus_id: uuid.UUID
    transfer_type: Literal["permanent", "temporary", "deputation"] = "permanent"
    reason: str = Field(..., min_length=1)
    requested_date: Optional[date] = None


class StaffTransferDecision(TransferDecision):
    remarks: Optional[str] = None


class StaffTransferSchema(CamelModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    from_campus_id: uuid.UUID
    to_campus_id: uuid.UUID
    transfer_type: str
    reason: str
    requested_date: date
    status: str
    transfer_date: Optional[date] = None
    effective_date: Optional[date] = None
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class CampusReportSchema(CamelModel):
    campus_id: uuid.UUID
    campus_name: str
    total_students: int
    total_staff: int
    total_faculty: int
    total_programs: int
    total_courses: int
    active_enrollments: int
    report_period: date
