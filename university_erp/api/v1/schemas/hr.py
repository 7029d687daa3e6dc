"""Schemas for employees and leave management"""

import uuid
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, model_validator

from university_erp.api.v1.schemas.common import CamelModel

LeaveType = Literal["annual", "sick", "casual", "unpaid"]
EmploymentType = Literal["permanent", "contract", "visiting", "part_time"]
EmployeeStatus = Literal["active", "on_leave", "resigned", "terminated"]


class EmployeeCreate(CamelModel):
    user_id: Optional[uuid.UUID] = None
    employee_code: str = Field(..., min_length=2, max_length=30)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    employment_type: EmploymentType = "permanent"
    status: EmployeeStatus = "active"
    campus_id: Optional[uuid.UUID] = None


class EmployeeUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    status: Optional[EmployeeStatus] = None
    campus_id: Optional[uuid.UUID] = None


class EmployeeSchema(CamelModel):
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    employee_code: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    joining_date: Optional[date] = None
    employment_type: str
    status: str
    campus_id: Optional[uuid.UUID] = None


class LeaveRequestCreate(CamelModel):
    employee_id: uuid.UUID
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str] = None


class LeaveDecision(CamelModel):
    status: Literal["approved", "rejected"]
    rejection_reason: Optional[str] = None

    @model_validator(mode="after")
    def reason_for_rejection(self):
        if self.status == "rejected" and not self.rejection_reason:
            raise ValueError("Rejection reason is required")
        return self


class LeaveRequestSchema(CamelModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: str
    start_date: date
    end_date: date
    number_of_days: int
    reason: Optional[str] = None
    status: str
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class LeaveBalanceSchema(CamelModel):
    leave_type: str
    quota: int
    used: int
    remaining: int


class LeaveBalanceList(CamelModel):
    employee_id: uuid.UUID
    year: int
    balances: List[LeaveBalanceSchema]
