"""Schemas for fee structures, student fees, payments and reports"""

import uuid
from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field

from university_erp.api.v1.schemas.common import CamelModel

PaymentMethod = Literal["cash", "bank_transfer", "card", "online", "cheque"]


class FeeStructureCreate(CamelModel):
    program_id: Optional[uuid.UUID] = None
    semester: str = Field(..., min_length=1)
    fee_type: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    due_date: Optional[date] = None
    description: Optional[str] = None
    is_active: bool = True


class FeeStructureUpdate(CamelModel):
    amount: Optional[int] = Field(None, gt=0)
    due_date: Optional[date] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class FeeStructureSchema(CamelModel):
    id: uuid.UUID
    program_id: Optional[uuid.UUID] = None
    semester: str
    fee_type: str
    amount: int
    due_date: Optional[date] = None
    description: Optional[str] = None
    is_active: bool


class StudentFeeCreate(CamelModel):
    student_id: uuid.UUID
    fee_structure_id: uuid.UUID
    semester: Optional[str] = None
    amount_due: Optional[int] = Field(None, gt=0)
    due_date: Optional[date] = None


class StudentFeeSchema(CamelModel):
    id: uuid.UUID
    student_id: uuid.UUID
    fee_structure_id: uuid.UUID
    semester: str
    amount_due: int
    amount_paid: int
    due_date: Optional[date] = None
    payment_status: str
    paid_date: Optional[date] = None


class PaymentCreate(CamelModel):
    student_fee_id: uuid.UUID
    amount: int = Field(..., gt=0)
    payment_date: date
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None


class PaymentSchema(CamelModel):
    id: uuid.UUID
    receipt_number: str
    student_fee_id: uuid.UUID
    student_id: uuid.UUID
    amount: int
    payment_date: date
    payment_method: str
    transaction_id: Optional[str] = None
    received_by: Optional[uuid.UUID] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class PaymentReceipt(CamelModel):
    payment: PaymentSchema
    updated_fee: StudentFeeSchema


class FinancialSummary(CamelModel):
    student_id: uuid.UUID
    semester: Optional[str] = None
    total_fees_due: float
    total_fees_paid: float
    balance: float
    payment_status: str
    fees: List[StudentFeeSchema]
    payments: List[PaymentSchema]


class MethodBreakdown(CamelModel):
    payment_method: str
    amount: float
    count: int


class FinancialReport(CamelModel):
    period: str
    total_fees_due: float
    total_fees_paid: float
    total_pending: float
    total_overdue: float
    fees_by_status: Dict[str, int]
    payment_breakdown: List[MethodBreakdown]
