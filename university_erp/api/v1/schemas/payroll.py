"""Schemas for salary structures, salary processing and tax"""

import uuid
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from university_erp.api.v1.schemas.common import CamelModel


class SalaryStructureCreate(CamelModel):
    employee_id: uuid.UUID
    basic_salary: int = Field(..., gt=0)
    house_rent_allowance: int = Field(0, ge=0)
    medical_allowance: int = Field(0, ge=0)
    transport_allowance: int = Field(0, ge=0)
    other_allowances: int = Field(0, ge=0)
    provident_fund: int = Field(0, ge=0)
    tax_deduction: int = Field(0, ge=0)
    other_deductions: int = Field(0, ge=0)
    effective_date: date


class SalaryStructureUpdate(CamelModel):
    basic_salary: Optional[int] = Field(None, gt=0)
    house_rent_allowance: Optional[int] = Field(None, ge=0)
    medical_allowance: Optional[int] = Field(None, ge=0)
    transport_allowance: Optional[int] = Field(None, ge=0)
    other_allowances: Optional[int] = Field(None, ge=0)
    provident_fund: Optional[int] = Field(None, ge=0)
    tax_deduction: Optional[int] = Field(None, ge=0)
    other_deductions: Optional[int] = Field(None, ge=0)
    effective_date: Optional[date] = None


class SalaryStructureSchema(CamelModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    basic_salary: int
    house_rent_allowance: int
    medical_allowance: int
    transport_allowance: int
    other_allowances: int
    provident_fund: int
    tax_deduction: int
    other_deductions: int
    gross_salary: int
    net_salary: int
    effective_date: date
    is_active: bool


class ProcessSalaryRequest(CamelModel):
    employee_id: uuid.UUID
    payroll_period: str = Field(..., description="YYYY-MM")
    days_worked: Optional[int] = Field(None, ge=0)
    bonus: int = Field(0, ge=0)
    overtime: int = Field(0, ge=0)
    advance_deduction: int = Field(0, ge=0)
    remarks: Optional[str] = None


class SalaryApprovalRequest(CamelModel):
    status: Literal["approved", "rejected"]
    remarks: Optional[str] = None


class SalaryPaymentRequest(CamelModel):
    payment_date: Optional[date] = None


class SalaryProcessingSchema(CamelModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    salary_structure_id: uuid.UUID
    payroll_period: str
    days_in_month: int
    days_worked: int
    basic_salary: int
    allowances: int
    bonus: int
    overtime: int
    gross_salary: int
    provident_fund: int
    tax_amount: int
    advance_deduction: int
    deductions: int
    net_salary: int
    status: str
    processed_by: Optional[uuid.UUID] = None
    processed_at: Optional[datetime] = None
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    payment_date: Optional[date] = None
    remarks: Optional[str] = None


class SalarySlipSchema(CamelModel):
    id: uuid.UUID
    salary_processing_id: uuid.UUID
    employee_id: uuid.UUID
    payroll_period: str
    slip_number: str
    gross_salary: int
    deductions: int
    net_salary: int
    generated_at: Optional[datetime] = None


class PayrollSummary(CamelModel):
    payroll_period: str
    total_employees: int
    total_gross_salary: int
    total_deductions: int
    total_net_salary: int
    total_tax: int
    processed_count: int
    pending_count: int


class TaxCalculationRequest(CamelModel):
    annual_income: float = Field(..., ge=0)


class TaxCalculationSchema(CamelModel):
    annual_income: float
    annual_tax: int
    monthly_tax: int


class EmployeeTaxSchema(CamelModel):
    employee_id: uuid.UUID
    year: int
    annual_salary: int
    tax_paid: int
    tax_liability: int
    refund_due: int
    months_paid: int


class SalarySlipList(CamelModel):
    employee_id: uuid.UUID
    slips: List[SalarySlipSchema]
