"""/finance - fee structures, student fees, payments and reports"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_finance_service,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.finance import (
    FeeStructureCreate,
    FeeStructureSchema,
    FeeStructureUpdate,
    FinancialReport,
    FinancialSummary,
    PaymentCreate,
    PaymentMethod,
    PaymentReceipt,
    PaymentSchema,
    StudentFeeCreate,
    StudentFeeSchema,
)
from university_erp.domain.exceptions import ValidationError
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.finance import FinanceService

router = APIRouter(prefix="/finance", dependencies=[Depends(get_current_user)])

accounts = require_roles("accountant")


# Fee structures

@router.get("/fee-structures", response_model=ApiResponse[Page[FeeStructureSchema]])
def list_fee_structures(
    program_id: Optional[uuid.UUID] = Query(None, alias="programId"),
    semester: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: PageParams = Depends(get_page_params),
    service: FinanceService = Depends(get_finance_service),
):
    items, total = service.list_fee_structures(
        params.offset, params.limit, program_id=program_id, semester=semester, is_active=is_active
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/fee-structures",
    response_model=ApiResponse[FeeStructureSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(accounts)],
)
def create_fee_structure(body: FeeStructureCreate, service: FinanceService = Depends(get_finance_service)):
    return ok(service.create_fee_structure(body), "Fee structure created successfully")


@router.get("/fee-structures/{structure_id}", response_model=ApiResponse[FeeStructureSchema])
def get_fee_structure(structure_id: uuid.UUID, service: FinanceService = Depends(get_finance_service)):
    return ok(service.get_fee_structure(structure_id))


@router.put("/fee-structures/{structure_id}", response_model=ApiResponse[FeeStructureSchema], dependencies=[Depends(accounts)])
def update_fee_structure(
    structure_id: uuid.UUID, body: FeeStructureUpdate, service: FinanceService = Depends(get_finance_service)
):
    return ok(service.update_fee_structure(structure_id, body), "Fee structure updated successfully")


# Student fees

@router.get("/student-fees", response_model=ApiResponse[Page[StudentFeeSchema]])
def list_student_fees(
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    semester: Optional[str] = None,
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    params: PageParams = Depends(get_page_params),
    service: FinanceService = Depends(get_finance_service),
):
    items, total = service.list_student_fees(
        params.offset, params.limit, student_id=student_id, semester=semester, payment_status=payment_status
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/student-fees",
    response_model=ApiResponse[StudentFeeSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(accounts)],
)
def assign_fee(body: StudentFeeCreate, service: FinanceService = Depends(get_finance_service)):
    """Charge a fee structure to a student; amount and due date default from the structure"""
    return ok(service.assign_fee(body), "Fee assigned successfully")


@router.get("/student-fees/{fee_id}", response_model=ApiResponse[StudentFeeSchema])
def get_student_fee(fee_id: uuid.UUID, service: FinanceService = Depends(get_finance_service)):
    return ok(service.get_student_fee(fee_id))


# Payments

@router.get("/payments", response_model=ApiResponse[Page[PaymentSchema]])
def list_payments(
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    student_fee_id: Optional[uuid.UUID] = Query(None, alias="studentFeeId"),
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    params: PageParams = Depends(get_page_params),
    service: FinanceService = Depends(get_finance_service),
):
    items, total = service.list_payments(
        params.offset,
        params.limit,
        student_id=student_id,
        student_fee_id=student_fee_id,
        payment_method=payment_method,
        start_date=start_date,
        end_date=end_date,
    )
    return paged(items, total, params.page, params.limit)


@router.post("/payments", response_model=ApiResponse[PaymentReceipt], status_code=status.HTTP_201_CREATED)
def record_payment(
    body: PaymentCreate,
    current_user: CurrentUser = Depends(accounts),
    service: FinanceService = Depends(get_finance_service),
):
    """
    Record a fee payment and issue a receipt.

    The fee's status is recomputed from the new paid total:
    paid, partial, overdue or pending.
    """
    payment, fee = service.record_payment(body, current_user.id)
    return ok({"payment": payment, "updated_fee": fee}, "Payment recorded successfully")


@router.get("/payments/{payment_id}", response_model=ApiResponse[PaymentSchema])
def get_payment(payment_id: uuid.UUID, service: FinanceService = Depends(get_finance_service)):
    return ok(service.get_payment(payment_id))


# Reports

@router.get("/students/{student_id}/summary", response_model=ApiResponse[FinancialSummary])
def student_summary(
    student_id: uuid.UUID,
    semester: Optional[str] = None,
    service: FinanceService = Depends(get_finance_service),
):
    return ok(service.student_summary(student_id, semester))


@router.get("/reports", response_model=ApiResponse[FinancialReport], dependencies=[Depends(accounts)])
def financial_report(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    semester: Optional[str] = None,
    service: FinanceService = Depends(get_finance_service),
):
    if start_date and end_date and start_date > end_date:
        raise ValidationError("startDate must not be after endDate")
    return ok(service.financial_report(start_date, end_date, semester))
