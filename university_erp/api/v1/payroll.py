"""/payroll - salary structures, salary processing, slips and tax"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_page_params,
    get_payroll_service,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.payroll import (
    EmployeeTaxSchema,
    PayrollSummary,
    ProcessSalaryRequest,
    SalaryApprovalRequest,
    SalaryPaymentRequest,
    SalaryProcessingSchema,
    SalarySlipList,
    SalaryStructureCreate,
    SalaryStructureSchema,
    SalaryStructureUpdate,
    TaxCalculationRequest,
    TaxCalculationSchema,
)
from university_erp.domain.taxation import tax_summary
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.payroll import PayrollService

router = APIRouter(prefix="/payroll", dependencies=[Depends(get_current_user)])

payroll_staff = require_roles("hr", "accountant")


# Salary structures

@router.get("/structures", response_model=ApiResponse[Page[SalaryStructureSchema]], dependencies=[Depends(payroll_staff)])
def list_structures(
    employee_id: Optional[uuid.UUID] = Query(None, alias="employeeId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: PageParams = Depends(get_page_params),
    service: PayrollService = Depends(get_payroll_service),
):
    items, total = service.list_structures(params.offset, params.limit, employee_id=employee_id, is_active=is_active)
    return paged(items, total, params.page, params.limit)


@router.post(
    "/structures",
    response_model=ApiResponse[SalaryStructureSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(payroll_staff)],
)
def create_structure(body: SalaryStructureCreate, service: PayrollService = Depends(get_payroll_service)):
    """Create a salary structure; any previously active one for the employee is deactivated"""
    return ok(service.create_structure(body), "Salary structure created successfully")


@router.get("/structures/{structure_id}", response_model=ApiResponse[SalaryStructureSchema], dependencies=[Depends(payroll_staff)])
def get_structure(structure_id: uuid.UUID, service: PayrollService = Depends(get_payroll_service)):
    return ok(service.get_structure(structure_id))


@router.put("/structures/{structure_id}", response_model=ApiResponse[SalaryStructureSchema], dependencies=[Depends(payroll_staff)])
def update_structure(
    structure_id: uuid.UUID, body: SalaryStructureUpdate, service: PayrollService = Depends(get_payroll_service)
):
    return ok(service.update_structure(structure_id, body), "Salary structure updated successfully")


@router.get(
    "/employees/{employee_id}/structure",
    response_model=ApiResponse[SalaryStructureSchema],
    dependencies=[Depends(payroll_staff)],
)
def get_active_structure(employee_id: uuid.UUID, service: PayrollService = Depends(get_payroll_service)):
    return ok(service.get_active_structure(employee_id))


# Salary processing

@router.get("/processings", response_model=ApiResponse[Page[SalaryProcessingSchema]], dependencies=[Depends(payroll_staff)])
def list_processings(
    employee_id: Optional[uuid.UUID] = Query(None, alias="employeeId"),
    payroll_period: Optional[str] = Query(None, alias="payrollPeriod"),
    processing_status: Optional[str] = Query(None, alias="status"),
    params: PageParams = Depends(get_page_params),
    service: PayrollService = Depends(get_payroll_service),
):
    items, total = service.list_processings(
        params.offset, params.limit, employee_id=employee_id, payroll_period=payroll_period, status=processing_status
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/processings",
    response_model=ApiResponse[SalaryProcessingSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(payroll_staff)],
)
def process_salary(body: ProcessSalaryRequest, service: PayrollService = Depends(get_payroll_service)):
    """
    Compute an employee's salary for a YYYY-MM payroll period.

    Basic salary and allowances are prorated by days worked. A period can
    only be processed once per employee.
    """
    return ok(service.process_salary(body), "Salary processed successfully")


@router.get("/processings/{processing_id}", response_model=ApiResponse[SalaryProcessingSchema], dependencies=[Depends(payroll_staff)])
def get_processing(processing_id: uuid.UUID, service: PayrollService = Depends(get_payroll_service)):
    return ok(service.get_processing(processing_id))


@router.post("/processings/{processing_id}/process", response_model=ApiResponse[SalaryProcessingSchema])
def mark_processed(
    processing_id: uuid.UUID,
    current_user: CurrentUser = Depends(payroll_staff),
    service: PayrollService = Depends(get_payroll_service),
):
    return ok(service.mark_processed(processing_id, current_user.id), "Salary marked as processed")


@router.post("/processings/{processing_id}/approve", response_model=ApiResponse[SalaryProcessingSchema])
def approve_salary(
    processing_id: uuid.UUID,
    body: SalaryApprovalRequest,
    current_user: CurrentUser = Depends(payroll_staff),
    service: PayrollService = Depends(get_payroll_service),
):
    processing = service.approve(processing_id, body.status, current_user.id, body.remarks)
    return ok(processing, f"Salary {body.status}")


@router.post("/processings/{processing_id}/pay", response_model=ApiResponse[SalaryProcessingSchema], dependencies=[Depends(payroll_staff)])
def pay_salary(
    processing_id: uuid.UUID,
    body: Optional[SalaryPaymentRequest] = None,
    service: PayrollService = Depends(get_payroll_service),
):
    payment_date = body.payment_date if body else None
    return ok(service.pay(processing_id, payment_date), "Salary paid")


# Slips, summaries and tax

@router.get("/employees/{employee_id}/slips", response_model=ApiResponse[SalarySlipList])
def salary_slips(
    employee_id: uuid.UUID,
    limit: int = Query(12, ge=1, le=60),
    service: PayrollService = Depends(get_payroll_service),
):
    return ok({"employee_id": employee_id, "slips": service.salary_slips(employee_id, limit)})


@router.get("/summary/{payroll_period}", response_model=ApiResponse[PayrollSummary], dependencies=[Depends(payroll_staff)])
def payroll_summary(payroll_period: str, service: PayrollService = Depends(get_payroll_service)):
    return ok(service.payroll_summary(payroll_period))


@router.get("/employees/{employee_id}/tax", response_model=ApiResponse[EmployeeTaxSchema])
def employee_tax(
    employee_id: uuid.UUID,
    year: Optional[int] = Query(None, ge=2000, le=2100),
    service: PayrollService = Depends(get_payroll_service),
):
    return ok(service.employee_tax(employee_id, year or date.today().year))


@router.post("/tax/calculate", response_model=ApiResponse[TaxCalculationSchema])
def calculate_tax(body: TaxCalculationRequest):
    """Annual and monthly income tax for an annual income, using the progressive brackets"""
    return ok(tax_summary(body.annual_income))
