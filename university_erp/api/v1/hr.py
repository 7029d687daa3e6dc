"""/hr - employees and leave"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_hr_service,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.hr import (
    EmployeeCreate,
    EmployeeSchema,
    EmployeeUpdate,
    LeaveBalanceList,
    LeaveDecision,
    LeaveRequestCreate,
    LeaveRequestSchema,
    LeaveType,
)
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.hr import HRService

router = APIRouter(prefix="/hr", dependencies=[Depends(get_current_user)])

hr_staff = require_roles("hr")


@router.get("/employees", response_model=ApiResponse[Page[EmployeeSchema]])
def list_employees(
    department: Optional[str] = None,
    employee_status: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: HRService = Depends(get_hr_service),
):
    items, total = service.list_employees(
        params.offset, params.limit, department=department, status=employee_status, search=search
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/employees",
    response_model=ApiResponse[EmployeeSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(hr_staff)],
)
def create_employee(body: EmployeeCreate, service: HRService = Depends(get_hr_service)):
    return ok(service.create_employee(body), "Employee created successfully")


@router.get("/employees/{employee_id}", response_model=ApiResponse[EmployeeSchema])
def get_employee(employee_id: uuid.UUID, service: HRService = Depends(get_hr_service)):
    return ok(service.get_employee(employee_id))


@router.put("/employees/{employee_id}", response_model=ApiResponse[EmployeeSchema], dependencies=[Depends(hr_staff)])
def update_employee(employee_id: uuid.UUID, body: EmployeeUpdate, service: HRService = Depends(get_hr_service)):
    return ok(service.update_employee(employee_id, body), "Employee updated successfully")


@router.get("/employees/{employee_id}/leave-balance", response_model=ApiResponse[LeaveBalanceList])
def leave_balance(
    employee_id: uuid.UUID,
    year: Optional[int] = Query(None, ge=2000, le=2100),
    service: HRService = Depends(get_hr_service),
):
    resolved_year, balances = service.leave_balance(employee_id, year)
    return ok({"employee_id": employee_id, "year": resolved_year, "balances": balances})


@router.get("/leave-requests", response_model=ApiResponse[Page[LeaveRequestSchema]])
def list_leave_requests(
    employee_id: Optional[uuid.UUID] = Query(None, alias="employeeId"),
    request_status: Optional[str] = Query(None, alias="status"),
    leave_type: Optional[LeaveType] = Query(None, alias="leaveType"),
    params: PageParams = Depends(get_page_params),
    service: HRService = Depends(get_hr_service),
):
    items, total = service.list_leave_requests(
        params.offset, params.limit, employee_id=employee_id, status=request_status, leave_type=leave_type
    )
    return paged(items, total, params.page, params.limit)


@router.post("/leave-requests", response_model=ApiResponse[LeaveRequestSchema], status_code=status.HTTP_201_CREATED)
def request_leave(body: LeaveRequestCreate, service: HRService = Depends(get_hr_service)):
    """Request leave; start date may not be in the past and days are counted inclusively"""
    return ok(service.request_leave(body), "Leave request submitted")


@router.patch("/leave-requests/{request_id}", response_model=ApiResponse[LeaveRequestSchema])
def decide_leave(
    request_id: uuid.UUID,
    body: LeaveDecision,
    current_user: CurrentUser = Depends(hr_staff),
    service: HRService = Depends(get_hr_service),
):
    request = service.decide_leave(request_id, body.status, current_user.id, body.rejection_reason)
    return ok(request, f"Leave request {body.status}")
