"""/campuses, /transfers and /staff-transfers"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_campus_service,
    get_current_user,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.multicampus import (
    CampusCreate,
    CampusReportSchema,
    CampusSchema,
    CampusUpdate,
    StaffTransferCreate,
    StaffTransferDecision,
    StaffTransferSchema,
    TransferCreate,
    TransferDecision,
    TransferSchema,
)
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.multicampus import CampusService

router = APIRouter(dependencies=[Depends(get_current_user)])

campus_admin = require_roles("staff")
transfer_staff = require_roles("hr", "staff")


@router.get("/campuses", response_model=ApiResponse[Page[CampusSchema]])
def list_campuses(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: PageParams = Depends(get_page_params),
    service: CampusService = Depends(get_campus_service),
):
    items, total = service.list_campuses(params.offset, params.limit, is_active=is_active)
    return paged(items, total, params.page, params.limit)


@router.post(
    "/campuses",
    response_model=ApiResponse[CampusSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(campus_admin)],
)
def create_campus(body: CampusCreate, service: CampusService = Depends(get_campus_service)):
    return ok(service.create_campus(body), "Campus created successfully")


@router.get("/campuses/{campus_id}", response_model=ApiResponse[CampusSchema])
def get_campus(campus_id: uuid.UUID, service: CampusService = Depends(get_campus_service)):
    return ok(service.get_campus(campus_id))


@router.put("/campuses/{campus_id}", response_model=ApiResponse[CampusSchema], dependencies=[Depends(campus_admin)])
def update_campus(campus_id: uuid.UUID, body: CampusUpdate, service: CampusService = Depends(get_campus_service)):
    return ok(service.update_campus(campus_id, body), "Campus updated successfully")


@router.get("/campuses/{campus_id}/report", response_model=ApiResponse[CampusReportSchema], dependencies=[Depends(campus_admin)])
def campus_report(
    campus_id: uuid.UUID,
    report_period: Optional[date] = Query(None, alias="reportPeriod"),
    service: CampusService = Depends(get_campus_service),
):
    return ok(service.campus_report(campus_id, report_period))


@router.get("/transfers", response_model=ApiResponse[Page[TransferSchema]])
def list_transfers(
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    transfer_status: Optional[str] = Query(None, alias="status"),
    campus_id: Optional[uuid.UUID] = Query(None, alias="campusId"),
    params: PageParams = Depends(get_page_params),
    service: CampusService = Depends(get_campus_service),
):
    items, total = service.list_transfers(
        params.offset, params.limit, student_id=student_id, status=transfer_status, campus_id=campus_id
    )
    return paged(items, total, params.page, params.limit)


@router.post("/transfers", response_model=ApiResponse[TransferSchema], status_code=status.HTTP_201_CREATED)
def request_transfer(body: TransferCreate, service: CampusService = Depends(get_campus_service)):
    """Ask to move a student between two different, active campuses"""
    return ok(service.request_transfer(body), "Transfer requested")


@router.get("/transfers/{transfer_id}", response_model=ApiResponse[TransferSchema])
def get_transfer(transfer_id: uuid.UUID, service: CampusService = Depends(get_campus_service)):
    return ok(service.get_transfer(transfer_id))


@router.patch("/transfers/{transfer_id}", response_model=ApiResponse[TransferSchema])
def decide_transfer(
    transfer_id: uuid.UUID,
    body: TransferDecision,
    current_user: CurrentUser = Depends(campus_admin),
    service: CampusService = Depends(get_campus_service),
):
    transfer = service.decide_transfer(
        transfer_id, body.status, current_user.id, body.effective_date, body.rejection_reason
    )
    return ok(transfer, f"Transfer {body.status}")


@router.get("/staff-transfers", response_model=ApiResponse[Page[StaffTransferSchema]], dependencies=[Depends(transfer_staff)])
def list_staff_transfers(
    employee_id: Optional[uuid.UUID] = Query(None, alias="employeeId"),
    transfer_status: Optional[str] = Query(None, alias="status"),
    transfer_type: Optional[str] = Query(None, alias="transferType"),
    campus_id: Optional[uuid.UUID] = Query(None, alias="campusId"),
    params: PageParams = Depends(get_page_params),
    service: CampusService = Depends(get_campus_service),
):
    items, total = service.list_staff_transfers(
        params.offset,
        params.limit,
        employee_id=employee_id,
        status=transfer_status,
        transfer_type=transfer_type,
        campus_id=campus_id,
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/staff-transfers",
    response_model=ApiResponse[StaffTransferSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(transfer_staff)],
)
def request_staff_transfer(body: StaffTransferCreate, service: CampusService = Depends(get_campus_service)):
    return ok(service.request_staff_transfer(body), "Staff transfer requested")


@router.get(
    "/staff-transfers/{transfer_id}",
    response_model=ApiResponse[StaffTransferSchema],
    dependencies=[Depends(transfer_staff)],
)
def get_staff_transfer(transfer_id: uuid.UUID, service: CampusService = Depends(get_campus_service)):
    return ok(service.get_staff_transfer(transfer_id))


@router.patch("/staff-transfers/{transfer_id}", response_model=ApiResponse[StaffTransferSchema])
def decide_staff_transfer(
    transfer_id: uuid.UUID,
    body: StaffTransferDecision,
    current_user: CurrentUser = Depends(transfer_staff),
    service: CampusService = Depends(get_campus_service),
):
    """Approval moves the employee to the destination campus"""
    transfer = service.decide_staff_transfer(
        transfer_id,
        body.status,
        current_user.id,
        body.effective_date,
        body.rejection_reason,
        body.remarks,
    )
    return ok(transfer, f"Staff transfer {body.status}")
