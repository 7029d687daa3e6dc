"""/attendance - class attendance marking and reports"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_attendance_service,
    get_current_user,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.attendance import (
    AttendanceCreate,
    AttendanceSchema,
    AttendanceSheet,
    AttendanceStatus,
    AttendanceUpdate,
    SectionAttendanceReport,
    StudentAttendanceReport,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.attendance import AttendanceService

router = APIRouter(prefix="/attendance", dependencies=[Depends(get_current_user)])

mark_attendance = require_roles("faculty", "staff")


@router.get("", response_model=ApiResponse[Page[AttendanceSchema]], dependencies=[Depends(mark_attendance)])
def list_attendance(
    section_id: Optional[uuid.UUID] = Query(None, alias="sectionId"),
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    attendance_date: Optional[date] = Query(None, alias="attendanceDate"),
    attendance_status: Optional[AttendanceStatus] = Query(None, alias="status"),
    params: PageParams = Depends(get_page_params),
    service: AttendanceService = Depends(get_attendance_service),
):
    items, total = service.list_records(
        params.offset,
        params.limit,
        section_id=section_id,
        student_id=student_id,
        attendance_date=attendance_date,
        status=attendance_status,
    )
    return paged(items, total, params.page, params.limit)


@router.post("", response_model=ApiResponse[AttendanceSchema], status_code=status.HTTP_201_CREATED)
def mark_attendance_record(
    body: AttendanceCreate,
    current_user: CurrentUser = Depends(mark_attendance),
    service: AttendanceService = Depends(get_attendance_service),
):
    return ok(service.mark(body, current_user.id), "Attendance marked successfully")


@router.post("/bulk", response_model=ApiResponse[List[AttendanceSchema]], status_code=status.HTTP_201_CREATED)
def mark_attendance_sheet(
    body: AttendanceSheet,
    current_user: CurrentUser = Depends(mark_attendance),
    service: AttendanceService = Depends(get_attendance_service),
):
    records = service.mark_bulk(body, current_user.id)
    return ok(records, f"Attendance marked for {len(records)} students")


@router.get(
    "/sections/{section_id}/report",
    response_model=ApiResponse[SectionAttendanceReport],
    dependencies=[Depends(mark_attendance)],
)
def section_report(
    section_id: uuid.UUID,
    attendance_date: date = Query(..., alias="date"),
    service: AttendanceService = Depends(get_attendance_service),
):
    return ok(service.section_report(section_id, attendance_date))


@router.get("/students/{student_id}/report", response_model=ApiResponse[StudentAttendanceReport])
def student_report(
    student_id: uuid.UUID,
    section_id: Optional[uuid.UUID] = Query(None, alias="sectionId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: AttendanceService = Depends(get_attendance_service),
):
    """Any signed-in user; percentage counts present marks only"""
    return ok(service.student_report(student_id, section_id, start_date, end_date))


@router.get("/{record_id}", response_model=ApiResponse[AttendanceSchema], dependencies=[Depends(mark_attendance)])
def get_attendance(record_id: uuid.UUID, service: AttendanceService = Depends(get_attendance_service)):
    return ok(service.get_record(record_id))


@router.patch("/{record_id}", response_model=ApiResponse[AttendanceSchema], dependencies=[Depends(mark_attendance)])
def update_attendance(
    record_id: uuid.UUID,
    body: AttendanceUpdate,
    service: AttendanceService = Depends(get_attendance_service),
):
    return ok(service.update_record(record_id, body), "Attendance updated successfully")
