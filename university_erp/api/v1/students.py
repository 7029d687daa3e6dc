"""/students - student records, CGPA and results"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_page_params,
    get_student_service,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.students import (
    CgpaSchema,
    EnrollmentStatus,
    StudentCreate,
    StudentResultsSchema,
    StudentSchema,
    StudentUpdate,
)
from university_erp.services.students import StudentService

router = APIRouter(prefix="/students", dependencies=[Depends(get_current_user)])

manage_students = require_roles("staff")


@router.get("", response_model=ApiResponse[Page[StudentSchema]], dependencies=[Depends(require_roles("staff", "faculty"))])
def list_students(
    program_id: Optional[uuid.UUID] = Query(None, alias="programId"),
    batch: Optional[str] = None,
    enrollment_status: Optional[EnrollmentStatus] = Query(None, alias="enrollmentStatus"),
    campus_id: Optional[uuid.UUID] = Query(None, alias="campusId"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: StudentService = Depends(get_student_service),
):
    """
    List students, newest first.

    `search` matches roll number, first name, last name or email.
    """
    items, total = service.list_students(
        params.offset,
        params.limit,
        program_id=program_id,
        batch=batch,
        enrollment_status=enrollment_status,
        campus_id=campus_id,
        search=search,
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "",
    response_model=ApiResponse[StudentSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(manage_students)],
)
def create_student(body: StudentCreate, service: StudentService = Depends(get_student_service)):
    return ok(service.create_student(body), "Student created successfully")


@router.get("/{student_id}", response_model=ApiResponse[StudentSchema])
def get_student(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    return ok(service.get_student(student_id))


@router.put("/{student_id}", response_model=ApiResponse[StudentSchema], dependencies=[Depends(manage_students)])
def update_student(student_id: uuid.UUID, body: StudentUpdate, service: StudentService = Depends(get_student_service)):
    return ok(service.update_student(student_id, body), "Student updated successfully")


@router.delete("/{student_id}", response_model=ApiResponse[StudentSchema], dependencies=[Depends(manage_students)])
def delete_student(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    """Soft delete: marks the student as withdrawn"""
    return ok(service.withdraw_student(student_id), "Student withdrawn successfully")


@router.get("/{student_id}/cgpa", response_model=ApiResponse[CgpaSchema])
def get_cgpa(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    cgpa, count = service.get_cgpa(student_id)
    return ok({"student_id": student_id, "cgpa": cgpa, "results_count": count})


@router.get("/{student_id}/results", response_model=ApiResponse[StudentResultsSchema])
def get_results(student_id: uuid.UUID, service: StudentService = Depends(get_student_service)):
    return ok({"student_id": student_id, "results": service.get_results(student_id)})
