"""/programs, /courses and /sections - academic catalogue"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_academic_service,
    get_current_user,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.students import (
    CourseCreate,
    CourseSchema,
    CourseUpdate,
    ProgramCreate,
    ProgramSchema,
    ProgramUpdate,
    SectionCreate,
    SectionSchema,
    SectionUpdate,
)
from university_erp.services.academics import AcademicService

router = APIRouter(dependencies=[Depends(get_current_user)])

manage_catalogue = require_roles("staff")


@router.get("/programs", response_model=ApiResponse[Page[ProgramSchema]])
def list_programs(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: AcademicService = Depends(get_academic_service),
):
    items, total = service.list_programs(params.offset, params.limit, is_active=is_active, search=search)
    return paged(items, total, params.page, params.limit)


@router.post(
    "/programs",
    response_model=ApiResponse[ProgramSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(manage_catalogue)],
)
def create_program(body: ProgramCreate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.create_program(body), "Program created successfully")


@router.get("/programs/{program_id}", response_model=ApiResponse[ProgramSchema])
def get_program(program_id: uuid.UUID, service: AcademicService = Depends(get_academic_service)):
    return ok(service.get_program(program_id))


@router.put("/programs/{program_id}", response_model=ApiResponse[ProgramSchema], dependencies=[Depends(manage_catalogue)])
def update_program(program_id: uuid.UUID, body: ProgramUpdate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.update_program(program_id, body), "Program updated successfully")


@router.get("/programs/{program_id}/courses", response_model=ApiResponse[List[CourseSchema]])
def list_program_courses(program_id: uuid.UUID, service: AcademicService = Depends(get_academic_service)):
    """Courses offered by a program, by semester"""
    return ok(service.program_courses(program_id))


@router.get("/courses", response_model=ApiResponse[Page[CourseSchema]])
def list_courses(
    program_id: Optional[uuid.UUID] = Query(None, alias="programId"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: AcademicService = Depends(get_academic_service),
):
    items, total = service.list_courses(params.offset, params.limit, program_id=program_id, search=search)
    return paged(items, total, params.page, params.limit)


@router.post(
    "/courses",
    response_model=ApiResponse[CourseSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(manage_catalogue)],
)
def create_course(body: CourseCreate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.create_course(body), "Course created successfully")


@router.get("/courses/{course_id}", response_model=ApiResponse[CourseSchema])
def get_course(course_id: uuid.UUID, service: AcademicService = Depends(get_academic_service)):
    return ok(service.get_course(course_id))


@router.put("/courses/{course_id}", response_model=ApiResponse[CourseSchema], dependencies=[Depends(manage_catalogue)])
def update_course(course_id: uuid.UUID, body: CourseUpdate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.update_course(course_id, body), "Course updated successfully")


@router.get("/sections", response_model=ApiResponse[Page[SectionSchema]])
def list_sections(
    course_id: Optional[uuid.UUID] = Query(None, alias="courseId"),
    semester: Optional[str] = None,
    faculty_id: Optional[uuid.UUID] = Query(None, alias="facultyId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: PageParams = Depends(get_page_params),
    service: AcademicService = Depends(get_academic_service),
):
    items, total = service.list_sections(
        params.offset,
        params.limit,
        course_id=course_id,
        semester=semester,
        faculty_id=faculty_id,
        is_active=is_active,
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/sections",
    response_model=ApiResponse[SectionSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(manage_catalogue)],
)
def create_section(body: SectionCreate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.create_section(body), "Section created successfully")


@router.get("/sections/{section_id}", response_model=ApiResponse[SectionSchema])
def get_section(section_id: uuid.UUID, service: AcademicService = Depends(get_academic_service)):
    return ok(service.get_section(section_id))


@router.put("/sections/{section_id}", response_model=ApiResponse[SectionSchema], dependencies=[Depends(manage_catalogue)])
def update_section(section_id: uuid.UUID, body: SectionUpdate, service: AcademicService = Depends(get_academic_service)):
    return ok(service.update_section(section_id, body), "Section updated successfully")
