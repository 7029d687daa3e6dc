"""/exams, /results and /re-evaluations"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_examination_service,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.examinations import (
    ExamCreate,
    ExamSchema,
    ExamType,
    ExamUpdate,
    GradeChangeSchema,
    ReEvaluationCreate,
    ReEvaluationDecision,
    ReEvaluationSchema,
    ResultCreate,
    ResultSchema,
    ResultUpdate,
)
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.examinations import ExaminationService

router = APIRouter(dependencies=[Depends(get_current_user)])

examiners = require_roles("faculty", "staff")


@router.get("/exams", response_model=ApiResponse[Page[ExamSchema]])
def list_exams(
    course_id: Optional[uuid.UUID] = Query(None, alias="courseId"),
    exam_type: Optional[ExamType] = Query(None, alias="examType"),
    semester: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: ExaminationService = Depends(get_examination_service),
):
    items, total = service.list_exams(params.offset, params.limit, course_id=course_id, exam_type=exam_type, semester=semester)
    return paged(items, total, params.page, params.limit)


@router.post("/exams", response_model=ApiResponse[ExamSchema], status_code=status.HTTP_201_CREATED, dependencies=[Depends(examiners)])
def create_exam(body: ExamCreate, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.create_exam(body), "Exam created successfully")


@router.get("/exams/{exam_id}", response_model=ApiResponse[ExamSchema])
def get_exam(exam_id: uuid.UUID, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.get_exam(exam_id))


@router.put("/exams/{exam_id}", response_model=ApiResponse[ExamSchema], dependencies=[Depends(examiners)])
def update_exam(exam_id: uuid.UUID, body: ExamUpdate, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.update_exam(exam_id, body), "Exam updated successfully")


@router.get("/results", response_model=ApiResponse[Page[ResultSchema]])
def list_results(
    exam_id: Optional[uuid.UUID] = Query(None, alias="examId"),
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    is_approved: Optional[bool] = Query(None, alias="isApproved"),
    params: PageParams = Depends(get_page_params),
    service: ExaminationService = Depends(get_examination_service),
):
    items, total = service.list_results(
        params.offset, params.limit, exam_id=exam_id, student_id=student_id, is_approved=is_approved
    )
    return paged(items, total, params.page, params.limit)


@router.post("/results", response_model=ApiResponse[ResultSchema], status_code=status.HTTP_201_CREATED)
def create_result(
    body: ResultCreate,
    current_user: CurrentUser = Depends(examiners),
    service: ExaminationService = Depends(get_examination_service),
):
    """Record marks; percentage, grade, GPA and pass flag are derived"""
    return ok(service.create_result(body, current_user.id), "Result created successfully")


@router.get("/results/{result_id}", response_model=ApiResponse[ResultSchema])
def get_result(result_id: uuid.UUID, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.get_result(result_id))


@router.put("/results/{result_id}", response_model=ApiResponse[ResultSchema])
def update_result(
    result_id: uuid.UUID,
    body: ResultUpdate,
    current_user: CurrentUser = Depends(examiners),
    service: ExaminationService = Depends(get_examination_service),
):
    return ok(service.update_result(result_id, body, current_user.id), "Result updated successfully")


@router.post("/results/{result_id}/approve", response_model=ApiResponse[ResultSchema])
def approve_result(
    result_id: uuid.UUID,
    current_user: CurrentUser = Depends(require_roles("staff")),
    service: ExaminationService = Depends(get_examination_service),
):
    return ok(service.approve_result(result_id, current_user.id), "Result approved")


@router.get("/results/{result_id}/history", response_model=ApiResponse[List[GradeChangeSchema]])
def grade_history(result_id: uuid.UUID, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.grade_history(result_id))


@router.get("/re-evaluations", response_model=ApiResponse[Page[ReEvaluationSchema]])
def list_re_evaluations(
    request_status: Optional[str] = Query(None, alias="status"),
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    params: PageParams = Depends(get_page_params),
    service: ExaminationService = Depends(get_examination_service),
):
    items, total = service.list_re_evaluations(params.offset, params.limit, status=request_status, student_id=student_id)
    return paged(items, total, params.page, params.limit)


@router.post("/re-evaluations", response_model=ApiResponse[ReEvaluationSchema], status_code=status.HTTP_201_CREATED)
def request_re_evaluation(body: ReEvaluationCreate, service: ExaminationService = Depends(get_examination_service)):
    return ok(service.request_re_evaluation(body.result_id, body.reason), "Re-evaluation requested")


@router.patch("/re-evaluations/{request_id}", response_model=ApiResponse[ReEvaluationSchema])
def decide_re_evaluation(
    request_id: uuid.UUID,
    body: ReEvaluationDecision,
    current_user: CurrentUser = Depends(examiners),
    service: ExaminationService = Depends(get_examination_service),
):
    request = service.decide_re_evaluation(request_id, body.status, current_user.id, body.revised_marks, body.remarks)
    return ok(request, f"Re-evaluation {body.status}")
