"""/learning - assignments and submissions"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_learning_service,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.learning import (
    AssignmentCreate,
    AssignmentSchema,
    AssignmentUpdate,
    GradeSubmissionRequest,
    SubmissionCreate,
    SubmissionSchema,
)
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.learning import LearningService

router = APIRouter(prefix="/learning", dependencies=[Depends(get_current_user)])

instructors = require_roles("faculty")


@router.get("/assignments", response_model=ApiResponse[Page[AssignmentSchema]])
def list_assignments(
    course_id: Optional[uuid.UUID] = Query(None, alias="courseId"),
    is_published: Optional[bool] = Query(None, alias="isPublished"),
    params: PageParams = Depends(get_page_params),
    service: LearningService = Depends(get_learning_service),
):
    items, total = service.list_assignments(params.offset, params.limit, course_id=course_id, is_published=is_published)
    return paged(items, total, params.page, params.limit)


@router.post("/assignments", response_model=ApiResponse[AssignmentSchema], status_code=status.HTTP_201_CREATED)
def create_assignment(
    body: AssignmentCreate,
    current_user: CurrentUser = Depends(instructors),
    service: LearningService = Depends(get_learning_service),
):
    return ok(service.create_assignment(body, current_user.id), "Assignment created successfully")


@router.get("/assignments/{assignment_id}", response_model=ApiResponse[AssignmentSchema])
def get_assignment(assignment_id: uuid.UUID, service: LearningService = Depends(get_learning_service)):
    return ok(service.get_assignment(assignment_id))


@router.put("/assignments/{assignment_id}", response_model=ApiResponse[AssignmentSchema], dependencies=[Depends(instructors)])
def update_assignment(
    assignment_id: uuid.UUID, body: AssignmentUpdate, service: LearningService = Depends(get_learning_service)
):
    return ok(service.update_assignment(assignment_id, body), "Assignment updated successfully")


@router.post(
    "/assignments/{assignment_id}/publish",
    response_model=ApiResponse[AssignmentSchema],
    dependencies=[Depends(instructors)],
)
def publish_assignment(assignment_id: uuid.UUID, service: LearningService = Depends(get_learning_service)):
    return ok(service.publish(assignment_id), "Assignment published")


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=ApiResponse[SubmissionSchema],
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: uuid.UUID, body: SubmissionCreate, service: LearningService = Depends(get_learning_service)
):
    """Submit work for a published assignment; submissions after the due date are marked late"""
    return ok(service.submit(assignment_id, body), "Assignment submitted successfully")


@router.get("/submissions", response_model=ApiResponse[Page[SubmissionSchema]])
def list_submissions(
    assignment_id: Optional[uuid.UUID] = Query(None, alias="assignmentId"),
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    submission_status: Optional[str] = Query(None, alias="status"),
    params: PageParams = Depends(get_page_params),
    service: LearningService = Depends(get_learning_service),
):
    items, total = service.list_submissions(
        params.offset, params.limit, assignment_id=assignment_id, student_id=student_id, status=submission_status
    )
    return paged(items, total, params.page, params.limit)


@router.get("/submissions/{submission_id}", response_model=ApiResponse[SubmissionSchema])
def get_submission(submission_id: uuid.UUID, service: LearningService = Depends(get_learning_service)):
    return ok(service.get_submission(submission_id))


@router.post("/submissions/{submission_id}/grade", response_model=ApiResponse[SubmissionSchema])
def grade_submission(
    submission_id: uuid.UUID,
    body: GradeSubmissionRequest,
    current_user: CurrentUser = Depends(instructors),
    service: LearningService = Depends(get_learning_service),
):
    submission = service.grade(submission_id, body.obtained_marks, current_user.id, body.feedback)
    return ok(submission, "Submission graded")
