"""/admissions - applications, eligibility criteria and merit lists"""

import uuid
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_admission_service,
    get_current_user,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.admissions import (
    ApplicationCreate,
    ApplicationSchema,
    ApplicationStatus,
    ApplicationStatusUpdate,
    CriteriaSchema,
    CriteriaUpsert,
    EligibilityCheckRequest,
    EligibilitySchema,
    MeritListRequest,
    MeritListSchema,
    MeritRankSchema,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.domain.models import Qualification
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.admissions import AdmissionService

router = APIRouter(prefix="/admissions", dependencies=[Depends(get_current_user)])

admissions_office = require_roles("staff")


@router.get("/applications", response_model=ApiResponse[Page[ApplicationSchema]])
def list_applications(
    program_id: Optional[uuid.UUID] = Query(None, alias="programId"),
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    user_id: Optional[uuid.UUID] = Query(None, alias="userId"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: AdmissionService = Depends(get_admission_service),
):
    items, total = service.list_applications(
        params.offset, params.limit, program_id=program_id, status=application_status, user_id=user_id, search=search
    )
    return paged(items, total, params.page, params.limit)


@router.post("/applications", response_model=ApiResponse[ApplicationSchema], status_code=status.HTTP_201_CREATED)
def create_application(body: ApplicationCreate, service: AdmissionService = Depends(get_admission_service)):
    """Submit an application; numbers look like APP-2025-48213"""
    return ok(service.create_application(body), "Application submitted successfully")


@router.get("/applications/{application_id}", response_model=ApiResponse[ApplicationSchema])
def get_application(application_id: uuid.UUID, service: AdmissionService = Depends(get_admission_service)):
    return ok(service.get_application(application_id))


@router.patch("/applications/{application_id}/status", response_model=ApiResponse[ApplicationSchema])
def update_application_status(
    application_id: uuid.UUID,
    body: ApplicationStatusUpdate,
    current_user: CurrentUser = Depends(admissions_office),
    service: AdmissionService = Depends(get_admission_service),
):
    application = service.update_status(application_id, body.status, current_user.id, body.remarks)
    return ok(application, "Application status updated")


@router.post(
    "/applications/{application_id}/eligibility",
    response_model=ApiResponse[EligibilitySchema],
    dependencies=[Depends(admissions_office)],
)
def check_eligibility(
    application_id: uuid.UUID,
    body: EligibilityCheckRequest,
    service: AdmissionService = Depends(get_admission_service),
):
    """
    Score an application against its program's eligibility criteria.

    Uses the most recent qualification in the academic history. Meeting
    the minimum marks gives 50 points, the entry test up to 30 and the
    interview up to 20.
    """
    history = [Qualification(degree=q.degree, year=q.year, marks=q.marks, cgpa=q.cgpa) for q in body.academic_history]
    scores = body.test_scores
    application, result = service.check_eligibility(
        application_id,
        history,
        entry_test=scores.entry_test if scores else None,
        interview=scores.interview if scores else None,
    )
    return ok(
        {
            "application_id": application.id,
            "eligible": result.is_eligible,
            "score": result.score,
            "reasons": result.reasons,
            "status": application.status,
        }
    )


@router.get("/applications/{application_id}/merit-rank", response_model=ApiResponse[MeritRankSchema])
def get_merit_rank(application_id: uuid.UUID, service: AdmissionService = Depends(get_admission_service)):
    application = service.get_merit_rank(application_id)
    return ok(
        {
            "application_id": application.id,
            "application_number": application.application_number,
            "merit_rank": application.merit_rank,
            "status": application.status,
        }
    )


@router.get("/programs/{program_id}/criteria", response_model=ApiResponse[CriteriaSchema])
def get_criteria(program_id: uuid.UUID, service: AdmissionService = Depends(get_admission_service)):
    return ok(service.get_criteria(program_id))


@router.put(
    "/programs/{program_id}/criteria",
    response_model=ApiResponse[CriteriaSchema],
    dependencies=[Depends(admissions_office)],
)
def set_criteria(program_id: uuid.UUID, body: CriteriaUpsert, service: AdmissionService = Depends(get_admission_service)):
    return ok(service.set_criteria(program_id, body), "Eligibility criteria saved")


@router.post("/merit-list", response_model=ApiResponse[MeritListSchema], dependencies=[Depends(admissions_office)])
def generate_merit_list(body: MeritListRequest, service: AdmissionService = Depends(get_admission_service)):
    entries = service.generate_merit_list(body.program_id, body.total_seats, body.batch, body.semester)
    selected = sum(1 for entry in entries if entry.status == "selected")
    return ok(
        {
            "program_id": body.program_id,
            "total_seats": body.total_seats,
            "selected": selected,
            "waitlisted": len(entries) - selected,
            "entries": [asdict(entry) for entry in entries],
        },
        "Merit list generated",
    )
