"""/certificates - requests, issuance and public verification"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from university_erp.api.dependencies import (
    PageParams,
    get_certification_service,
    get_current_user,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.certification import (
    CertificateDecision,
    CertificateRequestCreate,
    CertificateRequestSchema,
    CertificateSchema,
    CertificateType,
    ProcessCertificateRequest,
    VerificationSchema,
    VerifyRequest,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.domain.models import VerificationResult
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.certification import CertificationService

# Verification is public, so authentication is applied per route
router = APIRouter(prefix="/certificates")

registrar = require_roles("staff")


@router.get("/requests", response_model=ApiResponse[Page[CertificateRequestSchema]], dependencies=[Depends(get_current_user)])
def list_requests(
    student_id: Optional[uuid.UUID] = Query(None, alias="studentId"),
    request_status: Optional[str] = Query(None, alias="status"),
    certificate_type: Optional[CertificateType] = Query(None, alias="certificateType"),
    params: PageParams = Depends(get_page_params),
    service: CertificationService = Depends(get_certification_service),
):
    items, total = service.list_requests(
        params.offset, params.limit, student_id=student_id, status=request_status, certificate_type=certificate_type
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/requests",
    response_model=ApiResponse[CertificateRequestSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_request(body: CertificateRequestCreate, service: CertificationService = Depends(get_certification_service)):
    return ok(service.create_request(body), "Certificate request submitted")


@router.get("/requests/{request_id}", response_model=ApiResponse[CertificateRequestSchema], dependencies=[Depends(get_current_user)])
def get_request(request_id: uuid.UUID, service: CertificationService = Depends(get_certification_service)):
    return ok(service.get_request(request_id))


@router.patch("/requests/{request_id}", response_model=ApiResponse[CertificateRequestSchema])
def decide_request(
    request_id: uuid.UUID,
    body: CertificateDecision,
    current_user: CurrentUser = Depends(registrar),
    service: CertificationService = Depends(get_certification_service),
):
    """Approve or reject a pending request; approval requires any fee to be paid"""
    request = service.decide(request_id, body.status, current_user.id, body.rejection_reason, body.remarks)
    return ok(request, f"Certificate request {body.status}")


@router.post("/requests/{request_id}/fee-paid", response_model=ApiResponse[CertificateRequestSchema], dependencies=[Depends(registrar)])
def mark_fee_paid(request_id: uuid.UUID, service: CertificationService = Depends(get_certification_service)):
    return ok(service.mark_fee_paid(request_id), "Certificate fee marked as paid")


@router.post(
    "/requests/{request_id}/process",
    response_model=ApiResponse[CertificateSchema],
    status_code=status.HTTP_201_CREATED,
)
def process_request(
    request_id: uuid.UUID,
    body: Optional[ProcessCertificateRequest] = None,
    current_user: CurrentUser = Depends(registrar),
    service: CertificationService = Depends(get_certification_service),
):
    """Issue the certificate with a fresh certificate number and verification code"""
    body = body or ProcessCertificateRequest()
    certificate = service.process(request_id, current_user.id, body.issue_date, body.remarks)
    return ok(certificate, "Certificate issued successfully")


@router.post("/requests/{request_id}/ready", response_model=ApiResponse[CertificateRequestSchema], dependencies=[Depends(registrar)])
def mark_ready(request_id: uuid.UUID, service: CertificationService = Depends(get_certification_service)):
    return ok(service.mark_ready(request_id), "Certificate ready for delivery")


@router.get(
    "/requests/{request_id}/certificate",
    response_model=ApiResponse[CertificateSchema],
    dependencies=[Depends(get_current_user)],
)
def certificate_for_request(request_id: uuid.UUID, service: CertificationService = Depends(get_certification_service)):
    return ok(service.certificate_for_request(request_id))


# Public verification


def _verification_response(result: VerificationResult):
    data = VerificationSchema.model_validate(
        {
            "is_valid": result.is_valid,
            "message": result.message,
            "certificate": result.certificate,
            "certificate_type": result.certificate_type,
            "issue_date": result.issue_date,
            "student_name": result.student_name,
        }
    )
    if result.is_valid:
        return ok(data, "Certificate is valid")

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "success": False,
            "data": data.model_dump(mode="json", by_alias=True),
            "error": {"code": "NOT_FOUND", "message": result.message},
        },
    )


@router.get("/verify", response_model=ApiResponse[VerificationSchema])
def verify_certificate(
    verification_code: Optional[str] = Query(None, alias="verificationCode"),
    certificate_number: Optional[str] = Query(None, alias="certificateNumber"),
    service: CertificationService = Depends(get_certification_service),
):
    """Check a certificate by verification code or certificate number; no login required"""
    return _verification_response(service.verify(verification_code, certificate_number))


@router.post("/verify", response_model=ApiResponse[VerificationSchema])
def verify_certificate_body(body: VerifyRequest, service: CertificationService = Depends(get_certification_service)):
    return _verification_response(service.verify(body.verification_code, body.certificate_number))


@router.get("/{certificate_id}", response_model=ApiResponse[CertificateSchema], dependencies=[Depends(get_current_user)])
def get_certificate(certificate_id: uuid.UUID, service: CertificationService = Depends(get_certification_service)):
    return ok(service.get_certificate(certificate_id))
