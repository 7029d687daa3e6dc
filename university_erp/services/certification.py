"""Certificate requests, issuance and public verification"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from university_erp.config import settings
from university_erp.domain.certificates import (
    ensure_can_decide,
    ensure_can_process,
    generate_certificate_number,
    generate_verification_code,
)
from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.domain.models import VerificationResult
from university_erp.infrastructure.database.models import Certificate, CertificateRequest
from university_erp.infrastructure.database.repositories.academics import StudentRepository
from university_erp.infrastructure.database.repositories.certification import (
    CertificateRepository,
    CertificateRequestRepository,
)
from university_erp.infrastructure.observability.metrics import certificates_issued_counter
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class CertificationService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.requests = CertificateRequestRepository(db)
        self.certificates = CertificateRepository(db)
        self.students = StudentRepository(db)

    def list_requests(self, offset: int, limit: int, **filters) -> Tuple[List[CertificateRequest], int]:
        return self.requests.list(offset, limit, **filters)

    def get_request(self, request_id) -> CertificateRequest:
        return self.require(self.requests.get(request_id), "Certificate request")

    def create_request(self, data) -> CertificateRequest:
        self.require(self.students.get(data.student_id), "Student")
        fields = data.model_dump()
        if fields["fee_paid"] and fields["fee_amount"] > 0:
            fields["fee_payment_date"] = utcnow()
        with self.transaction():
            request = self.requests.create(status="pending", **fields)
        logger.info(
            "Certificate requested",
            extra={"request_id": str(request.id), "certificate_type": request.certificate_type},
        )
        return request

    def decide(self, request_id, status: str, actor, rejection_reason: Optional[str] = None, remarks: Optional[str] = None) -> CertificateRequest:
        request = self.get_request(request_id)
        ensure_can_decide(request.status, status, request.fee_amount, request.fee_paid, rejection_reason)

        fields = {"status": status, "approved_by": as_uuid(actor), "approved_at": utcnow()}
        if status == "rejected":
            fields["rejection_reason"] = rejection_reason
        if remarks is not None:
            fields["remarks"] = remarks
        with self.transaction():
            self.requests.update(request, **fields)

        logger.info("Certificate request decided", extra={"request_id": str(request.id), "status": status})
        return request

    def mark_fee_paid(self, request_id) -> CertificateRequest:
        request = self.get_request(request_id)
        if request.fee_paid:
            raise ValidationError("Fee is already paid")
        with self.transaction():
            self.requests.update(request, fee_paid=True, fee_payment_date=utcnow())
        return request

    def _unique_identifiers(self, issue_date: date) -> Tuple[str, str]:
        for _ in range(settings.identifier_max_attempts):
            number = generate_certificate_number(issue_date)
            code = generate_verification_code()
            if not self.certificates.number_exists(number) and not self.certificates.code_exists(code):
                return number, code
        raise ConflictError("Could not allocate a unique certificate number")

    def process(self, request_id, actor, issue_date: Optional[date] = None, remarks: Optional[str] = None) -> Certificate:
        """
        Issue the certificate for an approved request.

        Writes the certificate row and moves the request to processing in
        one transaction.
        """
        request = self.get_request(request_id)
        ensure_can_process(request.status, request.fee_amount, request.fee_paid)
        student = self.require(self.students.get(request.student_id), "Student")

        issue_date = issue_date or date.today()
        number, code = self._unique_identifiers(issue_date)
        with self.transaction():
            certificate = self.certificates.create(
                certificate_request_id=request.id,
                student_id=student.id,
                certificate_type=request.certificate_type,
                certificate_number=number,
                verification_code=code,
                issue_date=issue_date,
                student_name=student.full_name,
                details={"rollNumber": student.roll_number, "purpose": request.purpose},
                issued_by=as_uuid(actor),
            )
            fields = {"status": "processing", "processed_by": as_uuid(actor), "processed_at": utcnow()}
            if remarks is not None:
                fields["remarks"] = remarks
            self.requests.update(request, **fields)

        certificates_issued_counter.inc()
        logger.info(
            "Certificate issued",
            extra={"certificate_id": str(certificate.id), "certificate_number": certificate.certificate_number},
        )
        return certificate

    def mark_ready(self, request_id) -> CertificateRequest:
        request = self.get_request(request_id)
        if request.status != "processing":
            raise ValidationError("Only requests in processing can be marked ready")
        with self.transaction():
            self.requests.update(request, status="ready")
        return request

    def get_certificate(self, certificate_id) -> Certificate:
        return self.require(self.certificates.get(certificate_id), "Certificate")

    def certificate_for_request(self, request_id) -> Certificate:
        self.get_request(request_id)
        return self.require(self.certificates.for_request(request_id), "Certificate")

    def verify(self, verification_code: Optional[str] = None, certificate_number: Optional[str] = None) -> VerificationResult:
        """Look up a certificate for public verification; never writes"""
        if not verification_code and not certificate_number:
            raise ValidationError("Verification code or certificate number is required")

        certificate = self.certificates.find_by_code_or_number(verification_code, certificate_number)
        if certificate is None:
            logger.info("Certificate verification failed", extra={"verification_code": verification_code, "certificate_number": certificate_number})
            return VerificationResult(is_valid=False, message="Certificate not found or invalid")

        return VerificationResult(
            is_valid=True,
            certificate=certificate,
            certificate_type=certificate.certificate_type,
            issue_date=certificate.issue_date,
            student_name=certificate.student_name,
        )
