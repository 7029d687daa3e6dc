"""Data access for certificate requests and issued certificates"""

from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import Certificate, CertificateRequest
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class CertificateRequestRepository(BaseRepository[CertificateRequest]):
    model = CertificateRequest

    def list(
        self,
        offset: int,
        limit: int,
        student_id=None,
        status: Optional[str] = None,
        certificate_type: Optional[str] = None,
    ) -> Tuple[List[CertificateRequest], int]:
        query = self.db.query(CertificateRequest)
        if student_id:
            query = query.filter(CertificateRequest.student_id == student_id)
        if status:
            query = query.filter(CertificateRequest.status == status)
        if certificate_type:
            query = query.filter(CertificateRequest.certificate_type == certificate_type)
        return paginate(query.order_by(CertificateRequest.created_at.desc()), offset, limit)


class CertificateRepository(BaseRepository[Certificate]):
    model = Certificate

    def number_exists(self, certificate_number: str) -> bool:
        return self.exists(certificate_number=certificate_number)

    def code_exists(self, verification_code: str) -> bool:
        return self.exists(verification_code=verification_code)

    def find_by_code_or_number(self, verification_code: Optional[str] = None, certificate_number: Optional[str] = None) -> Optional[Certificate]:
        query = self.db.query(Certificate)
        if verification_code:
            return query.filter(Certificate.verification_code == verification_code).first()
        return query.filter(Certificate.certificate_number == certificate_number).first()

    def for_request(self, request_id) -> Optional[Certificate]:
        return self.db.query(Certificate).filter(Certificate.certificate_request_id == request_id).first()

    def for_student(self, student_id) -> List[Certificate]:
        return (
            self.db.query(Certificate)
            .filter(Certificate.student_id == student_id)
            .order_by(Certificate.issue_date.desc())
            .all()
        )
