"""Data access for admission applications and eligibility criteria"""

from typing import List, Optional, Tuple

from university_erp.domain.admissions import ACTIVE_APPLICATION_STATUSES
from university_erp.infrastructure.database.models import AdmissionApplication, EligibilityCriteria
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate, search_filter


class ApplicationRepository(BaseRepository[AdmissionApplication]):
    model = AdmissionApplication

    def number_exists(self, application_number: str) -> bool:
        return self.exists(application_number=application_number)

    def find_active_for_program(self, user_id, program_id) -> Optional[AdmissionApplication]:
        return (
            self.db.query(AdmissionApplication)
            .filter(
                AdmissionApplication.user_id == user_id,
                AdmissionApplication.program_id == program_id,
                AdmissionApplication.status.in_(ACTIVE_APPLICATION_STATUSES),
            )
            .first()
        )

    def list(
        self,
        offset: int,
        limit: int,
        program_id=None,
        status: Optional[str] = None,
        user_id=None,
        search: Optional[str] = None,
    ) -> Tuple[List[AdmissionApplication], int]:
        query = self.db.query(AdmissionApplication)
        if program_id:
            query = query.filter(AdmissionApplication.program_id == program_id)
        if status:
            query = query.filter(AdmissionApplication.status == status)
        if user_id:
            query = query.filter(AdmissionApplication.user_id == user_id)
        if search:
            query = query.filter(search_filter(search, AdmissionApplication.application_number))
        return paginate(query.order_by(AdmissionApplication.application_date.desc()), offset, limit)

    def eligible_for_merit(self, program_id, batch: Optional[str] = None, semester: Optional[str] = None) -> List[AdmissionApplication]:
        query = self.db.query(AdmissionApplication).filter(
            AdmissionApplication.program_id == program_id,
            AdmissionApplication.eligibility_status == "eligible",
        )
        if batch:
            query = query.filter(AdmissionApplication.batch == batch)
        if semester:
            query = query.filter(AdmissionApplication.semester == semester)
        return query.all()


class EligibilityCriteriaRepository(BaseRepository[EligibilityCriteria]):
    model = EligibilityCriteria

    def get_for_program(self, program_id) -> Optional[EligibilityCriteria]:
        return self.db.query(EligibilityCriteria).filter(EligibilityCriteria.program_id == program_id).first()
