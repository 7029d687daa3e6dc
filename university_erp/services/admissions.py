"""Admission applications, eligibility checks and merit lists"""

import logging
from typing import List, Optional, Tuple

from university_erp.config import settings
from university_erp.domain.admissions import evaluate_eligibility, generate_application_number, rank_merit_list
from university_erp.domain.exceptions import ConflictError
from university_erp.domain.models import EligibilityCriteriaRule, EligibilityResult, MeritEntry, Qualification
from university_erp.infrastructure.database.models import AdmissionApplication, EligibilityCriteria
from university_erp.infrastructure.database.repositories.academics import ProgramRepository
from university_erp.infrastructure.database.repositories.admissions import (
    ApplicationRepository,
    EligibilityCriteriaRepository,
)
from university_erp.infrastructure.database.repositories.users import UserRepository
from university_erp.infrastructure.observability.metrics import admission_applications_counter
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class AdmissionService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.applications = ApplicationRepository(db)
        self.criteria = EligibilityCriteriaRepository(db)
        self.programs = ProgramRepository(db)
        self.users = UserRepository(db)

    def list_applications(self, offset: int, limit: int, **filters) -> Tuple[List[AdmissionApplication], int]:
        return self.applications.list(offset, limit, **filters)

    def get_application(self, application_id) -> AdmissionApplication:
        return self.require(self.applications.get(application_id), "Application")

    def _unique_application_number(self) -> str:
        for _ in range(settings.identifier_max_attempts):
            number = generate_application_number()
            if not self.applications.number_exists(number):
                return number
        raise ConflictError("Could not allocate a unique application number")

    def create_application(self, data) -> AdmissionApplication:
        self.require(self.programs.get(data.program_id), "Program")
        self.require(self.users.get(data.user_id), "User")
        if self.applications.find_active_for_program(data.user_id, data.program_id):
            raise ConflictError("An active application for this program already exists")

        with self.transaction():
            application = self.applications.create(
                application_number=self._unique_application_number(),
                status="submitted",
                application_date=utcnow(),
                **data.model_dump(),
            )

        admission_applications_counter.inc()
        logger.info(
            "Admission application submitted",
            extra={"application_id": str(application.id), "application_number": application.application_number},
        )
        return application

    def update_status(self, application_id, status: str, reviewer_id, remarks: Optional[str] = None) -> AdmissionApplication:
        application = self.get_application(application_id)
        fields = {"status": status, "reviewed_by": as_uuid(reviewer_id), "reviewed_at": utcnow()}
        if remarks is not None:
            fields["remarks"] = remarks
        with self.transaction():
            self.applications.update(application, **fields)
        logger.info("Application status updated", extra={"application_id": str(application.id), "status": status})
        return application

    # Eligibility criteria

    def get_criteria(self, program_id) -> EligibilityCriteria:
        return self.require(self.criteria.get_for_program(program_id), "Eligibility criteria")

    def set_criteria(self, program_id, data) -> EligibilityCriteria:
        """Create or replace a program's eligibility criteria"""
        self.require(self.programs.get(program_id), "Program")
        existing = self.criteria.get_for_program(program_id)
        with self.transaction():
            if existing is None:
                existing = self.criteria.create(program_id=program_id, **data.model_dump())
            else:
                self.criteria.update(existing, **data.model_dump())
        return existing

    def check_eligibility(
        self,
        application_id,
        history: List[Qualification],
        entry_test: Optional[float] = None,
        interview: Optional[float] = None,
    ) -> Tuple[AdmissionApplication, EligibilityResult]:
        """Score the application and record the outcome on it"""
        application = self.get_application(application_id)
        row = self.criteria.get_for_program(application.program_id)
        rule = None
        if row is not None:
            rule = EligibilityCriteriaRule(
                minimum_marks=row.minimum_marks,
                minimum_cgpa=row.minimum_cgpa,
                age_limit=row.age_limit,
            )

        result = evaluate_eligibility(rule, history, entry_test=entry_test, interview=interview)
        outcome = "eligible" if result.is_eligible else "not_eligible"
        with self.transaction():
            self.applications.update(
                application,
                eligibility_status=outcome,
                eligibility_score=result.score,
                status=outcome,
            )

        logger.info(
            "Eligibility checked",
            extra={"application_id": str(application.id), "eligible": result.is_eligible, "score": result.score},
        )
        return application, result

    def generate_merit_list(
        self,
        program_id,
        total_seats: int,
        batch: Optional[str] = None,
        semester: Optional[str] = None,
    ) -> List[MeritEntry]:
        """Rank eligible applicants, then select or waitlist each one"""
        self.require(self.programs.get(program_id), "Program")
        candidates = self.applications.eligible_for_merit(program_id, batch, semester)
        entries = rank_merit_list(candidates, total_seats)
        by_id = {app.id: app for app in candidates}

        with self.transaction():
            for entry in entries:
                self.applications.update(by_id[entry.application_id], merit_rank=entry.rank, status=entry.status)

        logger.info(
            "Merit list generated",
            extra={"program_id": str(program_id), "candidates": len(entries), "total_seats": total_seats},
        )
        return entries

    def get_merit_rank(self, application_id) -> AdmissionApplication:
        return self.get_application(application_id)
