"""Dependency injection for FastAPI endpoints"""

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from university_erp.config import settings
from university_erp.domain.exceptions import AuthenticationError, AuthorizationError
from university_erp.infrastructure.database.session import get_db
from university_erp.infrastructure.security import CurrentUser, decode_token, user_from_claims
from university_erp.services.academics import AcademicService
from university_erp.services.admissions import AdmissionService
from university_erp.services.attendance import AttendanceService
from university_erp.services.auth import AuthService
from university_erp.services.certification import CertificationService
from university_erp.services.dashboard import DashboardService
from university_erp.services.examinations import ExaminationService
from university_erp.services.finance import FinanceService
from university_erp.services.hr import HRService
from university_erp.services.learning import LearningService
from university_erp.services.library import LibraryService
from university_erp.services.multicampus import CampusService
from university_erp.services.payroll import PayrollService
from university_erp.services.students import StudentService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


# Authentication

def get_current_user(authorization: Optional[str] = Header(default=None)) -> CurrentUser:
    """Resolve the caller from a `Bearer <jwt>` Authorization header"""
    if not authorization:
        raise AuthenticationError("Authorization header missing")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError("Invalid authorization header format")

    return user_from_claims(decode_token(parts[1], expected_type="access"))


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    """Allow only the given roles; admins always pass"""

    def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role != "admin" and current_user.role not in roles:
            raise AuthorizationError("You do not have permission to perform this action")
        return current_user

    return checker


# Pagination

@dataclass
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_page_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page"),
) -> PageParams:
    return PageParams(page=page, limit=limit)


# Services, built per request from the request's session

def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_academic_service(db: Session = Depends(get_db)) -> AcademicService:
    return AcademicService(db)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(db)


def get_admission_service(db: Session = Depends(get_db)) -> AdmissionService:
    return AdmissionService(db)


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db)


def get_examination_service(db: Session = Depends(get_db)) -> ExaminationService:
    return ExaminationService(db)


def get_finance_service(db: Session = Depends(get_db)) -> FinanceService:
    return FinanceService(db)


def get_payroll_service(db: Session = Depends(get_db)) -> PayrollService:
    return PayrollService(db)


def get_hr_service(db: Session = Depends(get_db)) -> HRService:
    return HRService(db)


def get_library_service(db: Session = Depends(get_db)) -> LibraryService:
    return LibraryService(db)


def get_learning_service(db: Session = Depends(get_db)) -> LearningService:
    return LearningService(db)


def get_certification_service(db: Session = Depends(get_db)) -> CertificationService:
    return CertificationService(db)


def get_campus_service(db: Session = Depends(get_db)) -> CampusService:
    return CampusService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
