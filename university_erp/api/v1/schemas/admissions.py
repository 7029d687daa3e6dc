"""Schemas for admission applications, eligibility and merit lists"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from university_erp.api.v1.schemas.common import CamelModel

ApplicationStatus = Literal[
    "submitted", "under_review", "eligible", "not_eligible", "selected", "waitlisted", "rejected", "admitted"
]


class ApplicationCreate(CamelModel):
    user_id: uuid.UUID
    program_id: uuid.UUID
    batch: Optional[str] = None
    semester: Optional[str] = None
    remarks: Optional[str] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus
    remarks: Optional[str] = None


class ApplicationSchema(CamelModel):
    id: uuid.UUID
    application_number: str
    user_id: uuid.UUID
    program_id: uuid.UUID
    batch: Optional[str] = None
    semester: Optional[str] = None
    status: str
    eligibility_status: Optional[str] = None
    eligibility_score: Optional[float] = None
    merit_rank: Optional[int] = None
    application_date: Optional[datetime] = None
    reviewed_by: Optional[uuid.UUID] = None
    reviewed_at: Optional[datetime] = None
    remarks: Optional[str] = None


class CriteriaUpsert(CamelModel):
    minimum_marks: Optional[float] = Field(None, ge=0, le=100)
    minimum_cgpa: Optional[float] = Field(None, ge=0, le=4)
    age_limit: Optional[int] = Field(None, gt=0)


class CriteriaSchema(CamelModel):
    id: uuid.UUID
    program_id: uuid.UUID
    minimum_marks: Optional[float] = None
    minimum_cgpa: Optional[float] = None
    age_limit: Optional[int] = None


class QualificationIn(CamelModel):
    degree: str = Field(..., min_length=1)
    marks: Optional[float] = Field(None, ge=0, le=100)
    cgpa: Optional[float] = Field(None, ge=0, le=4)
    year: int = Field(..., ge=1900, le=2100)


class TestScores(CamelModel):
    entry_test: Optional[float] = Field(None, ge=0, le=100)
    interview: Optional[float] = Field(None, ge=0, le=100)


class EligibilityCheckRequest(CamelModel):
    academic_history: List[QualificationIn] = Field(..., min_length=1)
    test_scores: Optional[TestScores] = None


class EligibilitySchema(CamelModel):
    application_id: uuid.UUID
    eligible: bool
    score: float
    reasons: List[str]
    status: str


class MeritListRequest(CamelModel):
    program_id: uuid.UUID
    batch: Optional[str] = None
    semester: Optional[str] = None
    total_seats: int = Field(..., ge=0)


class MeritEntrySchema(CamelModel):
    application_id: uuid.UUID
    application_number: str
    score: float
    rank: int
    status: str


class MeritListSchema(CamelModel):
    program_id: uuid.UUID
    total_seats: int
    selected: int
    waitlisted: int
    entries: List[MeritEntrySchema]


class MeritRankSchema(CamelModel):
    application_id: uuid.UUID
    application_number: str
    merit_rank: Optional[int] = None
    status: str
