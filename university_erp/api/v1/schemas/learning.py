"""Schemas for assignments and submissions"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from university_erp.api.v1.schemas.common import CamelModel


class AssignmentCreate(CamelModel):
    course_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: datetime
    max_marks: float = Field(..., gt=0)
    is_published: bool = False


class AssignmentUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    max_marks: Optional[float] = Field(None, gt=0)
    is_published: Optional[bool] = None


class AssignmentSchema(CamelModel):
    id: uuid.UUID
    course_id: uuid.UUID
    title: str
    description: Optional[str] = None
    due_date: datetime
    max_marks: float
    is_published: bool
    created_by: Optional[uuid.UUID] = None


class SubmissionCreate(CamelModel):
    student_id: uuid.UUID
    submission_text: Optional[str] = None
    file_url: Optional[str] = None

    @model_validator(mode="after")
    def has_content(self):
        if not self.submission_text and not self.file_url:
            raise ValueError("Submission text or file URL is required")
        return self


class GradeSubmissionRequest(CamelModel):
    obtained_marks: float
    feedback: Optional[str] = None


class SubmissionSchema(CamelModel):
    id: uuid.UUID
    assignment_id: uuid.UUID
    student_id: uuid.UUID
    submission_text: Optional[str] = None
    file_url: Optional[str] = None
    submitted_at: datetime
    status: str
    obtained_marks: Optional[float] = None
    feedback: Optional[str] = None
    graded_by: Optional[uuid.UUID] = None
    graded_at: Optional[datetime] = None
