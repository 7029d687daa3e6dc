"""Schemas for exams, results and re-evaluation requests"""

import uuid
from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import Field, model_validator

from university_erp.api.v1.schemas.common import CamelModel

ExamType = Literal["midterm", "final", "quiz", "assignment", "practical"]


class ExamCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    exam_type: ExamType
    course_id: Optional[uuid.UUID] = None
    semester: Optional[str] = None
    exam_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    total_marks: float = Field(..., gt=0)
    passing_marks: Optional[float] = Field(None, ge=0)
    venue: Optional[str] = None

    @model_validator(mode="after")
    def check_consistency(self):
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("Start time must be before end time")
        if self.passing_marks is not None and self.passing_marks > self.total_marks:
            raise ValueError("Passing marks cannot exceed total marks")
        return self


class ExamUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    exam_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    total_marks: Optional[float] = Field(None, gt=0)
    passing_marks: Optional[float] = Field(None, ge=0)
    venue: Optional[str] = None


class ExamSchema(CamelModel):
    id: uuid.UUID
    title: str
    exam_type: str
    course_id: Optional[uuid.UUID] = None
    semester: Optional[str] = None
    exam_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    total_marks: float
    passing_marks: Optional[float] = None
    venue: Optional[str] = None


class ResultCreate(CamelModel):
    exam_id: uuid.UUID
    student_id: uuid.UUID
    obtained_marks: float = Field(..., ge=0)
    total_marks: Optional[float] = Field(None, gt=0)
    remarks: Optional[str] = None


class ResultUpdate(CamelModel):
    obtained_marks: Optional[float] = Field(None, ge=0)
    total_marks: Optional[float] = Field(None, gt=0)
    reason: Optional[str] = None
    remarks: Optional[str] = None


class ResultSchema(CamelModel):
    id: uuid.UUID
    exam_id: uuid.UUID
    student_id: uuid.UUID
    obtained_marks: float
    total_marks: float
    percentage: float
    grade: str
    gpa: float
    is_pass: bool
    is_approved: bool
    entered_by: Optional[uuid.UUID] = None
    approved_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    remarks: Optional[str] = None


class GradeChangeSchema(CamelModel):
    id: uuid.UUID
    result_id: uuid.UUID
    previous_marks: float
    new_marks: float
    previous_grade: str
    new_grade: str
    reason: Optional[str] = None
    changed_by: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None


class ReEvaluationCreate(CamelModel):
    result_id: uuid.UUID
    reason: str = Field(..., min_length=1)


class ReEvaluationDecision(CamelModel):
    status: Literal["approved", "rejected", "completed"]
    revised_marks: Optional[float] = Field(None, ge=0)
    remarks: Optional[str] = None


class ReEvaluationSchema(CamelModel):
    id: uuid.UUID
    result_id: uuid.UUID
    student_id: uuid.UUID
    reason: str
    status: str
    revised_marks: Optional[float] = None
    remarks: Optional[str] = None
    decided_by: Optional[uuid.UUID] = None
    decided_at: Optional[datetime] = None
