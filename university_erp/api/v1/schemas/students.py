"""Schemas for programs, courses, sections and students"""

import re
import uuid
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from university_erp.api.v1.schemas.common import CamelModel

EnrollmentStatus = Literal["active", "suspended", "graduated", "withdrawn"]

BATCH_PATTERN = re.compile(r"^\d{4}-(Fall|Spring|Summer)$", re.IGNORECASE)


def check_batch(value: Optional[str]) -> Optional[str]:
    if value is not None and not BATCH_PATTERN.match(value):
        raise ValueError("Batch must be in YYYY-Fall, YYYY-Spring or YYYY-Summer format")
    return value


class ProgramCreate(CamelModel):
    code: str = Field(..., min_length=2, max_length=20)
    name: str = Field(..., min_length=1, max_length=200)
    department: Optional[str] = None
    duration_years: int = Field(4, ge=1, le=10)
    total_credits: Optional[int] = Field(None, gt=0)
    is_active: bool = True


class ProgramUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    department: Optional[str] = None
    duration_years: Optional[int] = Field(None, ge=1, le=10)
    total_credits: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None


class ProgramSchema(CamelModel):
    id: uuid.UUID
    code: str
    name: str
    department: Optional[str] = None
    duration_years: int
    total_credits: Optional[int] = None
    is_active: bool


class CourseCreate(CamelModel):
    code: str = Field(..., min_length=2, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    credit_hours: int = Field(3, ge=1, le=6)
    program_id: Optional[uuid.UUID] = None
    semester: Optional[int] = Field(None, ge=1, le=12)


class CourseUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    credit_hours: Optional[int] = Field(None, ge=1, le=6)
    program_id: Optional[uuid.UUID] = None
    semester: Optional[int] = Field(None, ge=1, le=12)
    is_active: Optional[bool] = None


class CourseSchema(CamelModel):
    id: uuid.UUID
    code: str
    title: str
    credit_hours: int
    program_id: Optional[uuid.UUID] = None
    semester: Optional[int] = None
    is_active: bool


class SectionCreate(CamelModel):
    course_id: uuid.UUID
    section_code: str = Field(..., min_length=1, max_length=10)
    semester: str = Field(..., min_length=1, max_length=20)
    faculty_id: Optional[uuid.UUID] = None
    max_capacity: int = Field(..., gt=0)
    current_enrollment: int = Field(0, ge=0)
    room: Optional[str] = Field(None, max_length=50)
    is_active: bool = True

    @model_validator(mode="after")
    def check_enrollment(self):
        if self.current_enrollment > self.max_capacity:
            raise ValueError("Current enrollment cannot exceed max capacity")
        return self


class SectionUpdate(CamelModel):
    faculty_id: Optional[uuid.UUID] = None
    max_capacity: Optional[int] = Field(None, gt=0)
    current_enrollment: Optional[int] = Field(None, ge=0)
    room: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class SectionSchema(CamelModel):
    id: uuid.UUID
    course_id: uuid.UUID
    section_code: str
    semester: str
    faculty_id: Optional[uuid.UUID] = None
    max_capacity: int
    current_enrollment: int
    room: Optional[str] = None
    is_active: bool


class StudentCreate(CamelModel):
    user_id: Optional[uuid.UUID] = None
    roll_number: str = Field(..., min_length=3, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    program_id: Optional[uuid.UUID] = None
    batch: str
    current_semester: int = Field(1, ge=1, le=12)
    enrollment_status: EnrollmentStatus = "active"
    admission_date: Optional[date] = None
    campus_id: Optional[uuid.UUID] = None

    @field_validator("batch")
    @classmethod
    def valid_batch(cls, value: str) -> str:
        return check_batch(value)


class StudentUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    program_id: Optional[uuid.UUID] = None
    batch: Optional[str] = None
    current_semester: Optional[int] = Field(None, ge=1, le=12)
    enrollment_status: Optional[EnrollmentStatus] = None
    campus_id: Optional[uuid.UUID] = None

    @field_validator("batch")
    @classmethod
    def valid_batch(cls, value: Optional[str]) -> Optional[str]:
        return check_batch(value)


class StudentSchema(CamelModel):
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    roll_number: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    program_id: Optional[uuid.UUID] = None
    batch: str
    current_semester: int
    enrollment_status: str
    admission_date: Optional[date] = None
    campus_id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None


class CgpaSchema(CamelModel):
    student_id: uuid.UUID
    cgpa: float
    results_count: int


class StudentResultsSchema(CamelModel):
    student_id: uuid.UUID
    results: List["ResultSummary"]


class ResultSummary(CamelModel):
    id: uuid.UUID
    exam_id: uuid.UUID
    obtained_marks: float
    total_marks: float
    percentage: float
    grade: str
    gpa: float
    is_pass: bool
    is_approved: bool


StudentResultsSchema.model_rebuild()
