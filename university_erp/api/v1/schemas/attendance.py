"""Schemas for attendance marks and reports"""

import uuid
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from university_erp.api.v1.schemas.common import CamelModel

AttendanceStatus = Literal["present", "absent", "late", "excused"]


class AttendanceCreate(CamelModel):
    section_id: uuid.UUID
    student_id: uuid.UUID
    attendance_date: date
    status: AttendanceStatus
    remarks: Optional[str] = None


class AttendanceEntry(CamelModel):
    student_id: uuid.UUID
    status: AttendanceStatus
    remarks: Optional[str] = None


class AttendanceSheet(CamelModel):
    """One section, one date, one entry per student"""

    section_id: uuid.UUID
    attendance_date: date
    entries: List[AttendanceEntry] = Field(..., min_length=1)


class AttendanceUpdate(CamelModel):
    status: Optional[AttendanceStatus] = None
    remarks: Optional[str] = None


class AttendanceSchema(CamelModel):
    id: uuid.UUID
    section_id: uuid.UUID
    student_id: uuid.UUID
    attendance_date: date
    status: str
    marked_by: Optional[uuid.UUID] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class SectionAttendanceReport(CamelModel):
    section_id: uuid.UUID
    attendance_date: date
    total_students: int
    present: int
    absent: int
    late: int
    excused: int
    attendance_percentage: float
    records: List[AttendanceSchema]


class StudentAttendanceReport(CamelModel):
    student_id: uuid.UUID
    section_id: Optional[uuid.UUID] = None
    total_classes: int
    present: int
    absent: int
    late: int
    excused: int
    attendance_percentage: float
    records: List[AttendanceSchema]
