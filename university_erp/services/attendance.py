"""Attendance marking and attendance reports"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from university_erp.domain.attendance import ensure_unique_students, tally_attendance
from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.infrastructure.database.models import AttendanceRecord, CourseSection
from university_erp.infrastructure.database.repositories.academics import SectionRepository, StudentRepository
from university_erp.infrastructure.database.repositories.attendance import AttendanceRepository
from university_erp.infrastructure.observability.metrics import attendance_marks_counter
from university_erp.services.base import BaseService, as_uuid

logger = logging.getLogger(__name__)

DUPLICATE_MARK = "Attendance already exists for this date"


class AttendanceService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.records = AttendanceRepository(db)
        self.sections = SectionRepository(db)
        self.students = StudentRepository(db)

    def _section(self, section_id) -> CourseSection:
        return self.require(self.sections.get(section_id), "Section")

    def list_records(self, offset: int, limit: int, **filters) -> Tuple[List[AttendanceRecord], int]:
        return self.records.list(offset, limit, **filters)

    def get_record(self, record_id) -> AttendanceRecord:
        return self.require(self.records.get(record_id), "Attendance record")

    def mark(self, data, actor) -> AttendanceRecord:
        self._section(data.section_id)
        self.require(self.students.get(data.student_id), "Student")
        if self.records.is_marked(data.section_id, data.student_id, data.attendance_date):
            raise ConflictError(DUPLICATE_MARK)

        with self.transaction(ConflictError(DUPLICATE_MARK)):
            record = self.records.create(marked_by=as_uuid(actor), **data.model_dump())
        attendance_marks_counter.labels(status=record.status).inc()
        return record

    def mark_bulk(self, data, actor) -> List[AttendanceRecord]:
        """
        Record a whole sheet for one section and date.

        The sheet is all or nothing: an unknown student or a student already
        marked for the date rejects every entry.
        """
        self._section(data.section_id)
        student_ids = [entry.student_id for entry in data.entries]
        ensure_unique_students(student_ids)
        for student_id in student_ids:
            self.require(self.students.get(student_id), "Student")
        if self.records.marked_students(data.section_id, data.attendance_date, student_ids):
            raise ConflictError(DUPLICATE_MARK)

        marked_by = as_uuid(actor)
        with self.transaction(ConflictError(DUPLICATE_MARK)):
            records = [
                self.records.create(
                    section_id=data.section_id,
                    attendance_date=data.attendance_date,
                    marked_by=marked_by,
                    **entry.model_dump(),
                )
                for entry in data.entries
            ]

        for record in records:
            attendance_marks_counter.labels(status=record.status).inc()
        logger.info(
            "Attendance sheet recorded",
            extra={
                "section_id": str(data.section_id),
                "attendance_date": data.attendance_date.isoformat(),
                "entries": len(records),
            },
        )
        return records

    def update_record(self, record_id, data) -> AttendanceRecord:
        record = self.get_record(record_id)
        with self.transaction():
            self.records.update(record, **data.model_dump(exclude_unset=True))
        return record

    def section_report(self, section_id, attendance_date: date) -> Dict[str, Any]:
        section = self._section(section_id)
        records = self.records.for_section_date(section.id, attendance_date)
        tally = tally_attendance(record.status for record in records)
        return {
            "section_id": section.id,
            "attendance_date": attendance_date,
            "total_students": tally.total,
            "present": tally.present,
            "absent": tally.absent,
            "late": tally.late,
            "excused": tally.excused,
            "attendance_percentage": tally.percentage,
            "records": records,
        }

    def student_report(
        self,
        student_id,
        section_id=None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        self.require(self.students.get(student_id), "Student")
        if section_id:
            self._section(section_id)
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date cannot be after end date")

        records = self.records.for_student(student_id, section_id, start_date, end_date)
        tally = tally_attendance(record.status for record in records)
        return {
            "student_id": student_id,
            "section_id": section_id,
            "total_classes": tally.total,
            "present": tally.present,
            "absent": tally.absent,
            "late": tally.late,
            "excused": tally.excused,
            "attendance_percentage": tally.percentage,
            "records": records,
        }
