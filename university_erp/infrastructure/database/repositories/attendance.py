"""Data access for attendance marks"""

from datetime import date
from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import AttendanceRecord
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    model = AttendanceRecord

    def list(
        self,
        offset: int,
        limit: int,
        section_id=None,
        student_id=None,
        attendance_date: Optional[date] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[AttendanceRecord], int]:
        query = self.db.query(AttendanceRecord)
        if section_id:
            query = query.filter(AttendanceRecord.section_id == section_id)
        if student_id:
            query = query.filter(AttendanceRecord.student_id == student_id)
        if attendance_date:
            query = query.filter(AttendanceRecord.attendance_date == attendance_date)
        if status:
            query = query.filter(AttendanceRecord.status == status)
        return paginate(
            query.order_by(AttendanceRecord.attendance_date.desc(), AttendanceRecord.created_at), offset, limit
        )

    def is_marked(self, section_id, student_id, attendance_date: date) -> bool:
        return self.exists(section_id=section_id, student_id=student_id, attendance_date=attendance_date)

    def marked_students(self, section_id, attendance_date: date, student_ids) -> List:
        """Students among `student_ids` already marked for the date"""
        rows = (
            self.db.query(AttendanceRecord.student_id)
            .filter(
                AttendanceRecord.section_id == section_id,
                AttendanceRecord.attendance_date == attendance_date,
                AttendanceRecord.student_id.in_(student_ids),
            )
            .all()
        )
        return [row[0] for row in rows]

    def for_section_date(self, section_id, attendance_date: date) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .filter(AttendanceRecord.section_id == section_id, AttendanceRecord.attendance_date == attendance_date)
            .order_by(AttendanceRecord.created_at)
            .all()
        )

    def for_student(
        self,
        student_id,
        section_id=None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AttendanceRecord]:
        query = self.db.query(AttendanceRecord).filter(AttendanceRecord.student_id == student_id)
        if section_id:
            query = query.filter(AttendanceRecord.section_id == section_id)
        if start_date:
            query = query.filter(AttendanceRecord.attendance_date >= start_date)
        if end_date:
            query = query.filter(AttendanceRecord.attendance_date <= end_date)
        return query.order_by(AttendanceRecord.attendance_date).all()
