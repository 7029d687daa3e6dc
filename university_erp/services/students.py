"""Student records, CGPA and result history"""

import logging
from typing import List, Tuple

from university_erp.domain.exceptions import ConflictError
from university_erp.domain.grading import calculate_cgpa
from university_erp.infrastructure.database.models import Result, Student
from university_erp.infrastructure.database.repositories.academics import (
    CampusRepository,
    ProgramRepository,
    StudentRepository,
)
from university_erp.infrastructure.database.repositories.examinations import ResultRepository
from university_erp.services.base import BaseService

logger = logging.getLogger(__name__)


class StudentService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.students = StudentRepository(db)
        self.programs = ProgramRepository(db)
        self.campuses = CampusRepository(db)
        self.results = ResultRepository(db)

    def list_students(self, offset: int, limit: int, **filters) -> Tuple[List[Student], int]:
        return self.students.list(offset, limit, **filters)

    def get_student(self, student_id) -> Student:
        return self.require(self.students.get(student_id), "Student")

    def _check_references(self, program_id=None, campus_id=None) -> None:
        if program_id:
            self.require(self.programs.get(program_id), "Program")
        if campus_id:
            self.require(self.campuses.get(campus_id), "Campus")

    def create_student(self, data) -> Student:
        if self.students.get_by_roll_number(data.roll_number):
            raise ConflictError("Student with this roll number already exists")
        self._check_references(data.program_id, data.campus_id)

        with self.transaction(ConflictError("Student with this roll number already exists")):
            student = self.students.create(**data.model_dump())

        logger.info("Student created", extra={"student_id": str(student.id), "roll_number": student.roll_number})
        return student

    def update_student(self, student_id, data) -> Student:
        student = self.get_student(student_id)
        fields = data.model_dump(exclude_unset=True)
        self._check_references(fields.get("program_id"), fields.get("campus_id"))
        with self.transaction():
            self.students.update(student, **fields)
        return student

    def withdraw_student(self, student_id) -> Student:
        """Soft delete: the record stays, marked as withdrawn"""
        student = self.get_student(student_id)
        with self.transaction():
            self.students.update(student, enrollment_status="withdrawn")
        logger.info("Student withdrawn", extra={"student_id": str(student.id)})
        return student

    def get_results(self, student_id) -> List[Result]:
        self.get_student(student_id)
        return self.results.for_student(student_id)

    def get_cgpa(self, student_id) -> Tuple[float, int]:
        """CGPA over approved results, with the number of results counted"""
        self.get_student(student_id)
        approved = self.results.for_student(student_id, approved_only=True)
        return calculate_cgpa(result.gpa for result in approved), len(approved)
