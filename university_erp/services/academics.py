"""Programs, courses and course sections"""

import logging
from typing import List, Tuple

from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.infrastructure.database.models import Course, CourseSection, Program
from university_erp.infrastructure.database.repositories.academics import CourseRepository, ProgramRepository, SectionRepository
from university_erp.infrastructure.database.repositories.hr import EmployeeRepository
from university_erp.services.base import BaseService

logger = logging.getLogger(__name__)


class AcademicService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.programs = ProgramRepository(db)
        self.courses = CourseRepository(db)
        self.sections = SectionRepository(db)
        self.employees = EmployeeRepository(db)

    # Programs

    def list_programs(self, offset: int, limit: int, **filters) -> Tuple[List[Program], int]:
        return self.programs.list(offset, limit, **filters)

    def get_program(self, program_id) -> Program:
        return self.require(self.programs.get(program_id), "Program")

    def create_program(self, data) -> Program:
        if self.programs.exists(code=data.code):
            raise ConflictError("Program with this code already exists")
        with self.transaction(ConflictError("Program with this code already exists")):
            program = self.programs.create(**data.model_dump())
        logger.info("Program created", extra={"program_id": str(program.id), "code": program.code})
        return program

    def update_program(self, program_id, data) -> Program:
        program = self.get_program(program_id)
        with self.transaction():
            self.programs.update(program, **data.model_dump(exclude_unset=True))
        return program

    # Courses

    def list_courses(self, offset: int, limit: int, **filters) -> Tuple[List[Course], int]:
        return self.courses.list(offset, limit, **filters)

    def get_course(self, course_id) -> Course:
        return self.require(self.courses.get(course_id), "Course")

    def create_course(self, data) -> Course:
        if data.program_id:
            self.get_program(data.program_id)
        if self.courses.exists(code=data.code):
            raise ConflictError("Course with this code already exists")
        with self.transaction(ConflictError("Course with this code already exists")):
            course = self.courses.create(**data.model_dump())
        logger.info("Course created", extra={"course_id": str(course.id), "code": course.code})
        return course

    def update_course(self, course_id, data) -> Course:
        course = self.get_course(course_id)
        fields = data.model_dump(exclude_unset=True)
        if fields.get("program_id"):
            self.get_program(fields["program_id"])
        with self.transaction():
            self.courses.update(course, **fields)
        return course

    def program_courses(self, program_id) -> List[Course]:
        self.get_program(program_id)
        return self.courses.for_program(program_id)

    # Sections

    def list_sections(self, offset: int, limit: int, **filters) -> Tuple[List[CourseSection], int]:
        return self.sections.list(offset, limit, **filters)

    def get_section(self, section_id) -> CourseSection:
        return self.require(self.sections.get(section_id), "Section")

    def create_section(self, data) -> CourseSection:
        self.get_course(data.course_id)
        if data.faculty_id:
            self.require(self.employees.get(data.faculty_id), "Faculty")
        duplicate = ConflictError("Section already exists for this course and semester")
        if self.sections.exists(course_id=data.course_id, section_code=data.section_code, semester=data.semester):
            raise duplicate
        with self.transaction(duplicate):
            section = self.sections.create(**data.model_dump())
        logger.info(
            "Section created",
            extra={"section_id": str(section.id), "course_id": str(section.course_id), "semester": section.semester},
        )
        return section

    def update_section(self, section_id, data) -> CourseSection:
        section = self.get_section(section_id)
        fields = data.model_dump(exclude_unset=True)
        if fields.get("faculty_id"):
            self.require(self.employees.get(fields["faculty_id"]), "Faculty")
        capacity = fields.get("max_capacity", section.max_capacity)
        enrolled = fields.get("current_enrollment", section.current_enrollment)
        if enrolled > capacity:
            raise ValidationError("Current enrollment cannot exceed max capacity")
        with self.transaction(ConflictError("Section already exists for this course and semester")):
            self.sections.update(section, **fields)
        return section
