"""Data access for programs, courses, sections, campuses and students"""

from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import Campus, Course, CourseSection, Program, Student
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate, search_filter


class ProgramRepository(BaseRepository[Program]):
    model = Program

    def list(self, offset: int, limit: int, is_active: Optional[bool] = None, search: Optional[str] = None) -> Tuple[List[Program], int]:
        query = self.db.query(Program)
        if is_active is not None:
            query = query.filter(Program.is_active.is_(is_active))
        if search:
            query = query.filter(search_filter(search, Program.code, Program.name, Program.department))
        return paginate(query.order_by(Program.code), offset, limit)


class CourseRepository(BaseRepository[Course]):
    model = Course

    def list(self, offset: int, limit: int, program_id=None, search: Optional[str] = None) -> Tuple[List[Course], int]:
        query = self.db.query(Course)
        if program_id:
            query = query.filter(Course.program_id == program_id)
        if search:
            query = query.filter(search_filter(search, Course.code, Course.title))
        return paginate(query.order_by(Course.code), offset, limit)

    def for_program(self, program_id) -> List[Course]:
        return (
            self.db.query(Course)
            .filter(Course.program_id == program_id)
            .order_by(Course.semester, Course.code)
            .all()
        )


class SectionRepository(BaseRepository[CourseSection]):
    model = CourseSection

    def list(
        self,
        offset: int,
        limit: int,
        course_id=None,
        semester: Optional[str] = None,
        faculty_id=None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[CourseSection], int]:
        query = self.db.query(CourseSection)
        if course_id:
            query = query.filter(CourseSection.course_id == course_id)
        if semester:
            query = query.filter(CourseSection.semester == semester)
        if faculty_id:
            query = query.filter(CourseSection.faculty_id == faculty_id)
        if is_active is not None:
            query = query.filter(CourseSection.is_active.is_(is_active))
        return paginate(query.order_by(CourseSection.semester, CourseSection.section_code), offset, limit)


class CampusRepository(BaseRepository[Campus]):
    model = Campus

    def list(self, offset: int, limit: int, is_active: Optional[bool] = None) -> Tuple[List[Campus], int]:
        query = self.db.query(Campus)
        if is_active is not None:
            query = query.filter(Campus.is_active.is_(is_active))
        return paginate(query.order_by(Campus.name), offset, limit)


class StudentRepository(BaseRepository[Student]):
    model = Student

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.roll_number == roll_number).first()

    def list(
        self,
        offset: int,
        limit: int,
        program_id=None,
        batch: Optional[str] = None,
        enrollment_status: Optional[str] = None,
        campus_id=None,
        search: Optional[str] = None,
    ) -> Tuple[List[Student], int]:
        query = self.db.query(Student)
        if program_id:
            query = query.filter(Student.program_id == program_id)
        if batch:
            query = query.filter(Student.batch == batch)
        if enrollment_status:
            query = query.filter(Student.enrollment_status == enrollment_status)
        if campus_id:
            query = query.filter(Student.campus_id == campus_id)
        if search:
            query = query.filter(
                search_filter(search, Student.roll_number, Student.first_name, Student.last_name, Student.email)
            )
        return paginate(query.order_by(Student.created_at.desc(), Student.roll_number), offset, limit)
