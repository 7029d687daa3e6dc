"""Data access for assignments and submissions"""

from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import Assignment, AssignmentSubmission
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class AssignmentRepository(BaseRepository[Assignment]):
    model = Assignment

    def list(self, offset: int, limit: int, course_id=None, is_published: Optional[bool] = None) -> Tuple[List[Assignment], int]:
        query = self.db.query(Assignment)
        if course_id:
            query = query.filter(Assignment.course_id == course_id)
        if is_published is not None:
            query = query.filter(Assignment.is_published.is_(is_published))
        return paginate(query.order_by(Assignment.due_date), offset, limit)


class SubmissionRepository(BaseRepository[AssignmentSubmission]):
    model = AssignmentSubmission

    def find_for_student(self, assignment_id, student_id) -> Optional[AssignmentSubmission]:
        return (
            self.db.query(AssignmentSubmission)
            .filter(AssignmentSubmission.assignment_id == assignment_id, AssignmentSubmission.student_id == student_id)
            .first()
        )

    def list(
        self,
        offset: int,
        limit: int,
        assignment_id=None,
        student_id=None,
        status: Optional[str] = None,
    ) -> Tuple[List[AssignmentSubmission], int]:
        query = self.db.query(AssignmentSubmission)
        if assignment_id:
            query = query.filter(AssignmentSubmission.assignment_id == assignment_id)
        if student_id:
            query = query.filter(AssignmentSubmission.student_id == student_id)
        if status:
            query = query.filter(AssignmentSubmission.status == status)
        return paginate(query.order_by(AssignmentSubmission.submitted_at.desc()), offset, limit)
