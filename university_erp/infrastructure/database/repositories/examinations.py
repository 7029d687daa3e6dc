"""Data access for exams, results, grade audit and re-evaluations"""

from typing import List, Optional, Tuple

from university_erp.infrastructure.database.models import Exam, GradeChange, ReEvaluation, Result
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate


class ExamRepository(BaseRepository[Exam]):
    model = Exam

    def list(
        self,
        offset: int,
        limit: int,
        course_id=None,
        exam_type: Optional[str] = None,
        semester: Optional[str] = None,
    ) -> Tuple[List[Exam], int]:
        query = self.db.query(Exam)
        if course_id:
            query = query.filter(Exam.course_id == course_id)
        if exam_type:
            query = query.filter(Exam.exam_type == exam_type)
        if semester:
            query = query.filter(Exam.semester == semester)
        return paginate(query.order_by(Exam.exam_date.desc()), offset, limit)


class ResultRepository(BaseRepository[Result]):
    model = Result

    def find_for_exam_and_student(self, exam_id, student_id) -> Optional[Result]:
        return (
            self.db.query(Result)
            .filter(Result.exam_id == exam_id, Result.student_id == student_id)
            .first()
        )

    def list(
        self,
        offset: int,
        limit: int,
        exam_id=None,
        student_id=None,
        is_approved: Optional[bool] = None,
    ) -> Tuple[List[Result], int]:
        query = self.db.query(Result)
        if exam_id:
            query = query.filter(Result.exam_id == exam_id)
        if student_id:
            query = query.filter(Result.student_id == student_id)
        if is_approved is not None:
            query = query.filter(Result.is_approved.is_(is_approved))
        return paginate(query.order_by(Result.created_at.desc()), offset, limit)

    def for_student(self, student_id, approved_only: bool = False) -> List[Result]:
        query = self.db.query(Result).filter(Result.student_id == student_id)
        if approved_only:
            query = query.filter(Result.is_approved.is_(True))
        return query.order_by(Result.created_at).all()


class GradeChangeRepository(BaseRepository[GradeChange]):
    model = GradeChange

    def for_result(self, result_id) -> List[GradeChange]:
        return (
            self.db.query(GradeChange)
            .filter(GradeChange.result_id == result_id)
            .order_by(GradeChange.created_at)
            .all()
        )


class ReEvaluationRepository(BaseRepository[ReEvaluation]):
    model = ReEvaluation

    def list(self, offset: int, limit: int, status: Optional[str] = None, student_id=None) -> Tuple[List[ReEvaluation], int]:
        query = self.db.query(ReEvaluation)
        if status:
            query = query.filter(ReEvaluation.status == status)
        if student_id:
            query = query.filter(ReEvaluation.student_id == student_id)
        return paginate(query.order_by(ReEvaluation.created_at.desc()), offset, limit)

    def has_open_request(self, result_id) -> bool:
        return (
            self.db.query(ReEvaluation.id)
            .filter(ReEvaluation.result_id == result_id, ReEvaluation.status.in_(("pending", "approved")))
            .first()
            is not None
        )
