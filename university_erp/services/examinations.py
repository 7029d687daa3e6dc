"""Exams, results with grade audit, and re-evaluation requests"""

import logging
from typing import List, Optional, Tuple

from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.domain.grading import grade_result
from university_erp.infrastructure.database.models import Exam, GradeChange, ReEvaluation, Result
from university_erp.infrastructure.database.repositories.academics import CourseRepository, StudentRepository
from university_erp.infrastructure.database.repositories.examinations import (
    ExamRepository,
    GradeChangeRepository,
    ReEvaluationRepository,
    ResultRepository,
)
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

RE_EVALUATION_TRANSITIONS = {
    "pending": {"approved", "rejected", "completed"},
    "approved": {"completed", "rejected"},
}


class ExaminationService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.exams = ExamRepository(db)
        self.results = ResultRepository(db)
        self.grade_changes = GradeChangeRepository(db)
        self.re_evaluations = ReEvaluationRepository(db)
        self.courses = CourseRepository(db)
        self.students = StudentRepository(db)

    # Exams

    def list_exams(self, offset: int, limit: int, **filters) -> Tuple[List[Exam], int]:
        return self.exams.list(offset, limit, **filters)

    def get_exam(self, exam_id) -> Exam:
        return self.require(self.exams.get(exam_id), "Exam")

    def create_exam(self, data) -> Exam:
        if data.course_id:
            self.require(self.courses.get(data.course_id), "Course")
        with self.transaction():
            exam = self.exams.create(**data.model_dump())
        logger.info("Exam scheduled", extra={"exam_id": str(exam.id), "exam_type": exam.exam_type})
        return exam

    def update_exam(self, exam_id, data) -> Exam:
        exam = self.get_exam(exam_id)
        fields = data.model_dump(exclude_unset=True)
        start = fields.get("start_time", exam.start_time)
        end = fields.get("end_time", exam.end_time)
        if start and end and start >= end:
            raise ValidationError("Start time must be before end time")
        total = fields.get("total_marks", exam.total_marks)
        passing = fields.get("passing_marks", exam.passing_marks)
        if passing is not None and passing > total:
            raise ValidationError("Passing marks cannot exceed total marks")
        with self.transaction():
            self.exams.update(exam, **fields)
        return exam

    # Results

    def list_results(self, offset: int, limit: int, **filters) -> Tuple[List[Result], int]:
        return self.results.list(offset, limit, **filters)

    def get_result(self, result_id) -> Result:
        return self.require(self.results.get(result_id), "Result")

    def create_result(self, data, entered_by) -> Result:
        exam = self.get_exam(data.exam_id)
        self.require(self.students.get(data.student_id), "Student")
        if self.results.find_for_exam_and_student(data.exam_id, data.student_id):
            raise ConflictError("Result for this student and exam already exists")

        total_marks = data.total_marks or exam.total_marks
        graded = grade_result(data.obtained_marks, total_marks, exam.passing_marks)

        with self.transaction(ConflictError("Result for this student and exam already exists")):
            result = self.results.create(
                exam_id=data.exam_id,
                student_id=data.student_id,
                obtained_marks=data.obtained_marks,
                total_marks=total_marks,
                percentage=graded.percentage,
                grade=graded.grade,
                gpa=graded.gpa,
                is_pass=graded.is_pass,
                remarks=data.remarks,
                entered_by=as_uuid(entered_by),
            )

        logger.info("Result recorded", extra={"result_id": str(result.id), "grade": result.grade})
        return result

    def _regrade(self, result: Result, obtained_marks: float, total_marks: float, reason: Optional[str], actor) -> GradeChange:
        """Recompute a result and write the audit entry for it"""
        exam = self.exams.get(result.exam_id)
        graded = grade_result(obtained_marks, total_marks, exam.passing_marks if exam else None)
        change = self.grade_changes.create(
            result_id=result.id,
            previous_marks=result.obtained_marks,
            new_marks=obtained_marks,
            previous_grade=result.grade,
            new_grade=graded.grade,
            reason=reason or "Grade update",
            changed_by=as_uuid(actor),
        )
        self.results.update(
            result,
            obtained_marks=obtained_marks,
            total_marks=total_marks,
            percentage=graded.percentage,
            grade=graded.grade,
            gpa=graded.gpa,
            is_pass=graded.is_pass,
            entered_by=as_uuid(actor),
        )
        return change

    def update_result(self, result_id, data, actor) -> Result:
        result = self.get_result(result_id)
        obtained = data.obtained_marks if data.obtained_marks is not None else result.obtained_marks
        total = data.total_marks if data.total_marks is not None else result.total_marks

        with self.transaction():
            self._regrade(result, obtained, total, data.reason, actor)
            if data.remarks is not None:
                self.results.update(result, remarks=data.remarks)

        logger.info("Result updated", extra={"result_id": str(result.id), "grade": result.grade})
        return result

    def approve_result(self, result_id, approver) -> Result:
        result = self.get_result(result_id)
        if result.is_approved:
            raise ValidationError("Result is already approved")
        with self.transaction():
            self.results.update(result, is_approved=True, approved_by=as_uuid(approver), approved_at=utcnow())
        return result

    def grade_history(self, result_id) -> List[GradeChange]:
        self.get_result(result_id)
        return self.grade_changes.for_result(result_id)

    # Re-evaluations

    def list_re_evaluations(self, offset: int, limit: int, **filters) -> Tuple[List[ReEvaluation], int]:
        return self.re_evaluations.list(offset, limit, **filters)

    def request_re_evaluation(self, result_id, reason: str) -> ReEvaluation:
        result = self.get_result(result_id)
        if self.re_evaluations.has_open_request(result.id):
            raise ConflictError("A re-evaluation request is already open for this result")
        with self.transaction():
            request = self.re_evaluations.create(
                result_id=result.id,
                student_id=result.student_id,
                reason=reason,
                status="pending",
            )
        logger.info("Re-evaluation requested", extra={"re_evaluation_id": str(request.id)})
        return request

    def decide_re_evaluation(self, request_id, status: str, actor, revised_marks: Optional[float] = None, remarks: Optional[str] = None) -> ReEvaluation:
        """
        Move a re-evaluation forward.

        Completing with revised marks regrades the result through the same
        path as a manual update, so the change is audited.
        """
        request = self.require(self.re_evaluations.get(request_id), "Re-evaluation request")
        if status not in RE_EVALUATION_TRANSITIONS.get(request.status, set()):
            raise ValidationError(f"Cannot move re-evaluation from {request.status} to {status}")

        with self.transaction():
            if status == "completed" and revised_marks is not None:
                result = self.get_result(request.result_id)
                self._regrade(result, revised_marks, result.total_marks, f"Re-evaluation: {request.reason}", actor)
            self.re_evaluations.update(
                request,
                status=status,
                revised_marks=revised_marks,
                remarks=remarks,
                decided_by=as_uuid(actor),
                decided_at=utcnow(),
            )
        return request
