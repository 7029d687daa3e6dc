"""Assignments, submissions and grading"""

import logging
from typing import List, Optional, Tuple

from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.infrastructure.database.models import Assignment, AssignmentSubmission
from university_erp.infrastructure.database.repositories.academics import CourseRepository, StudentRepository
from university_erp.infrastructure.database.repositories.learning import AssignmentRepository, SubmissionRepository
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import as_aware, utcnow

logger = logging.getLogger(__name__)


class LearningService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.assignments = AssignmentRepository(db)
        self.submissions = SubmissionRepository(db)
        self.courses = CourseRepository(db)
        self.students = StudentRepository(db)

    # Assignments

    def list_assignments(self, offset: int, limit: int, **filters) -> Tuple[List[Assignment], int]:
        return self.assignments.list(offset, limit, **filters)

    def get_assignment(self, assignment_id) -> Assignment:
        return self.require(self.assignments.get(assignment_id), "Assignment")

    def create_assignment(self, data, created_by) -> Assignment:
        self.require(self.courses.get(data.course_id), "Course")
        fields = data.model_dump()
        fields["due_date"] = as_aware(fields["due_date"])
        with self.transaction():
            assignment = self.assignments.create(created_by=as_uuid(created_by), **fields)
        logger.info("Assignment created", extra={"assignment_id": str(assignment.id)})
        return assignment

    def update_assignment(self, assignment_id, data) -> Assignment:
        assignment = self.get_assignment(assignment_id)
        fields = data.model_dump(exclude_unset=True)
        if fields.get("due_date"):
            fields["due_date"] = as_aware(fields["due_date"])
        with self.transaction():
            self.assignments.update(assignment, **fields)
        return assignment

    def publish(self, assignment_id) -> Assignment:
        assignment = self.get_assignment(assignment_id)
        with self.transaction():
            self.assignments.update(assignment, is_published=True)
        return assignment

    # Submissions

    def list_submissions(self, offset: int, limit: int, **filters) -> Tuple[List[AssignmentSubmission], int]:
        return self.submissions.list(offset, limit, **filters)

    def get_submission(self, submission_id) -> AssignmentSubmission:
        return self.require(self.submissions.get(submission_id), "Submission")

    def submit(self, assignment_id, data) -> AssignmentSubmission:
        """Submit work; anything after the due date is recorded as late"""
        assignment = self.get_assignment(assignment_id)
        if not assignment.is_published:
            raise ValidationError("Assignment is not published")
        self.require(self.students.get(data.student_id), "Student")
        if self.submissions.find_for_student(assignment.id, data.student_id):
            raise ConflictError("Submission for this assignment already exists")

        submitted_at = utcnow()
        status = "late" if submitted_at > as_aware(assignment.due_date) else "submitted"
        with self.transaction(ConflictError("Submission for this assignment already exists")):
            submission = self.submissions.create(
                assignment_id=assignment.id,
                student_id=data.student_id,
                submission_text=data.submission_text,
                file_url=data.file_url,
                submitted_at=submitted_at,
                status=status,
            )

        logger.info("Assignment submitted", extra={"submission_id": str(submission.id), "status": status})
        return submission

    def grade(self, submission_id, obtained_marks: float, grader, feedback: Optional[str] = None) -> AssignmentSubmission:
        submission = self.get_submission(submission_id)
        assignment = self.get_assignment(submission.assignment_id)
        if obtained_marks < 0 or obtained_marks > assignment.max_marks:
            raise ValidationError(f"Obtained marks must be between 0 and {assignment.max_marks}")

        with self.transaction():
            self.submissions.update(
                submission,
                obtained_marks=obtained_marks,
                feedback=feedback,
                status="graded",
                graded_by=as_uuid(grader),
                graded_at=utcnow(),
            )
        return submission
