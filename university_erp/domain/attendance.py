"""Attendance tallies and sheet checks"""

from collections import Counter
from typing import Iterable, Sequence

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import AttendanceTally


def tally_attendance(statuses: Iterable[str]) -> AttendanceTally:
    """
    Count marks per status.

    Only `present` counts towards the percentage; late and excused marks are
    reported but not credited.
    """
    counts = Counter(statuses)
    total = sum(counts.values())
    percentage = round(counts["present"] / total * 100, 2) if total else 0.0
    return AttendanceTally(
        total=total,
        present=counts["present"],
        absent=counts["absent"],
        late=counts["late"],
        excused=counts["excused"],
        percentage=percentage,
    )


def ensure_unique_students(student_ids: Sequence) -> None:
    """A bulk sheet may mark each student once"""
    if len(set(student_ids)) != len(student_ids):
        raise ValidationError("Each student can only be marked once per sheet")
