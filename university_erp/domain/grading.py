"""Percentage, letter grade and GPA calculation on the HEC grading scale"""

from typing import Iterable, List, Tuple

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import GradeResult

# (minimum percentage inclusive, grade, grade point), highest band first
GRADE_SCALE: List[Tuple[float, str, float]] = [
    (85.0, "A+", 4.0),
    (80.0, "A", 3.7),
    (75.0, "B+", 3.3),
    (70.0, "B", 3.0),
    (65.0, "C+", 2.7),
    (60.0, "C", 2.3),
    (50.0, "D", 1.7),
    (0.0, "F", 0.0),
]


def calculate_percentage(obtained_marks: float, total_marks: float) -> float:
    """Convert obtained marks into a percentage rounded to 2 decimals"""
    if total_marks <= 0:
        raise ValidationError("Total marks must be greater than 0")
    if obtained_marks < 0 or obtained_marks > total_marks:
        raise ValidationError("Obtained marks must be between 0 and total marks")
    return round(obtained_marks / total_marks * 100, 2)


def calculate_grade(percentage: float) -> Tuple[str, float]:
    """Map a percentage onto (letter grade, grade point)"""
    for minimum, grade, gpa in GRADE_SCALE:
        if percentage >= minimum:
            return grade, gpa
    return "F", 0.0


def is_pass(obtained_marks: float, passing_marks: float) -> bool:
    return obtained_marks >= passing_marks


def grade_result(obtained_marks: float, total_marks: float, passing_marks: float = None) -> GradeResult:
    """
    Compute everything stored alongside a result row.

    When no passing mark is known the student passes on any non-F grade.
    """
    percentage = calculate_percentage(obtained_marks, total_marks)
    grade, gpa = calculate_grade(percentage)
    passed = is_pass(obtained_marks, passing_marks) if passing_marks is not None else grade != "F"
    return GradeResult(percentage=percentage, grade=grade, gpa=gpa, is_pass=passed)


def calculate_cgpa(gpas: Iterable[float]) -> float:
    """Arithmetic mean of grade points, 0.0 when there are none"""
    values = list(gpas)
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)
