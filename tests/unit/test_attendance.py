"""Unit tests for attendance tallies"""

import pytest

from university_erp.domain.attendance import ensure_unique_students, tally_attendance
from university_erp.domain.exceptions import ValidationError


def test_only_present_marks_count():
    """Test late and excused marks are reported but not credited"""
    tally = tally_attendance(["present", "present", "late", "excused"])
    assert (tally.total, tally.present, tally.late, tally.excused) == (4, 2, 1, 1)
    assert tally.percentage == 50.0


def test_percentage_rounded_to_two_places():
    tally = tally_attendance(["present", "absent", "absent"])
    assert tally.percentage == 33.33


def test_no_classes_held():
    """Test an empty register reports zero rather than failing"""
    tally = tally_attendance([])
    assert tally.total == 0
    assert tally.percentage == 0.0


@pytest.mark.parametrize("statuses,expected", [
    (["present"] * 3, 100.0),
    (["absent"] * 3, 0.0),
    (["present", "present", "absent"], 66.67),
])
def test_percentage(statuses, expected):
    assert tally_attendance(statuses).percentage == expected


def test_student_marked_twice_on_one_sheet():
    with pytest.raises(ValidationError):
        ensure_unique_students(["a", "b", "a"])
    ensure_unique_students(["a", "b"])
