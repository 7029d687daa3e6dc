"""Admission application numbering, eligibility scoring and merit ranking"""

import random
from datetime import date
from typing import Iterable, List, Optional, Sequence

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import EligibilityCriteriaRule, EligibilityResult, MeritEntry, Qualification

# Applications in these states block a second application to the same program
ACTIVE_APPLICATION_STATUSES = ("submitted", "under_review", "eligible", "selected", "waitlisted")

APPLICATION_STATUSES = (
    "submitted",
    "under_review",
    "eligible",
    "not_eligible",
    "selected",
    "waitlisted",
    "rejected",
    "admitted",
)


def generate_application_number(year: Optional[int] = None) -> str:
    """APP-<year>-<5 random digits>"""
    year = year or date.today().year
    return f"APP-{year}-{random.randint(10000, 99999)}"


def latest_qualification(history: Sequence[Qualification]) -> Qualification:
    if not history:
        raise ValidationError("Academic history is required")
    return max(history, key=lambda q: q.year)


def evaluate_eligibility(
    criteria: Optional[EligibilityCriteriaRule],
    history: Sequence[Qualification],
    entry_test: Optional[float] = None,
    interview: Optional[float] = None,
    current_year: Optional[int] = None,
) -> EligibilityResult:
    """
    Score an applicant against a program's criteria.

    Meeting the minimum marks earns a 50 point base; the entry test adds up
    to 30 points and the interview up to 20. A CGPA is converted to marks
    at 25 marks per grade point when no marks are reported.

    Returns:
        EligibilityResult with every failed rule listed in reasons
    """
    if criteria is None:
        return EligibilityResult(
            is_eligible=False,
            score=0.0,
            reasons=["Eligibility criteria not found for this program"],
        )

    qualification = latest_qualification(history)
    marks = qualification.marks if qualification.marks else (qualification.cgpa or 0) * 25

    score = 0.0
    reasons: List[str] = []

    if criteria.minimum_marks and marks < criteria.minimum_marks:
        reasons.append(f"Marks {marks}% is below minimum required {criteria.minimum_marks}%")
    else:
        score += 50

    if criteria.minimum_cgpa and qualification.cgpa and qualification.cgpa < criteria.minimum_cgpa:
        reasons.append(f"CGPA {qualification.cgpa} is below minimum required {criteria.minimum_cgpa}")

    if criteria.age_limit:
        current_year = current_year or date.today().year
        if current_year - qualification.year > criteria.age_limit:
            reasons.append(f"Age exceeds maximum limit of {criteria.age_limit} years")

    if entry_test:
        score += entry_test / 100 * 30
    if interview:
        score += interview / 100 * 20

    return EligibilityResult(is_eligible=not reasons, score=round(score, 2), reasons=reasons)


def rank_merit_list(applications: Iterable, total_seats: int) -> List[MeritEntry]:
    """
    Rank eligible applications by score, highest first.

    Ties are broken by application number. The first total_seats entries
    are selected and the remainder waitlisted.
    """
    if total_seats < 0:
        raise ValidationError("Total seats cannot be negative")

    ordered = sorted(
        applications,
        key=lambda app: (-(app.eligibility_score or 0), app.application_number),
    )
    return [
        MeritEntry(
            application_id=app.id,
            application_number=app.application_number,
            score=app.eligibility_score or 0,
            rank=position,
            status="selected" if position <= total_seats else "waitlisted",
        )
        for position, app in enumerate(ordered, start=1)
    ]
