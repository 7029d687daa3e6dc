"""Domain models - pure Python dataclasses returned by the calculation helpers"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass
class GradeResult:
    """Percentage, letter grade and grade point for a single result"""

    percentage: float
    grade: str
    gpa: float
    is_pass: bool


@dataclass
class FineAssessment:
    """Outcome of returning a borrowed book"""

    days_overdue: int
    fine_amount: int
    status: str  # "returned" or "overdue"
    fine_paid: bool


@dataclass
class TaxCalculation:
    """Annual and monthly income tax for an annual income"""

    annual_income: float
    annual_tax: int
    monthly_tax: int


@dataclass
class StructureTotals:
    """Derived totals of a salary structure"""

    allowances: float
    deductions: float
    gross_salary: float
    net_salary: float


@dataclass
class SalaryBreakdown:
    """Prorated monthly salary for a payroll period"""

    days_in_month: int
    days_worked: int
    basic_salary: int
    allowances: int
    bonus: int
    overtime: int
    gross_salary: int
    provident_fund: int
    tax_amount: int
    advance_deduction: int
    other_deductions: int
    deductions: int
    net_salary: int


@dataclass
class EligibilityCriteriaRule:
    """Per-program admission thresholds"""

    minimum_marks: Optional[float] = None
    minimum_cgpa: Optional[float] = None
    age_limit: Optional[int] = None


@dataclass
class Qualification:
    """One entry of an applicant's academic history"""

    degree: str
    year: int
    marks: Optional[float] = None
    cgpa: Optional[float] = None


@dataclass
class EligibilityResult:
    """Outcome of an eligibility check"""

    is_eligible: bool
    score: float
    reasons: List[str] = field(default_factory=list)


@dataclass
class MeritEntry:
    """Ranked candidate on a merit list"""

    application_id: Any
    application_number: str
    score: float
    rank: int
    status: str  # "selected" or "waitlisted"


@dataclass
class VerificationResult:
    """Public certificate verification outcome"""

    is_valid: bool
    message: Optional[str] = None
    certificate: Optional[Any] = None
    certificate_type: Optional[str] = None
    issue_date: Optional[date] = None
    student_name: Optional[str] = None


@dataclass
class LeaveBalance:
    """Quota, usage and remaining days for one leave type"""

    leave_type: str
    quota: int
    used: int
    remaining: int


@dataclass
class FeeSummary:
    """Totals across a set of student fees"""

    total_due: float
    total_paid: float
    balance: float
    status: str
    by_status: Dict[str, int] = field(default_factory=dict)


@dataclass
class AttendanceTally:
    """Marks per status and the share of classes attended"""

    total: int
    present: int
    absent: int
    late: int
    excused: int
    percentage: float
