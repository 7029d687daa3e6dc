"""Salary structure totals and monthly salary processing"""

from typing import Optional

from university_erp.domain.exceptions import ValidationError
from university_erp.domain.models import SalaryBreakdown, StructureTotals
from university_erp.domain.taxation import calculate_income_tax, calculate_monthly_tax
from university_erp.utils.date_utils import days_in_period
from university_erp.utils.numbers import round_amount

# Valid status transitions for a salary processing record
SALARY_TRANSITIONS = {
    "pending": {"processed"},
    "processed": {"approved", "pending"},
    "approved": {"paid"},
    "paid": set(),
}


def structure_totals(
    basic_salary: float,
    house_rent_allowance: float = 0,
    medical_allowance: float = 0,
    transport_allowance: float = 0,
    other_allowances: float = 0,
    provident_fund: float = 0,
    tax_deduction: float = 0,
    other_deductions: float = 0,
) -> StructureTotals:
    """Gross and net pay of a salary structure"""
    if basic_salary <= 0:
        raise ValidationError("Basic salary must be greater than 0")

    allowances = (house_rent_allowance or 0) + (medical_allowance or 0) + (transport_allowance or 0) + (other_allowances or 0)
    deductions = (provident_fund or 0) + (tax_deduction or 0) + (other_deductions or 0)
    gross = basic_salary + allowances
    return StructureTotals(
        allowances=allowances,
        deductions=deductions,
        gross_salary=gross,
        net_salary=gross - deductions,
    )


def _prorate(amount: Optional[float], ratio: float) -> int:
    return round_amount((amount or 0) * ratio)


def calculate_salary(
    structure,
    payroll_period: str,
    days_worked: Optional[int] = None,
    bonus: float = 0,
    overtime: float = 0,
    advance_deduction: float = 0,
) -> SalaryBreakdown:
    """
    Compute the monthly salary for an employee's active structure.

    Components are prorated by days worked; bonus, overtime and advance
    deductions are taken as given. Tax is the monthly share of the annual
    tax on twelve times this month's gross.

    Args:
        structure: Object exposing the salary structure columns
        payroll_period: YYYY-MM period being processed
        days_worked: Days worked in the period (defaults to the full month)
        bonus: One-off bonus for the period
        overtime: Overtime pay for the period
        advance_deduction: Salary advance recovered this period

    Returns:
        SalaryBreakdown with whole-amount components
    """
    days_in_month = days_in_period(payroll_period)
    if days_worked is None:
        days_worked = days_in_month
    if days_worked < 0 or days_worked > days_in_month:
        raise ValidationError(f"Days worked must be between 0 and {days_in_month}")

    ratio = days_worked / days_in_month
    basic = _prorate(structure.basic_salary, ratio)
    allowances = (
        _prorate(structure.house_rent_allowance, ratio)
        + _prorate(structure.medical_allowance, ratio)
        + _prorate(structure.transport_allowance, ratio)
        + _prorate(structure.other_allowances, ratio)
    )
    bonus = round_amount(bonus or 0)
    overtime = round_amount(overtime or 0)
    gross = basic + allowances + bonus + overtime

    tax = calculate_monthly_tax(calculate_income_tax(gross * 12))
    provident_fund = _prorate(structure.provident_fund, ratio)
    other_deductions = _prorate(structure.other_deductions, ratio)
    advance = round_amount(advance_deduction or 0)
    deductions = provident_fund + tax + advance + other_deductions

    return SalaryBreakdown(
        days_in_month=days_in_month,
        days_worked=days_worked,
        basic_salary=basic,
        allowances=allowances,
        bonus=bonus,
        overtime=overtime,
        gross_salary=gross,
        provident_fund=provident_fund,
        tax_amount=tax,
        advance_deduction=advance,
        other_deductions=other_deductions,
        deductions=deductions,
        net_salary=gross - deductions,
    )


def ensure_transition(current: str, target: str) -> None:
    if target not in SALARY_TRANSITIONS.get(current, set()):
        raise ValidationError(f"Cannot move salary from {current} to {target}")


def slip_number(payroll_period: str, employee_id) -> str:
    return f"SLIP-{payroll_period}-{str(employee_id)[:8]}"
