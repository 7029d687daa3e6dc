"""Unit tests for salary structure totals and monthly salary processing"""

import pytest
from types import SimpleNamespace
from university_erp.domain.exceptions import ValidationError
from university_erp.domain.payroll import (
    calculate_salary,
    ensure_transition,
    slip_number,
    structure_totals,
)
from university_erp.utils.date_utils import days_in_period, parse_payroll_period


@pytest.fixture
def structure():
    """Salary structure with allowances and provident fund"""
    return SimpleNamespace(
        basic_salary=100_000,
        house_rent_allowance=20_000,
        medical_allowance=5_000,
        transport_allowance=0,
        other_allowances=0,
        provident_fund=5_000,
        tax_deduction=0,
        other_deductions=0,
    )


def test_structure_totals():
    """Test gross adds allowances and net subtracts deductions"""
    totals = structure_totals(100_000, house_rent_allowance=20_000, medical_allowance=5_000, provident_fund=5_000)
    assert totals.gross_salary == 125_000
    assert totals.deductions == 5_000
    assert totals.net_salary == 120_000


def test_structure_requires_positive_basic():
    """Test basic salary must be above zero"""
    with pytest.raises(ValidationError):
        structure_totals(0)


def test_full_month_salary(structure):
    """Test a full month: tax is 1/12 of tax on 12x gross"""
    breakdown = calculate_salary(structure, "2025-06")

    assert breakdown.days_in_month == 30
    assert breakdown.days_worked == 30
    assert breakdown.gross_salary == 125_000
    assert breakdown.tax_amount == 4_375  # 52,500 / 12
    assert breakdown.deductions == 9_375
    assert breakdown.net_salary == 115_625


def test_prorated_salary(structure):
    """Test half a month prorates basic, allowances and provident fund"""
    breakdown = calculate_salary(structure, "2025-06", days_worked=15)

    assert breakdown.basic_salary == 50_000
    assert breakdown.allowances == 12_500
    assert breakdown.gross_salary == 62_500
    assert breakdown.provident_fund == 2_500
    assert breakdown.tax_amount == 313  # 3,750 / 12 rounded half up
    assert breakdown.net_salary == 62_500 - 2_500 - 313


def test_zero_days_worked(structure):
    """Test zero days worked is allowed and yields no pay"""
    breakdown = calculate_salary(structure, "2025-02", days_worked=0)
    assert breakdown.gross_salary == 0
    assert breakdown.net_salary == 0


def test_bonus_overtime_and_advance(structure):
    """Test one-off amounts are added or deducted as given"""
    breakdown = calculate_salary(structure, "2025-06", bonus=10_000, overtime=2_000, advance_deduction=3_000)
    assert breakdown.gross_salary == 137_000
    assert breakdown.advance_deduction == 3_000
    assert breakdown.net_salary == breakdown.gross_salary - breakdown.deductions


def test_days_worked_cannot_exceed_month(structure):
    """Test February has at most 28 days in 2025"""
    with pytest.raises(ValidationError):
        calculate_salary(structure, "2025-02", days_worked=29)


@pytest.mark.parametrize("period", ["2025-13", "2025-1", "25-01", "2025/01", ""])
def test_invalid_payroll_period(period):
    """Test malformed periods are rejected"""
    with pytest.raises(ValidationError, match="YYYY-MM"):
        parse_payroll_period(period)


def test_days_in_leap_february():
    """Test leap years"""
    assert days_in_period("2024-02") == 29


def test_status_transitions():
    """Test the salary workflow only moves forward through allowed states"""
    ensure_transition("pending", "processed")
    ensure_transition("processed", "approved")
    ensure_transition("approved", "paid")
    with pytest.raises(ValidationError):
        ensure_transition("pending", "paid")
    with pytest.raises(ValidationError):
        ensure_transition("paid", "approved")


def test_slip_number():
    """Test slip numbers embed the period and employee prefix"""
    assert slip_number("2025-06", "1234abcd-0000-0000-0000-000000000000") == "SLIP-2025-06-1234abcd"
