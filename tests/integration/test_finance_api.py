"""Integration tests for fee structures, fee assignment, payments and reports"""

import re
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def accountant_headers(headers_for):
    return headers_for("accountant")


@pytest.fixture
def student_fee(client: TestClient, accountant_headers, program, student):
    """A 50,000 tuition fee due next month, assigned to the student"""
    due_date = (date.today() + timedelta(days=30)).isoformat()
    structure = client.post(
        "/api/v1/finance/fee-structures",
        json={
            "programId": str(program.id),
            "semester": "2025-Fall",
            "feeType": "tuition",
            "amount": 50_000,
            "dueDate": due_date,
        },
        headers=accountant_headers,
    )
    assert structure.status_code == 201

    response = client.post(
        "/api/v1/finance/student-fees",
        json={"studentId": str(student.id), "feeStructureId": structure.json()["data"]["id"]},
        headers=accountant_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def pay(client, headers, fee, amount, method="bank_transfer"):
    return client.post(
        "/api/v1/finance/payments",
        json={
            "studentFeeId": fee["id"],
            "amount": amount,
            "paymentDate": date.today().isoformat(),
            "paymentMethod": method,
        },
        headers=headers,
    )


def test_assigned_fee_defaults_from_structure(student_fee):
    """Test amount, semester and status come from the structure"""
    assert student_fee["amountDue"] == 50_000
    assert student_fee["amountPaid"] == 0
    assert student_fee["semester"] == "2025-Fall"
    assert student_fee["paymentStatus"] == "pending"


def test_partial_then_full_payment(client: TestClient, accountant_headers, student_fee):
    """Test payment status moves from partial to paid"""
    response = pay(client, accountant_headers, student_fee, 20_000)
    assert response.status_code == 201
    data = response.json()["data"]
    assert re.fullmatch(r"RCP-\d{14}-\d{3}", data["payment"]["receiptNumber"])
    assert data["updatedFee"]["amountPaid"] == 20_000
    assert data["updatedFee"]["paymentStatus"] == "partial"

    data = pay(client, accountant_headers, student_fee, 30_000, method="cash").json()["data"]
    assert data["updatedFee"]["paymentStatus"] == "paid"
    assert data["updatedFee"]["paidDate"] == date.today().isoformat()


def test_overpayment_rejected(client: TestClient, accountant_headers, student_fee):
    """Test payments cannot exceed the outstanding balance"""
    response = pay(client, accountant_headers, student_fee, 60_000)
    assert response.status_code == 400

    fee = client.get(f"/api/v1/finance/student-fees/{student_fee['id']}", headers=accountant_headers).json()["data"]
    assert fee["amountPaid"] == 0


def test_unknown_payment_method(client: TestClient, accountant_headers, student_fee):
    """Test payment method is validated"""
    response = pay(client, accountant_headers, student_fee, 1_000, method="barter")
    assert response.status_code == 400


def test_only_accountants_record_payments(client: TestClient, student_headers, student_fee):
    """Test role guard on payments"""
    response = pay(client, student_headers, student_fee, 1_000)
    assert response.status_code == 403


def test_student_summary(client: TestClient, accountant_headers, student_fee, student):
    """Test a student's totals and payment history"""
    pay(client, accountant_headers, student_fee, 10_000)

    response = client.get(f"/api/v1/finance/students/{student.id}/summary", headers=accountant_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalFeesDue"] == 50_000
    assert data["totalFeesPaid"] == 10_000
    assert data["balance"] == 40_000
    assert data["paymentStatus"] == "partial"
    assert len(data["payments"]) == 1


def test_financial_report(client: TestClient, accountant_headers, student_fee):
    """Test report totals and payment method breakdown"""
    pay(client, accountant_headers, student_fee, 10_000, method="cash")
    pay(client, accountant_headers, student_fee, 5_000, method="card")

    today = date.today().isoformat()
    response = client.get(
        f"/api/v1/finance/reports?startDate={today}&endDate={today}", headers=accountant_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalFeesDue"] == 50_000
    assert data["totalFeesPaid"] == 15_000
    assert data["totalPending"] == 35_000
    assert data["feesByStatus"] == {"partial": 1}
    assert {row["paymentMethod"]: row["amount"] for row in data["paymentBreakdown"]} == {"card": 5_000, "cash": 10_000}


def test_report_rejects_inverted_range(client: TestClient, accountant_headers):
    """Test startDate must not be after endDate"""
    response = client.get(
        "/api/v1/finance/reports?startDate=2025-02-01&endDate=2025-01-01", headers=accountant_headers
    )
    assert response.status_code == 400
