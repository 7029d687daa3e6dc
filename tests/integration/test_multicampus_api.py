"""Integration tests for campuses, student and staff transfers and campus reports"""

import uuid

import pytest
from fastapi.testclient import TestClient

from university_erp.infrastructure.database.models import Course, Employee, Student, User


def create_campus(client, headers, code, is_active=True):
    response = client.post(
        "/api/v1/campuses",
        json={"name": f"{code} Campus", "code": code, "city": "Lahore", "isActive": is_active},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def campuses(client: TestClient, staff_headers):
    return create_campus(client, staff_headers, "LHR"), create_campus(client, staff_headers, "ISB")


def request_transfer(client, headers, student, source, destination):
    return client.post(
        "/api/v1/transfers",
        json={
            "studentId": str(student.id),
            "fromCampusId": source["id"],
            "toCampusId": destination["id"],
            "reason": "Family relocation",
        },
        headers=headers,
    )


def test_duplicate_campus_code(client: TestClient, staff_headers, campuses):
    response = client.post("/api/v1/campuses", json={"name": "Other", "code": "LHR"}, headers=staff_headers)
    assert response.status_code == 409


def test_same_campus_transfer(client: TestClient, staff_headers, student, campuses):
    lahore, _ = campuses
    assert request_transfer(client, staff_headers, student, lahore, lahore).status_code == 400


def test_inactive_destination(client: TestClient, staff_headers, student, campuses):
    lahore, _ = campuses
    closed = create_campus(client, staff_headers, "KHI", is_active=False)
    response = request_transfer(client, staff_headers, student, lahore, closed)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Destination campus is not active"


def test_one_pending_transfer(client: TestClient, staff_headers, student, campuses):
    """Test a student can have only one pending transfer"""
    lahore, islamabad = campuses
    assert request_transfer(client, staff_headers, student, lahore, islamabad).status_code == 201
    assert request_transfer(client, staff_headers, student, lahore, islamabad).status_code == 409


def test_approval_moves_student(client: TestClient, staff_headers, student, campuses):
    """Test approving a transfer updates the student's campus"""
    lahore, islamabad = campuses
    transfer = request_transfer(client, staff_headers, student, lahore, islamabad).json()["data"]
    url = f"/api/v1/transfers/{transfer['id']}"

    assert client.patch(url, json={"status": "approved"}, headers=staff_headers).status_code == 400

    response = client.patch(url, json={"status": "approved", "effectiveDate": "2025-09-01"}, headers=staff_headers)
    assert response.status_code == 200
    assert response.json()["data"]["effectiveDate"] == "2025-09-01"

    student_data = client.get(f"/api/v1/students/{student.id}", headers=staff_headers).json()["data"]
    assert student_data["campusId"] == islamabad["id"]

    response = client.patch(url, json={"status": "rejected", "rejectionReason": "Late"}, headers=staff_headers)
    assert response.status_code == 400


def test_rejection_needs_reason(client: TestClient, staff_headers, student, campuses):
    lahore, islamabad = campuses
    transfer = request_transfer(client, staff_headers, student, lahore, islamabad).json()["data"]
    response = client.patch(f"/api/v1/transfers/{transfer['id']}", json={"status": "rejected"}, headers=staff_headers)
    assert response.status_code == 400


def test_students_cannot_create_campuses(client: TestClient, student_headers):
    response = client.post("/api/v1/campuses", json={"name": "Rogue", "code": "RG"}, headers=student_headers)
    assert response.status_code == 403


@pytest.fixture
def hr_headers(headers_for):
    return headers_for("hr")


def request_staff_transfer(client, headers, employee, source, destination, **extra):
    return client.post(
        "/api/v1/staff-transfers",
        json={
            "employeeId": str(employee.id),
            "fromCampusId": source["id"],
            "toCampusId": destination["id"],
            "reason": "Department expansion",
            **extra,
        },
        headers=headers,
    )


def test_request_staff_transfer(client: TestClient, hr_headers, employee, campuses):
    lahore, islamabad = campuses
    response = request_staff_transfer(client, hr_headers, employee, lahore, islamabad, transferType="deputation")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["transferType"] == "deputation"
    assert data["requestedDate"] is not None


def test_staff_transfer_rules(client: TestClient, hr_headers, staff_headers, employee, campuses):
    """Test staff transfers need two distinct, active campuses and one open request at a time"""
    lahore, islamabad = campuses
    closed = create_campus(client, staff_headers, "KHI", is_active=False)

    assert request_staff_transfer(client, hr_headers, employee, lahore, lahore).status_code == 400
    response = request_staff_transfer(client, hr_headers, employee, lahore, closed)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Destination campus is not active"
    response = request_staff_transfer(client, hr_headers, employee, lahore, {"id": str(uuid.uuid4())})
    assert response.status_code == 404

    assert request_staff_transfer(client, hr_headers, employee, lahore, islamabad).status_code == 201
    assert request_staff_transfer(client, hr_headers, employee, lahore, islamabad).status_code == 409


def test_staff_transfer_needs_reason(client: TestClient, hr_headers, employee, campuses):
    lahore, islamabad = campuses
    response = request_staff_transfer(client, hr_headers, employee, lahore, islamabad, reason="")
    assert response.status_code == 400


def test_staff_transfer_unknown_type(client: TestClient, hr_headers, employee, campuses):
    lahore, islamabad = campuses
    response = request_staff_transfer(client, hr_headers, employee, lahore, islamabad, transferType="sabbatical")
    assert response.status_code == 400


def test_staff_transfer_approval_moves_employee(client: TestClient, db, hr_headers, employee, campuses):
    """Test approving a staff transfer reassigns the employee's campus"""
    lahore, islamabad = campuses
    transfer = request_staff_transfer(client, hr_headers, employee, lahore, islamabad).json()["data"]
    url = f"/api/v1/staff-transfers/{transfer['id']}"

    assert client.patch(url, json={"status": "approved"}, headers=hr_headers).status_code == 400

    response = client.patch(
        url,
        json={"status": "approved", "effectiveDate": "2025-11-01", "remarks": "Relieved on 31 October"},
        headers=hr_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "approved"
    assert data["effectiveDate"] == "2025-11-01"
    assert data["transferDate"] is not None
    assert data["remarks"] == "Relieved on 31 October"

    db.refresh(employee)
    assert str(employee.campus_id) == islamabad["id"]

    response = client.patch(url, json={"status": "rejected", "rejectionReason": "Late"}, headers=hr_headers)
    assert response.status_code == 400


def test_staff_transfer_rejection(client: TestClient, db, hr_headers, employee, campuses):
    lahore, islamabad = campuses
    transfer = request_staff_transfer(client, hr_headers, employee, lahore, islamabad).json()["data"]
    url = f"/api/v1/staff-transfers/{transfer['id']}"

    assert client.patch(url, json={"status": "rejected"}, headers=hr_headers).status_code == 400
    response = client.patch(url, json={"status": "rejected", "rejectionReason": "No vacancy"}, headers=hr_headers)
    assert response.status_code == 200
    assert response.json()["data"]["rejectionReason"] == "No vacancy"

    db.refresh(employee)
    assert employee.campus_id is None


def test_list_staff_transfers(client: TestClient, hr_headers, employee, campuses):
    lahore, islamabad = campuses
    request_staff_transfer(client, hr_headers, employee, lahore, islamabad)

    response = client.get(f"/api/v1/staff-transfers?campusId={islamabad['id']}&status=pending", headers=hr_headers)
    assert response.status_code == 200
    assert response.json()["data"]["pagination"]["total"] == 1

    response = client.get("/api/v1/staff-transfers?transferType=temporary", headers=hr_headers)
    assert response.json()["data"]["pagination"]["total"] == 0


def test_students_cannot_transfer_staff(client: TestClient, student_headers, employee, campuses):
    lahore, islamabad = campuses
    assert request_staff_transfer(client, student_headers, employee, lahore, islamabad).status_code == 403


def test_campus_report(client: TestClient, db, staff_headers, program, campuses):
    """Test campus headcounts cover students, staff, faculty and the programs taught there"""
    lahore, islamabad = campuses
    lahore_id, islamabad_id = uuid.UUID(lahore["id"]), uuid.UUID(islamabad["id"])

    lecturer = User(email="lecturer@uni.edu", password_hash="x", first_name="Sana", last_name="Raza", role="faculty")
    db.add(lecturer)
    db.flush()
    db.add_all([
        Student(roll_number="2024-CS-101", first_name="A", last_name="One", program_id=program.id,
                batch="2024-Fall", campus_id=lahore_id),
        Student(roll_number="2024-CS-102", first_name="B", last_name="Two", program_id=program.id,
                batch="2024-Fall", campus_id=lahore_id, enrollment_status="suspended"),
        Student(roll_number="2024-CS-103", first_name="C", last_name="Three", program_id=program.id,
                batch="2024-Fall", campus_id=islamabad_id),
        Employee(employee_code="EMP-101", first_name="Sana", last_name="Raza", user_id=lecturer.id,
                 campus_id=lahore_id),
        Employee(employee_code="EMP-102", first_name="Omar", last_name="Malik", campus_id=lahore_id),
        Course(code="CS101", title="Programming Fundamentals", program_id=program.id, semester=1),
        Course(code="CS102", title="Discrete Structures", program_id=program.id, semester=1),
        Course(code="MG101", title="Principles of Management", semester=1),
    ])
    db.commit()

    response = client.get(
        f"/api/v1/campuses/{lahore['id']}/report?reportPeriod=2025-09-30", headers=staff_headers
    )
    assert response.status_code == 200
    assert response.json()["data"] == {
        "campusId": lahore["id"],
        "campusName": "LHR Campus",
        "totalStudents": 2,
        "totalStaff": 2,
        "totalFaculty": 1,
        "totalPrograms": 1,
        "totalCourses": 2,
        "activeEnrollments": 1,
        "reportPeriod": "2025-09-30",
    }


def test_empty_campus_report(client: TestClient, staff_headers, campuses):
    _, islamabad = campuses
    response = client.get(f"/api/v1/campuses/{islamabad['id']}/report", headers=staff_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalStudents"] == 0
    assert data["totalCourses"] == 0
    assert data["reportPeriod"] is not None


def test_campus_report_unknown_campus(client: TestClient, staff_headers):
    response = client.get(f"/api/v1/campuses/{uuid.uuid4()}/report", headers=staff_headers)
    assert response.status_code == 404
