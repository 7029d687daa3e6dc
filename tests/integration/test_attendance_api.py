"""Integration tests for attendance marking and reports"""

import uuid

import pytest
from fastapi.testclient import TestClient

from university_erp.infrastructure.database.models import Course, CourseSection, Student


@pytest.fixture
def faculty_headers(headers_for):
    return headers_for("faculty")


@pytest.fixture
def section(db, program) -> CourseSection:
    course = Course(code="CS201", title="Data Structures", program_id=program.id, semester=3)
    db.add(course)
    db.flush()
    section = CourseSection(course_id=course.id, section_code="A", semester="Fall 2025", max_capacity=40)
    db.add(section)
    db.commit()
    return section


@pytest.fixture
def classmates(db, program, student):
    others = [
        Student(
            roll_number=f"2024-CS-00{n}",
            first_name="Student",
            last_name=str(n),
            program_id=program.id,
            batch="2024-Fall",
        )
        for n in (2, 3, 4)
    ]
    db.add_all(others)
    db.commit()
    return [student, *others]


def mark(client, headers, section, student, day="2025-10-06", status="present"):
    return client.post(
        "/api/v1/attendance",
        json={"sectionId": str(section.id), "studentId": str(student.id), "attendanceDate": day, "status": status},
        headers=headers,
    )


def sheet(section, entries, day="2025-10-06"):
    return {
        "sectionId": str(section.id),
        "attendanceDate": day,
        "entries": [{"studentId": str(student.id), "status": status} for student, status in entries],
    }


def test_mark_attendance(client: TestClient, faculty_headers, section, student):
    response = mark(client, faculty_headers, section, student)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Attendance marked successfully"
    assert body["data"]["status"] == "present"
    assert body["data"]["markedBy"] is not None


def test_one_mark_per_student_per_day(client: TestClient, faculty_headers, section, student):
    assert mark(client, faculty_headers, section, student).status_code == 201
    response = mark(client, faculty_headers, section, student, status="absent")
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Attendance already exists for this date"

    assert mark(client, faculty_headers, section, student, day="2025-10-07").status_code == 201


def test_unknown_status(client: TestClient, faculty_headers, section, student):
    response = mark(client, faculty_headers, section, student, status="sleeping")
    assert response.status_code == 400


def test_unknown_section(client: TestClient, faculty_headers, student):
    response = client.post(
        "/api/v1/attendance",
        json={"sectionId": str(uuid.uuid4()), "studentId": str(student.id), "attendanceDate": "2025-10-06", "status": "present"},
        headers=faculty_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Section not found"


def test_students_cannot_mark(client: TestClient, student_headers, section, student):
    assert mark(client, student_headers, section, student).status_code == 403


def test_bulk_sheet(client: TestClient, faculty_headers, section, classmates):
    """Test a whole class is marked in one request"""
    statuses = ["present", "absent", "late", "present"]
    response = client.post(
        "/api/v1/attendance/bulk", json=sheet(section, zip(classmates, statuses)), headers=faculty_headers
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Attendance marked for 4 students"
    assert [item["status"] for item in response.json()["data"]] == statuses


def test_bulk_sheet_is_all_or_nothing(client: TestClient, faculty_headers, section, classmates):
    """Test one already-marked student rejects the whole sheet"""
    assert mark(client, faculty_headers, section, classmates[0]).status_code == 201

    response = client.post(
        "/api/v1/attendance/bulk",
        json=sheet(section, [(student, "present") for student in classmates]),
        headers=faculty_headers,
    )
    assert response.status_code == 409

    listing = client.get(f"/api/v1/attendance?sectionId={section.id}", headers=faculty_headers).json()["data"]
    assert listing["pagination"]["total"] == 1


def test_bulk_sheet_repeats_student(client: TestClient, faculty_headers, section, student):
    response = client.post(
        "/api/v1/attendance/bulk",
        json=sheet(section, [(student, "present"), (student, "absent")]),
        headers=faculty_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Each student can only be marked once per sheet"


def test_correct_a_mark(client: TestClient, faculty_headers, section, student):
    record = mark(client, faculty_headers, section, student, status="absent").json()["data"]
    response = client.patch(
        f"/api/v1/attendance/{record['id']}",
        json={"status": "excused", "remarks": "Medical certificate"},
        headers=faculty_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "excused"
    assert response.json()["data"]["remarks"] == "Medical certificate"


def test_section_report(client: TestClient, faculty_headers, section, classmates):
    """Test the day's register is summarised with the share of present students"""
    client.post(
        "/api/v1/attendance/bulk",
        json=sheet(section, zip(classmates, ["present", "present", "absent", "excused"])),
        headers=faculty_headers,
    )

    response = client.get(
        f"/api/v1/attendance/sections/{section.id}/report?date=2025-10-06", headers=faculty_headers
    )
    assert response.status_code == 200
    report = response.json()["data"]
    assert report["totalStudents"] == 4
    assert (report["present"], report["absent"], report["late"], report["excused"]) == (2, 1, 0, 1)
    assert report["attendancePercentage"] == 50.0
    assert len(report["records"]) == 4


def test_section_report_without_marks(client: TestClient, faculty_headers, section):
    response = client.get(
        f"/api/v1/attendance/sections/{section.id}/report?date=2025-10-10", headers=faculty_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["attendancePercentage"] == 0.0


def test_student_report(client: TestClient, faculty_headers, student_headers, section, student):
    """Test a student's percentage over a date range"""
    for day, status in [("2025-10-06", "present"), ("2025-10-07", "late"), ("2025-10-08", "present"), ("2025-10-20", "absent")]:
        assert mark(client, faculty_headers, section, student, day=day, status=status).status_code == 201

    response = client.get(
        f"/api/v1/attendance/students/{student.id}/report",
        params={"sectionId": str(section.id), "startDate": "2025-10-01", "endDate": "2025-10-10"},
        headers=student_headers,
    )
    assert response.status_code == 200
    report = response.json()["data"]
    assert report["totalClasses"] == 3
    assert report["present"] == 2
    assert report["attendancePercentage"] == 66.67


def test_student_report_inverted_range(client: TestClient, faculty_headers, student):
    response = client.get(
        f"/api/v1/attendance/students/{student.id}/report",
        params={"startDate": "2025-10-10", "endDate": "2025-10-01"},
        headers=faculty_headers,
    )
    assert response.status_code == 400
