"""Integration tests for assignments and submissions"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from university_erp.infrastructure.database.models import Course


@pytest.fixture
def faculty_headers(headers_for):
    return headers_for("faculty")


@pytest.fixture
def course(db, program):
    course = Course(code="CS201", title="Data Structures", program_id=program.id, semester=3)
    db.add(course)
    db.commit()
    return course


def create_assignment(client, headers, course, due_in_days=7, publish=True):
    response = client.post(
        "/api/v1/learning/assignments",
        json={
            "courseId": str(course.id),
            "title": "Linked lists",
            "dueDate": (datetime.now(timezone.utc) + timedelta(days=due_in_days)).isoformat(),
            "maxMarks": 20,
            "isPublished": publish,
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def submit(client, headers, assignment, student):
    return client.post(
        f"/api/v1/learning/assignments/{assignment['id']}/submissions",
        json={"studentId": str(student.id), "submissionText": "See attached implementation"},
        headers=headers,
    )


def test_submit_before_due_date(client: TestClient, faculty_headers, student_headers, course, student):
    """Test on-time submissions are marked submitted"""
    assignment = create_assignment(client, faculty_headers, course)
    response = submit(client, student_headers, assignment, student)
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "submitted"


def test_late_submission(client: TestClient, faculty_headers, student_headers, course, student):
    """Test submissions after the due date are marked late"""
    assignment = create_assignment(client, faculty_headers, course, due_in_days=-1)
    assert submit(client, student_headers, assignment, student).json()["data"]["status"] == "late"


def test_unpublished_assignment(client: TestClient, faculty_headers, student_headers, course, student):
    """Test students cannot submit to drafts until published"""
    assignment = create_assignment(client, faculty_headers, course, publish=False)
    assert submit(client, student_headers, assignment, student).status_code == 400

    client.post(f"/api/v1/learning/assignments/{assignment['id']}/publish", headers=faculty_headers)
    assert submit(client, student_headers, assignment, student).status_code == 201


def test_duplicate_submission(client: TestClient, faculty_headers, student_headers, course, student):
    """Test one submission per student"""
    assignment = create_assignment(client, faculty_headers, course)
    submit(client, student_headers, assignment, student)
    assert submit(client, student_headers, assignment, student).status_code == 409


def test_empty_submission(client: TestClient, faculty_headers, student_headers, course, student):
    """Test text or a file is required"""
    assignment = create_assignment(client, faculty_headers, course)
    response = client.post(
        f"/api/v1/learning/assignments/{assignment['id']}/submissions",
        json={"studentId": str(student.id)},
        headers=student_headers,
    )
    assert response.status_code == 400


def test_grade_submission(client: TestClient, faculty_headers, student_headers, course, student):
    """Test grading within the assignment's maximum marks"""
    assignment = create_assignment(client, faculty_headers, course)
    submission = submit(client, student_headers, assignment, student).json()["data"]
    url = f"/api/v1/learning/submissions/{submission['id']}/grade"

    assert client.post(url, json={"obtainedMarks": 25}, headers=faculty_headers).status_code == 400

    response = client.post(url, json={"obtainedMarks": 18, "feedback": "Good work"}, headers=faculty_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "graded"
    assert data["obtainedMarks"] == 18
