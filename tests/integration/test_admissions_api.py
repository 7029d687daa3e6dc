"""Integration tests for applications, eligibility and merit lists"""

import re
from datetime import date

import pytest
from fastapi.testclient import TestClient
from university_erp.infrastructure.database.models import User


@pytest.fixture
def applicants(db):
    """Three applicant accounts"""
    users = [
        User(email=f"applicant{index}@uni.edu", password_hash="x", first_name="Applicant", last_name=str(index))
        for index in range(3)
    ]
    db.add_all(users)
    db.commit()
    return users


@pytest.fixture
def criteria(client: TestClient, staff_headers, program):
    response = client.put(
        f"/api/v1/admissions/programs/{program.id}/criteria",
        json={"minimumMarks": 60},
        headers=staff_headers,
    )
    assert response.status_code == 200
    return response.json()["data"]


def apply(client, headers, user, program):
    return client.post(
        "/api/v1/admissions/applications",
        json={"userId": str(user.id), "programId": str(program.id), "batch": "2025-Fall"},
        headers=headers,
    )


def check(client, headers, application, marks, entry_test):
    return client.post(
        f"/api/v1/admissions/applications/{application['id']}/eligibility",
        json={
            "academicHistory": [
                {"degree": "Matric", "year": date.today().year - 3, "marks": 95},
                {"degree": "FSc", "year": date.today().year - 1, "marks": marks},
            ],
            "testScores": {"entryTest": entry_test, "interview": 50},
        },
        headers=headers,
    )


def test_submit_application(client: TestClient, student_headers, applicants, program):
    """Test application numbering and initial status"""
    response = apply(client, student_headers, applicants[0], program)

    assert response.status_code == 201
    data = response.json()["data"]
    assert re.fullmatch(rf"APP-{date.today().year}-\d{{5}}", data["applicationNumber"])
    assert data["status"] == "submitted"


def test_duplicate_active_application(client: TestClient, student_headers, applicants, program):
    """Test one active application per program"""
    apply(client, student_headers, applicants[0], program)
    response = apply(client, student_headers, applicants[0], program)
    assert response.status_code == 409


def test_eligibility_uses_latest_qualification(client: TestClient, staff_headers, student_headers, applicants, program, criteria):
    """Test the most recent qualification decides eligibility"""
    application = apply(client, student_headers, applicants[0], program).json()["data"]

    response = check(client, staff_headers, application, marks=55, entry_test=80)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["eligible"] is False
    assert data["status"] == "not_eligible"
    assert data["score"] == 34.0


def test_eligibility_without_criteria(client: TestClient, staff_headers, student_headers, applicants, program):
    """Test programs without criteria report the missing configuration"""
    application = apply(client, student_headers, applicants[0], program).json()["data"]
    data = check(client, staff_headers, application, marks=90, entry_test=90).json()["data"]
    assert data["eligible"] is False
    assert data["reasons"] == ["Eligibility criteria not found for this program"]


def test_merit_list(client: TestClient, staff_headers, student_headers, applicants, program, criteria):
    """Test eligible applicants are ranked and seats allocated"""
    scores = [60, 90, 75]
    applications = []
    for user, entry_test in zip(applicants, scores):
        application = apply(client, student_headers, user, program).json()["data"]
        assert check(client, staff_headers, application, marks=80, entry_test=entry_test).json()["data"]["eligible"]
        applications.append(application)

    response = client.post(
        "/api/v1/admissions/merit-list",
        json={"programId": str(program.id), "totalSeats": 2},
        headers=staff_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["selected"] == 2
    assert data["waitlisted"] == 1
    assert [entry["applicationId"] for entry in data["entries"]] == [
        applications[1]["id"],
        applications[2]["id"],
        applications[0]["id"],
    ]

    rank = client.get(
        f"/api/v1/admissions/applications/{applications[0]['id']}/merit-rank", headers=student_headers
    ).json()["data"]
    assert rank["meritRank"] == 3
    assert rank["status"] == "waitlisted"


def test_update_status(client: TestClient, staff_headers, student_headers, applicants, program):
    """Test manual status changes are recorded with the reviewer"""
    application = apply(client, student_headers, applicants[0], program).json()["data"]
    response = client.patch(
        f"/api/v1/admissions/applications/{application['id']}/status",
        json={"status": "under_review", "remarks": "Documents received"},
        headers=staff_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "under_review"
    assert response.json()["data"]["reviewedBy"] is not None


def test_students_cannot_set_criteria(client: TestClient, student_headers, program):
    """Test criteria are staff managed"""
    response = client.put(
        f"/api/v1/admissions/programs/{program.id}/criteria", json={"minimumMarks": 10}, headers=student_headers
    )
    assert response.status_code == 403
