"""Integration tests for programs, courses and student records"""

from fastapi.testclient import TestClient

STUDENT = {
    "rollNumber": "2025-CS-042",
    "firstName": "Hamza",
    "lastName": "Iqbal",
    "email": "hamza@uni.edu",
    "batch": "2025-Fall",
}


def test_create_and_list_programs(client: TestClient, staff_headers):
    """Test program creation and paginated listing"""
    for code in ("BSCS", "BSSE", "BBA"):
        response = client.post(
            "/api/v1/programs", json={"code": code, "name": f"Program {code}"}, headers=staff_headers
        )
        assert response.status_code == 201

    response = client.get("/api/v1/programs?page=1&limit=2", headers=staff_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 2
    assert data["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
        "hasNext": True,
        "hasPrev": False,
    }


def test_duplicate_program_code(client: TestClient, staff_headers, program):
    """Test program codes are unique"""
    response = client.post("/api/v1/programs", json={"code": "BSCS", "name": "Again"}, headers=staff_headers)
    assert response.status_code == 409


def test_create_course_for_program(client: TestClient, staff_headers, program):
    """Test courses attach to an existing program"""
    response = client.post(
        "/api/v1/courses",
        json={"code": "CS101", "title": "Programming Fundamentals", "programId": str(program.id), "semester": 1},
        headers=staff_headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["programId"] == str(program.id)


def test_create_student(client: TestClient, staff_headers, program):
    """Test student creation"""
    response = client.post(
        "/api/v1/students", json={**STUDENT, "programId": str(program.id)}, headers=staff_headers
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Student created successfully"
    assert body["data"]["rollNumber"] == "2025-CS-042"
    assert body["data"]["enrollmentStatus"] == "active"


def test_duplicate_roll_number(client: TestClient, staff_headers):
    """Test roll numbers are unique"""
    client.post("/api/v1/students", json=STUDENT, headers=staff_headers)
    response = client.post("/api/v1/students", json=STUDENT, headers=staff_headers)
    assert response.status_code == 409


def test_invalid_batch(client: TestClient, staff_headers):
    """Test batch must look like 2025-Fall"""
    response = client.post("/api/v1/students", json={**STUDENT, "batch": "Fall 2025"}, headers=staff_headers)
    assert response.status_code == 400


def test_unknown_program(client: TestClient, staff_headers):
    """Test referenced program must exist"""
    response = client.post(
        "/api/v1/students",
        json={**STUDENT, "programId": "00000000-0000-0000-0000-000000000000"},
        headers=staff_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Program not found"


def test_search_students(client: TestClient, staff_headers, student):
    """Test search matches names case-insensitively"""
    response = client.get("/api/v1/students?search=ayE", headers=staff_headers)
    assert response.json()["data"]["pagination"]["total"] == 1

    response = client.get("/api/v1/students?search=nobody", headers=staff_headers)
    assert response.json()["data"]["items"] == []


def test_update_student(client: TestClient, staff_headers, student):
    """Test partial update"""
    response = client.put(
        f"/api/v1/students/{student.id}", json={"currentSemester": 3}, headers=staff_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["currentSemester"] == 3
    assert response.json()["data"]["firstName"] == "Ayesha"


def test_delete_is_soft(client: TestClient, staff_headers, student):
    """Test deleting a student marks them withdrawn"""
    response = client.delete(f"/api/v1/students/{student.id}", headers=staff_headers)
    assert response.status_code == 200

    response = client.get(f"/api/v1/students/{student.id}", headers=staff_headers)
    assert response.status_code == 200
    assert response.json()["data"]["enrollmentStatus"] == "withdrawn"


def test_student_not_found(client: TestClient, staff_headers):
    """Test unknown student ids"""
    response = client.get("/api/v1/students/00000000-0000-0000-0000-000000000000", headers=staff_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Student not found"


def test_cgpa_without_results(client: TestClient, staff_headers, student):
    """Test CGPA is zero before any approved result"""
    response = client.get(f"/api/v1/students/{student.id}/cgpa", headers=staff_headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"studentId": str(student.id), "cgpa": 0.0, "resultsCount": 0}
