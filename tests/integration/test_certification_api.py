"""Integration tests for certificate requests and public verification"""

import re

import pytest
from fastapi.testclient import TestClient


def request_certificate(client, headers, student, **overrides):
    body = {"studentId": str(student.id), "certificateType": "transcript", "purpose": "Higher studies"}
    body.update(overrides)
    response = client.post("/api/v1/certificates/requests", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def issued(client: TestClient, staff_headers, student_headers, student):
    """An approved, processed transcript"""
    request = request_certificate(client, student_headers, student)
    client.patch(f"/api/v1/certificates/requests/{request['id']}", json={"status": "approved"}, headers=staff_headers)
    response = client.post(f"/api/v1/certificates/requests/{request['id']}/process", headers=staff_headers)
    assert response.status_code == 201
    return request, response.json()["data"]


def test_request_starts_pending(client: TestClient, student_headers, student):
    """Test new requests wait for a decision"""
    request = request_certificate(client, student_headers, student)
    assert request["status"] == "pending"
    assert request["feePaid"] is False


def test_postal_delivery_needs_address(client: TestClient, student_headers, student):
    response = client.post(
        "/api/v1/certificates/requests",
        json={"studentId": str(student.id), "certificateType": "degree", "deliveryMethod": "postal"},
        headers=student_headers,
    )
    assert response.status_code == 400


def test_unpaid_fee_blocks_approval(client: TestClient, staff_headers, student_headers, student):
    """Test approval waits for the certificate fee"""
    request = request_certificate(client, student_headers, student, feeAmount=1500)
    url = f"/api/v1/certificates/requests/{request['id']}"

    response = client.patch(url, json={"status": "approved"}, headers=staff_headers)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Certificate fee must be paid before approval"

    assert client.post(f"{url}/fee-paid", headers=staff_headers).json()["data"]["feePaid"] is True
    assert client.post(f"{url}/fee-paid", headers=staff_headers).status_code == 400

    response = client.patch(url, json={"status": "approved"}, headers=staff_headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"


def test_rejection_needs_reason(client: TestClient, staff_headers, student_headers, student):
    request = request_certificate(client, student_headers, student)
    url = f"/api/v1/certificates/requests/{request['id']}"
    assert client.patch(url, json={"status": "rejected"}, headers=staff_headers).status_code == 400

    response = client.patch(url, json={"status": "rejected", "rejectionReason": "Dues pending"}, headers=staff_headers)
    assert response.json()["data"]["status"] == "rejected"


def test_process_requires_approval(client: TestClient, staff_headers, student_headers, student):
    request = request_certificate(client, student_headers, student)
    response = client.post(f"/api/v1/certificates/requests/{request['id']}/process", headers=staff_headers)
    assert response.status_code == 400


def test_process_issues_certificate(client: TestClient, staff_headers, issued):
    """Test issuance assigns a certificate number and verification code"""
    request, certificate = issued
    assert re.fullmatch(r"CERT-\d{4}-\d{4}-\d{5}", certificate["certificateNumber"])
    assert re.fullmatch(r"VER-[0-9A-F]{16}", certificate["verificationCode"])
    assert certificate["studentName"] == "Ayesha Khan"

    url = f"/api/v1/certificates/requests/{request['id']}"
    assert client.get(url, headers=staff_headers).json()["data"]["status"] == "processing"
    assert client.post(f"{url}/ready", headers=staff_headers).json()["data"]["status"] == "ready"
    assert client.get(f"{url}/certificate", headers=staff_headers).json()["data"]["id"] == certificate["id"]


def test_verify_without_authentication(client: TestClient, issued):
    """Test anyone can verify an issued certificate"""
    _, certificate = issued
    response = client.get("/api/v1/certificates/verify", params={"verificationCode": certificate["verificationCode"]})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isValid"] is True
    assert data["certificateType"] == "transcript"
    assert data["studentName"] == "Ayesha Khan"

    response = client.post("/api/v1/certificates/verify", json={"certificateNumber": certificate["certificateNumber"]})
    assert response.json()["data"]["isValid"] is True


def test_verify_unknown_code(client: TestClient):
    response = client.get("/api/v1/certificates/verify", params={"verificationCode": "VER-0000000000000000"})

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["data"]["isValid"] is False
    assert body["error"]["message"] == "Certificate not found or invalid"


def test_verify_needs_a_lookup_key(client: TestClient):
    assert client.get("/api/v1/certificates/verify").status_code == 400
