"""Integration tests for health, metrics, tracing and the error envelope"""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "university-erp"}


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "university_salary_processed_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_request_id_generated(client: TestClient):
    """Test every response carries an X-Request-ID"""
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")


def test_request_id_propagated(client: TestClient):
    """Test a caller-supplied request ID is echoed back"""
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_unknown_route(client: TestClient):
    """Test unknown routes use the error envelope"""
    response = client.get("/api/v1/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["error"]["message"] == "Route GET /api/v1/nowhere not found"


def test_missing_authorization_header(client: TestClient):
    """Test protected routes require a token"""
    response = client.get("/api/v1/students")
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Authorization header missing"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_malformed_authorization_header(client: TestClient):
    """Test non-Bearer schemes are rejected"""
    response = client.get("/api/v1/students", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid authorization header format"


def test_invalid_token(client: TestClient):
    """Test garbage tokens are rejected"""
    response = client.get("/api/v1/students", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


def test_role_guard(client: TestClient, headers_for):
    """Test a student cannot list all students"""
    response = client.get("/api/v1/students", headers=headers_for("student"))
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"


def test_request_validation_envelope(client: TestClient, admin_headers):
    """Test body validation failures are reported as 400 with field details"""
    response = client.post("/api/v1/programs", json={"name": "No code"}, headers=admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["message"] == "Validation failed"
    assert any(detail["field"] == "code" for detail in body["error"]["details"])


def test_page_limit_bounds(client: TestClient, admin_headers):
    """Test limit above the maximum page size is refused"""
    response = client.get("/api/v1/programs?limit=500", headers=admin_headers)
    assert response.status_code == 400
