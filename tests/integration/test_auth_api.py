"""Integration tests for registration, login and token refresh"""

from fastapi.testclient import TestClient

REGISTRATION = {
    "email": "Faculty.Member@uni.edu",
    "password": "Str0ng!Pass",
    "firstName": "Sara",
    "lastName": "Malik",
    "role": "faculty",
}


def register(client: TestClient, **overrides):
    return client.post("/api/v1/auth/register", json={**REGISTRATION, **overrides})


def test_register_returns_user_and_tokens(client: TestClient):
    """Test registration issues an access and refresh token"""
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["user"]["email"] == "faculty.member@uni.edu"
    assert body["data"]["user"]["role"] == "faculty"
    assert "passwordHash" not in body["data"]["user"]
    assert body["data"]["tokens"]["accessToken"]
    assert body["data"]["tokens"]["refreshToken"]


def test_register_duplicate_email(client: TestClient):
    """Test emails are unique regardless of case"""
    register(client)
    response = register(client, email="faculty.member@UNI.edu")

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "User with this email already exists"


def test_register_weak_password(client: TestClient):
    """Test password strength rules"""
    response = register(client, password="weakpass")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_and_profile(client: TestClient):
    """Test login then fetch the caller's profile"""
    register(client)
    response = client.post(
        "/api/v1/auth/login", json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]}
    )
    assert response.status_code == 200
    token = response.json()["data"]["tokens"]["accessToken"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["firstName"] == "Sara"
    assert me.json()["data"]["lastLoginAt"] is not None


def test_login_wrong_password(client: TestClient):
    """Test bad credentials are a 401 without revealing which part was wrong"""
    register(client)
    response = client.post("/api/v1/auth/login", json={"email": REGISTRATION["email"], "password": "Wrong!Pass1"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


def test_refresh_token(client: TestClient):
    """Test a refresh token yields a new token pair"""
    tokens = register(client).json()["data"]["tokens"]
    response = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert response.status_code == 200
    assert response.json()["data"]["accessToken"]


def test_access_token_cannot_refresh(client: TestClient):
    """Test access tokens are not accepted as refresh tokens"""
    tokens = register(client).json()["data"]["tokens"]
    response = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["accessToken"]})
    assert response.status_code == 401


def test_permissions_endpoint(client: TestClient, headers_for):
    """Test the caller's role permissions are listed"""
    response = client.get("/api/v1/auth/me/permissions", headers=headers_for("librarian"))
    assert response.status_code == 200
    assert "library:write" in response.json()["data"]["permissions"]
