"""Tests for authentication router."""

from fastapi.testclient import TestClient


def test_signup_success(test_client: TestClient):
    """Test successful user signup."""
    response = test_client.post(
        "/api/auth/signup",
        json={"email": "newuser@example.com", "password": "testpassword123", "name": " New User "},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "newuser@example.com"
    assert data["name"] == "New User"
    assert data["is_anonymous"] is False
    assert "id" in data
    assert "password" not in data


def test_signup_duplicate_email(test_client: TestClient, create_user):
    """Test signup with an existing email."""
    create_user(email="taken@example.com")

    response = test_client.post(
        "/api/auth/signup",
        json={"email": "taken@example.com", "password": "testpassword123", "name": "Dup"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_signup_short_password(test_client: TestClient):
    """Test signup validation rejects short passwords."""
    response = test_client.post(
        "/api/auth/signup",
        json={"email": "short@example.com", "password": "short", "name": "Short"},
    )

    assert response.status_code == 422


def test_login_success(test_client: TestClient, create_user):
    """Test login returns a usable bearer token."""
    user, _ = create_user(email="login@example.com", password="testpassword123")

    response = test_client.post(
        "/api/auth/login",
        json={"email": "login@example.com", "password": "testpassword123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == str(user.id)

    me = test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "login@example.com"


def test_login_wrong_password(test_client: TestClient, create_user):
    """Test login with wrong password."""
    create_user(email="wrong@example.com", password="testpassword123")

    response = test_client.post(
        "/api/auth/login",
        json={"email": "wrong@example.com", "password": "not-the-password"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(test_client: TestClient):
    """Test login with an unknown email."""
    response = test_client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "testpassword123"},
    )

    assert response.status_code == 401


def test_anonymous_sign_in(test_client: TestClient):
    """Anonymous sign-in creates an account and a token that can write."""
    response = test_client.post("/api/auth/anonymous")

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["is_anonymous"] is True
    assert data["user"]["email"] is None
    headers = {"Authorization": f"Bearer {data['access_token']}"}

    created = test_client.post("/api/documents", json={"name": "a", "content": "{}"}, headers=headers)
    assert created.status_code == 201
    assert len(test_client.get("/api/documents", headers=headers).json()) == 1


def test_anonymous_sign_ins_are_isolated(test_client: TestClient):
    """Two anonymous accounts do not see each other's documents."""
    first = test_client.post("/api/auth/anonymous").json()["access_token"]
    second = test_client.post("/api/auth/anonymous").json()["access_token"]

    test_client.post(
        "/api/documents", json={"name": "a", "content": "{}"}, headers={"Authorization": f"Bearer {first}"}
    )

    assert test_client.get("/api/documents", headers={"Authorization": f"Bearer {second}"}).json() == []


def test_me_unauthenticated(test_client: TestClient):
    """The current-user endpoint needs a token."""
    response = test_client.get("/api/auth/me")

    assert response.status_code == 401
