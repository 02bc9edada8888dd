"""API endpoint tests."""

import asyncio
import json

from src.main import user_service_error_handler
from src.services.errors import ValidationError

SENSITIVE_FIELDS = {"password", "tokens", "avatar"}


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": " NewUser@Example.com", "password": "abc12345", "name": "New User"},
    )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["age"] == 0
    assert not SENSITIVE_FIELDS & set(data["user"])


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "TEST@example.com", "password": "abc12345", "name": "Duplicate"},
    )
    assert response.status_code == 409
    assert "already registered" in response.json()["detail"]


def test_register_rejects_password_containing_password(client):
    """Test registration rejects passwords containing the word password."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "bad@example.com", "password": "Password123", "name": "Bad"},
    )
    assert response.status_code == 422


def test_register_rejects_negative_age(client):
    """Test registration rejects a negative age."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "young@example.com", "password": "abc12345", "name": "Young", "age": -1},
    )
    assert response.status_code == 422


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["access_token"] != auth_headers["Authorization"].removeprefix("Bearer ")
    assert data["user"]["id"] == auth_headers.user_id
    assert not SENSITIVE_FIELDS & set(data["user"])


def test_login_failures_are_indistinguishable(client, auth_headers):
    """Test unknown email and wrong password give the same response."""
    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    unknown_email = client.post(
        "/api/v1/auth/login", json={"email": "nonexistent@x.com", "password": "anything"}
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Unable to login"}


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == auth_headers.email
    assert set(data) == {"id", "name", "email", "age", "created_at", "updated_at"}


def test_get_current_user_requires_token(client):
    """Test unauthenticated and unknown tokens are rejected."""
    assert client.get("/api/v1/auth/me").status_code in (401, 403)
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_logout(client, auth_headers):
    """Test logout revokes only the current token."""
    login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    other_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200

    assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 401
    assert client.get("/api/v1/auth/me", headers=other_headers).status_code == 200


def test_logout_all(client, auth_headers):
    """Test logout-all revokes every token."""
    login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    other_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = client.post("/api/v1/auth/logout-all", headers=auth_headers)
    assert response.status_code == 200

    assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 401
    assert client.get("/api/v1/auth/me", headers=other_headers).status_code == 401


def test_update_me(client, auth_headers):
    """Test updating the current user."""
    response = client.patch(
        "/api/v1/users/me", headers=auth_headers, json={"name": "Renamed", "age": 33}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["age"] == 33
    assert not SENSITIVE_FIELDS & set(response.json())


def test_update_password(client, auth_headers):
    """Test a changed password is required at the next login."""
    response = client.patch(
        "/api/v1/users/me", headers=auth_headers, json={"password": "newsecret9"}
    )
    assert response.status_code == 200

    old = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    new = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "newsecret9"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_invalid_fields(client, auth_headers):
    """Test invalid updates are rejected."""
    response = client.patch("/api/v1/users/me", headers=auth_headers, json={"age": -1})
    assert response.status_code == 422
    response = client.patch("/api/v1/users/me", headers=auth_headers, json={"password": "short"})
    assert response.status_code == 422


def test_update_email_conflict(client, auth_headers):
    """Test changing email to a registered one conflicts."""
    client.post(
        "/api/v1/auth/register",
        json={"email": "taken@example.com", "password": "abc12345", "name": "Taken"},
    )
    response = client.patch(
        "/api/v1/users/me", headers=auth_headers, json={"email": "taken@example.com"}
    )
    assert response.status_code == 409


def test_create_and_list_tasks(client, auth_headers):
    """Test tasks are created for and listed by their owner."""
    response = client.post(
        "/api/v1/tasks", headers=auth_headers, json={"description": "  Buy milk  "}
    )
    assert response.status_code == 201
    assert response.json()["description"] == "Buy milk"
    assert response.json()["completed"] is False
    assert response.json()["owner_id"] == auth_headers.user_id

    response = client.get("/api/v1/tasks", headers=auth_headers)
    assert response.status_code == 200
    assert [task["description"] for task in response.json()] == ["Buy milk"]


def test_delete_me_removes_tasks(client, auth_headers, task_service):
    """Test deleting the current user deletes their tasks."""
    for description in ["one", "two"]:
        client.post("/api/v1/tasks", headers=auth_headers, json={"description": description})

    response = client.delete("/api/v1/users/me", headers=auth_headers)
    assert response.status_code == 204

    assert task_service.list_owned_tasks(auth_headers.user_id) == []
    assert client.get("/api/v1/auth/me", headers=auth_headers).status_code == 401
    login = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert login.status_code == 401


def test_login_with_long_password(client):
    """Test passwords longer than 72 characters register and log in."""
    password = "k" * 80
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "long@example.com", "password": password, "name": "Long"},
    )
    assert response.status_code == 201

    response = client.post(
        "/api/v1/auth/login", json={"email": "long@example.com", "password": password}
    )
    assert response.status_code == 200


def test_service_validation_error_response():
    """Test service validation errors become 422 responses with details."""
    error = ValidationError("Invalid user data", errors=[{"loc": ("age",), "msg": "too low"}])

    response = asyncio.run(user_service_error_handler(None, error))

    assert response.status_code == 422
    assert json.loads(response.body) == {
        "detail": "Invalid user data",
        "errors": [{"loc": ["age"], "msg": "too low"}],
    }
