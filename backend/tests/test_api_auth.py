# backend/tests/test_api_auth.py
from auth.router import router
from core.security import SESSION_COOKIE_NAME

from conftest import login, register


def _parse_set_cookie(header):
    name_value, *attributes = [part.strip() for part in header.split(";")]
    return name_value, [attribute.lower() for attribute in attributes]


def test_router_exists():
    """Test that the auth router exists and has correct config."""
    assert router.prefix == "/api/auth"
    assert "auth" in router.tags


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_register_returns_created_user_without_password(client):
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "alice@example.com"
    assert set(body["user"]) == {"id", "email", "created_at"}


def test_register_does_not_start_a_session(client):
    register(client)
    assert SESSION_COOKIE_NAME not in client.cookies


def test_register_duplicate_email_returns_409(client):
    register(client)
    response = register(client)

    assert response.status_code == 409
    assert response.json() == {"error": "User already exists"}


def test_register_invalid_email_returns_400(client):
    response = register(client, email="not-an-email")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}


def test_register_short_password_returns_400(client):
    response = register(client, password="abc")

    assert response.status_code == 400
    assert response.json() == {"error": "Password must be at least 6 characters long"}


def test_register_malformed_body_returns_400(client):
    response = client.post(
        "/api/auth/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_login_sets_session_cookie(client):
    register(client)
    response = login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "alice@example.com"
    assert "password_hash" not in body["user"]

    name_value, attributes = _parse_set_cookie(response.headers["set-cookie"])
    assert name_value.startswith(SESSION_COOKIE_NAME + "=")
    assert "httponly" in attributes
    assert "samesite=lax" in attributes
    assert "path=/" in attributes
    assert "max-age=604800" in attributes
    assert "secure" not in attributes


def test_login_failures_are_indistinguishable(client):
    register(client)
    wrong_password = login(client, password="wrong-password")
    unknown_email = login(client, email="nobody@example.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in wrong_password.headers


def test_login_missing_fields_returns_400(client):
    response = client.post("/api/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_me_returns_session_identity(client):
    user = register(client).json()["user"]
    login(client)

    response = client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json() == {"id": user["id"], "email": "alice@example.com"}


def test_me_without_session_returns_401(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_logout_expires_cookie(client):
    register(client)
    login(client)

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
    name_value, attributes = _parse_set_cookie(response.headers["set-cookie"])
    assert name_value.startswith(SESSION_COOKIE_NAME + "=")
    assert "max-age=0" in attributes

    assert client.get("/api/auth/me").status_code == 401


def test_logout_without_session_is_idempotent(client):
    first = client.post("/api/auth/logout")
    second = client.post("/api/auth/logout")

    assert first.status_code == second.status_code == 200
