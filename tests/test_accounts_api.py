import pytest
from pymongo.errors import OperationFailure

from app.core.security import create_access_token
from app.services import user_service


def register(client, payload):
    return client.post("/register", json=payload)


def login(client, email="a@b.com", password="Secret1!"):
    return client.post("/login", json={"email": email, "password": password})


def test_connection_test_route(client):
    response = client.get("/test")
    assert response.status_code == 200
    assert response.text == "Connected successfully"
    assert response.headers["content-type"].startswith("text/plain")


def test_health_reports_degraded_without_database():
    from fastapi.testclient import TestClient
    from app.main import app

    response = TestClient(app).get("/health")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "unhealthy"


def test_register_success(client, alice):
    response = register(client, alice)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "User registered successfully",
        "data": {},
    }


def test_register_twice_is_conflict(client, alice):
    assert register(client, alice).status_code == 200

    response = register(client, alice)
    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


@pytest.mark.parametrize("overrides, message", [
    ({"mobile_number": None}, "All fields are required"),
    ({"name": ""}, "All fields are required"),
    ({"name": "Al", "email": "bad"}, "Name must be at least 3 characters long"),
    ({"email": "bad", "address": "short"}, "Invalid email format"),
    ({"address": "short", "password": "weak"}, "Address must be at least 10 characters long"),
    ({"password": "abc1234", "mobile_number": "123"},
     "Password must be at least 7 characters long and contain at least one special character"),
    ({"mobile_number": "8123456789"}, "Invalid mobile number"),
])
def test_register_reports_first_failing_field(client, alice, overrides, message):
    response = register(client, {**alice, **overrides})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": message, "data": []}


def test_login_sets_http_only_cookie(client, alice):
    register(client, alice)

    response = login(client)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "a@b.com"
    token = body["data"]["token"]

    set_cookie = response.headers["set-cookie"]
    assert f"token={token}" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Max-Age=3600" in set_cookie


def test_login_requires_both_fields(client):
    response = client.post("/login", json={"email": "a@b.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_login_with_wrong_password_is_unauthenticated(client, alice):
    register(client, alice)

    response = login(client, password="Wrong1!!")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_all_users_requires_token(client):
    response = client.get("/all-users")
    assert response.status_code == 401
    assert response.json()["message"] == "Authentication token is missing"


def test_all_users_rejects_malformed_token(client):
    client.cookies.set("token", "not-a-token")
    response = client.get("/all-users")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_all_users_rejects_token_for_unknown_user(client):
    client.cookies.set("token", create_access_token("ghost@nowhere.com"))
    response = client.get("/all-users")
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_all_users_rejects_signed_token_never_issued(client, alice):
    register(client, alice)
    client.cookies.set("token", create_access_token("a@b.com"))

    response = client.get("/all-users")
    assert response.status_code == 401
    assert response.json()["message"] == "Session is no longer active"


def test_all_users_accepts_bearer_header(client, alice):
    register(client, alice)
    token = login(client).json()["data"]["token"]
    client.cookies.clear()

    response = client.get("/all-users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_all_users_projects_safe_fields(client, alice):
    register(client, alice)
    login(client)

    response = client.get("/all-users")
    assert response.status_code == 200
    users = response.json()["data"]
    assert len(users) == 1
    assert set(users[0]) == {"id", "name", "email", "address", "mobile_number"}


def test_users_by_phone(client, alice):
    register(client, alice)
    register(client, {**alice, "name": "Bob Roe", "email": "bob@b.com"})

    response = client.post("/users", json={"mobile_number": "9876543210"})
    assert response.status_code == 200
    assert sorted(response.json()["data"]) == ["Alice Doe", "Bob Roe"]


def test_users_by_phone_without_matches_is_empty(client):
    response = client.post("/users", json={"mobile_number": "9000000000"})
    assert response.status_code == 200
    assert response.json()["data"] == []


def test_users_by_phone_validates_format(client):
    response = client.post("/users", json={"mobile_number": "12345"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid mobile number format"


def test_logout_without_any_token(client):
    response = client.post("/logout")
    assert response.status_code == 400
    assert response.json()["message"] == "Token is required for logout"
    assert 'token=""' in response.headers["set-cookie"]


def test_logout_with_explicit_body_token(client, alice):
    register(client, alice)
    token = login(client).json()["data"]["token"]
    client.cookies.clear()

    response = client.post("/logout", json={"token": token})
    assert response.status_code == 200
    assert response.json()["data"] == {"email": "a@b.com"}


def test_logout_with_unknown_query_token(client):
    response = client.post("/logout", params={"token": "unknown"})
    assert response.status_code == 404
    assert response.json()["message"] == "Session not found"


def test_logout_with_revoked_cookie_still_clears_cookie(client, alice):
    register(client, alice)
    token = login(client).json()["data"]["token"]
    assert client.post("/logout").status_code == 200

    client.cookies.set("token", token)
    response = client.post("/logout")
    assert response.status_code == 401
    assert 'token=""' in response.headers["set-cookie"]


def test_logout_database_failure_still_clears_cookie(client, monkeypatch):
    async def failing_lookup(token):
        raise OperationFailure("node is recovering")

    monkeypatch.setattr(user_service, "find_user_by_session_token", failing_lookup)

    response = client.post("/logout", params={"token": "abc"})
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Database error", "data": []}
    assert 'token=""' in response.headers["set-cookie"]


def test_responses_carry_process_time(client):
    response = client.get("/test")
    assert float(response.headers["X-Process-Time"]) >= 0


def test_end_to_end_session_lifecycle(client, alice):
    assert register(client, alice).json()["success"] is True

    token = login(client).json()["data"]["token"]

    response = client.get("/all-users")
    assert response.status_code == 200
    assert [user["name"] for user in response.json()["data"]] == ["Alice Doe"]

    response = client.post("/logout")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Logout successful",
        "data": {"email": "a@b.com"},
    }

    # The client dropped the cleared cookie; present the old token again
    client.cookies.set("token", token)
    response = client.get("/all-users")
    assert response.status_code == 401
    assert response.json()["message"] == "Session is no longer active"
