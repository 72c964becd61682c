from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure

from app.main import app


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data == {"success": False, "message": "Not Found", "data": []}


def test_body_type_error_is_reported_as_invalid_input(client):
    response = client.post("/login", json={"email": ["not", "a", "string"], "password": "x"})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Input validation failed"
    assert data["data"] == []


def test_custom_exception():
    from app.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = TestClient(app).get("/test-custom-error")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Item not found", "data": []}


def test_conflict_maps_to_400():
    from app.core.exceptions import ConflictError

    @app.get("/test-conflict-error")
    def trigger_conflict():
        raise ConflictError("Email already exists")

    response = TestClient(app).get("/test-conflict-error")
    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


def test_database_error_maps_to_500():
    @app.get("/test-database-error")
    def trigger_database_error():
        raise OperationFailure("boom")

    response = TestClient(app).get("/test-database-error")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Database error", "data": []}


def test_unhandled_exception_maps_to_500():
    @app.get("/test-unhandled-error")
    def trigger_unhandled():
        raise KeyError("missing")

    response = TestClient(app, raise_server_exceptions=False).get("/test-unhandled-error")
    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["data"] == []
