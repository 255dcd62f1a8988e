"""Error response tests."""

from fastapi.testclient import TestClient

from expense_tracker.api.dependencies import get_storage
from expense_tracker.main import app


class BrokenStorage:
    """Storage stand-in whose reads always fail."""

    def list_expenses(self, user_id=None):
        raise RuntimeError("disk on fire")


def test_unexpected_error_surfaces_message(client, auth_headers):
    """Test that unexpected failures become 500 with the raw message."""
    app.dependency_overrides[get_storage] = BrokenStorage
    with TestClient(app, raise_server_exceptions=False) as broken_client:
        response = broken_client.get("/api/expenses", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "disk on fire"}


def test_validation_errors_are_bad_requests(client, auth_headers):
    """Test that malformed bodies are 400 rather than 422."""
    response = client.post("/api/expenses", headers=auth_headers, json={"amount": "lots"})
    assert response.status_code == 400
    fields = {tuple(error["loc"]) for error in response.json()["detail"]}
    assert ("body", "description") in fields
    assert ("body", "amount") in fields


def test_unknown_api_route(client):
    """Test that unknown API paths are 404."""
    response = client.get("/api/nothing-here")
    assert response.status_code == 404


def test_token_for_deleted_user(client, auth_headers, db):
    """Test that a valid token for a vanished user is rejected where the user is needed."""
    from expense_tracker.models import User

    db.query(User).filter(User.id == auth_headers.user_id).delete()
    db.commit()

    response = client.get("/api/auth/verify", headers=auth_headers)
    assert response.status_code == 401
