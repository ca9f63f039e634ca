from fastapi.testclient import TestClient


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["ai_enabled"] is False
    assert "timestamp" in data


def test_missing_identity_is_unauthorized(client: TestClient):
    response = client.get("/api/v1/forms")
    assert response.status_code == 401
    assert response.json()["detail"] == "Please authenticate"


def test_unknown_role_is_unauthorized(client: TestClient):
    response = client.get(
        "/api/v1/forms", headers={"X-User-Id": "u-1", "X-User-Role": "superuser"}
    )
    assert response.status_code == 401
