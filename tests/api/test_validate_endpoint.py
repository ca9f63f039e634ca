from fastapi.testclient import TestClient

SCHEMA = {
    "title": "Pole Inspection",
    "fields": [
        {"name": "inspector", "label": "Inspector", "type": "string", "required": True},
        {"name": "voltage", "label": "Voltage", "type": "number", "min": 0, "max": 1000, "notifyIf": ">400"},
    ],
}


def test_valid_submission_reports_notifications(client: TestClient):
    response = client.post(
        "/api/v1/validate",
        json={"schema": SCHEMA, "data": {"inspector": "Ana", "voltage": 450}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "errors": [],
        "issues": [],
        "notifications": [
            {
                "field": "voltage",
                "message": "Voltage (450) exceeds threshold of 400",
                "value": 450,
                "threshold": 400,
                "condition": ">400",
            }
        ],
    }


def test_invalid_submission_reports_errors_only(client: TestClient):
    response = client.post(
        "/api/v1/validate",
        json={"schema": SCHEMA, "data": {"voltage": 1500}},
    )

    data = response.json()
    assert data["valid"] is False
    assert data["errors"] == ["Inspector is required", "Voltage must be at most 1000"]
    assert data["issues"][0] == {"field": "inspector", "message": "Inspector is required"}
    assert data["notifications"] == []


def test_missing_schema(client: TestClient):
    response = client.post("/api/v1/validate", json={"data": {"a": 1}})

    data = response.json()
    assert data["valid"] is False
    assert data["errors"] == ["Invalid schema"]
    assert data["issues"] == [{"field": None, "message": "Invalid schema"}]


def test_validate_needs_no_identity(client: TestClient):
    response = client.post("/api/v1/validate", json={"schema": {"fields": []}, "data": {}})
    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_overflowing_value_serializes_as_null(client: TestClient):
    schema = {"fields": [{"name": "v", "type": "number", "notifyIf": ">=1"}]}
    response = client.post("/api/v1/validate", json={"schema": schema, "data": {"v": "Infinity"}})

    assert response.status_code == 200
    assert response.json()["notifications"][0]["value"] is None
