import pytest
from fastapi.testclient import TestClient

from fieldform.api import create_app
from fieldform.config import Config


def user_headers(user_id, role):
    return {"X-User-Id": user_id, "X-User-Role": role}


@pytest.fixture
def config(tmp_path):
    return Config(
        database_path=str(tmp_path / "fieldform.db"),
        log_file=str(tmp_path / "fieldform.log"),
    )


@pytest.fixture
def client(config):
    app = create_app(config)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth():
    return {
        "admin": user_headers("admin-1", "admin"),
        "manager": user_headers("manager-1", "manager"),
        "other_manager": user_headers("manager-2", "manager"),
        "agent": user_headers("agent-1", "fieldAgent"),
        "other_agent": user_headers("agent-2", "fieldAgent"),
    }


@pytest.fixture
def created_form(client, auth, pole_fields):
    response = client.post(
        "/api/v1/forms",
        json={
            "title": "Pole Inspection",
            "description": "Monthly pole checks",
            "fields": pole_fields,
            "assigned_to": ["agent-1"],
        },
        headers=auth["manager"],
    )
    assert response.status_code == 201
    return response.json()["form"]
