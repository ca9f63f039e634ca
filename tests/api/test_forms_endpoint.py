import pytest
from fastapi.testclient import TestClient


class TestGenerate:
    def test_generate_mock_schema(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms/generate",
            json={"prompt": "Inspect electrical poles"},
            headers=auth["manager"],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Form schema generated successfully"
        assert data["schema"]["title"] == "Electrical Pole Inspection Form"
        voltage = next(f for f in data["schema"]["fields"] if f["name"] == "voltage")
        assert voltage["notifyIf"] == ">400"

    def test_generate_with_title(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms/generate",
            json={"prompt": "site walk", "title": "Site Walk"},
            headers=auth["admin"],
        )
        assert response.json()["schema"]["title"] == "Site Walk"

    def test_blank_prompt(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms/generate", json={"prompt": "   "}, headers=auth["manager"]
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Prompt is required and must be a non-empty string"

    def test_field_agent_cannot_generate(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms/generate", json={"prompt": "poles"}, headers=auth["agent"]
        )
        assert response.status_code == 403


class TestCreate:
    def test_create_form(self, created_form):
        assert created_form["title"] == "Pole Inspection"
        assert created_form["created_by"] == "manager-1"
        assert created_form["assigned_to"] == ["agent-1"]
        assert created_form["is_active"] is True
        assert [f["name"] for f in created_form["fields"]] == ["pole_id", "voltage", "condition"]

    def test_invalid_fields(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms",
            json={"title": "Broken", "fields": [{"label": "No name"}]},
            headers=auth["manager"],
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid schema"

    def test_duplicate_field_names(self, client: TestClient, auth):
        response = client.post(
            "/api/v1/forms",
            json={"title": "Dup", "fields": [{"name": "a"}, {"name": "a"}]},
            headers=auth["manager"],
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Field names must be unique: a"

    def test_field_agent_cannot_create(self, client: TestClient, auth, pole_fields):
        response = client.post(
            "/api/v1/forms",
            json={"title": "Nope", "fields": pole_fields},
            headers=auth["agent"],
        )
        assert response.status_code == 403


class TestRead:
    def test_list_by_role(self, client: TestClient, auth, created_form):
        for role, count in [
            ("admin", 1),
            ("manager", 1),
            ("agent", 1),
            ("other_manager", 0),
            ("other_agent", 0),
        ]:
            data = client.get("/api/v1/forms", headers=auth[role]).json()
            assert data["count"] == count, role
            assert len(data["forms"]) == count

    def test_get_form(self, client: TestClient, auth, created_form):
        response = client.get(f"/api/v1/forms/{created_form['id']}", headers=auth["agent"])
        assert response.status_code == 200
        assert response.json()["form"]["id"] == created_form["id"]

    def test_unassigned_agent_cannot_read(self, client: TestClient, auth, created_form):
        response = client.get(
            f"/api/v1/forms/{created_form['id']}", headers=auth["other_agent"]
        )
        assert response.status_code == 403

    def test_not_found(self, client: TestClient, auth):
        response = client.get("/api/v1/forms/9999", headers=auth["admin"])
        assert response.status_code == 404
        assert response.json()["detail"] == "Form not found"


class TestModify:
    def test_update_form(self, client: TestClient, auth, created_form):
        response = client.put(
            f"/api/v1/forms/{created_form['id']}",
            json={"title": "Pole Inspection v2", "is_active": False},
            headers=auth["manager"],
        )

        assert response.status_code == 200
        form = response.json()["form"]
        assert form["title"] == "Pole Inspection v2"
        assert form["is_active"] is False
        assert form["description"] == "Monthly pole checks"

    def test_update_fields(self, client: TestClient, auth, created_form):
        response = client.put(
            f"/api/v1/forms/{created_form['id']}",
            json={"fields": [{"name": "notes", "type": "textarea"}]},
            headers=auth["manager"],
        )
        assert [f["name"] for f in response.json()["form"]["fields"]] == ["notes"]

    def test_other_manager_cannot_update(self, client: TestClient, auth, created_form):
        response = client.put(
            f"/api/v1/forms/{created_form['id']}",
            json={"title": "Mine now"},
            headers=auth["other_manager"],
        )
        assert response.status_code == 403

    @pytest.mark.parametrize("role, status", [("other_manager", 403), ("agent", 403), ("manager", 400)])
    def test_malformed_fields_checked_after_ownership(
        self, client: TestClient, auth, created_form, role, status
    ):
        response = client.put(
            f"/api/v1/forms/{created_form['id']}",
            json={"fields": [{"label": "No name"}]},
            headers=auth[role],
        )

        assert response.status_code == status
        if status == 403:
            assert response.json()["detail"] == "Access denied"
        else:
            assert response.json()["detail"] == "Invalid schema"

    def test_assign(self, client: TestClient, auth, created_form):
        response = client.put(
            f"/api/v1/forms/{created_form['id']}/assign",
            json={"agent_ids": ["agent-2", "agent-3"]},
            headers=auth["manager"],
        )

        assert response.status_code == 200
        assert response.json()["form"]["assigned_to"] == ["agent-2", "agent-3"]
        assert client.get("/api/v1/forms", headers=auth["agent"]).json()["count"] == 0
        assert client.get("/api/v1/forms", headers=auth["other_agent"]).json()["count"] == 1

    def test_delete(self, client: TestClient, auth, created_form):
        url = f"/api/v1/forms/{created_form['id']}"

        assert client.delete(url, headers=auth["agent"]).status_code == 403
        response = client.delete(url, headers=auth["manager"])
        assert response.status_code == 200
        assert response.json()["message"] == "Form deleted successfully"
        assert client.get(url, headers=auth["admin"]).status_code == 404
