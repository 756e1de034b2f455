"""Tests for the projects blueprint, the recap routes and app-level handlers."""

import pytest


def _create_project(client, name):
    resp = client.post("/projects", json={"name": name})
    assert resp.status_code == 201
    return resp.get_json()


class TestProjectsApi:
    def test_list_empty(self, client):
        resp = client.get("/projects")
        assert resp.status_code == 200
        assert resp.get_json() == []

    def test_create_and_list(self, client):
        created = _create_project(client, "  Apollo ")
        assert created["name"] == "Apollo"
        _create_project(client, "borealis")

        names = [p["name"] for p in client.get("/projects").get_json()]
        assert names == ["Apollo", "borealis"]

    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}, {"name": 3}])
    def test_create_invalid(self, client, body):
        resp = client.post("/projects", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_create_without_json(self, client):
        resp = client.post("/projects", data="name=Apollo")
        assert resp.status_code == 400

    def test_rename(self, client):
        project = _create_project(client, "Apollo")
        resp = client.put(f"/projects/{project['id']}", json={"name": "Artemis"})
        assert resp.status_code == 200
        assert resp.get_json() == {"id": project["id"], "name": "Artemis"}

    def test_rename_unknown(self, client):
        resp = client.put("/projects/999", json={"name": "Artemis"})
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Project not found"

    def test_delete(self, client):
        project = _create_project(client, "Apollo")
        resp = client.delete(f"/projects/{project['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Project deleted successfully"
        assert client.get("/projects").get_json() == []

    def test_delete_unknown(self, client):
        resp = client.delete("/projects/999")
        assert resp.status_code == 404

    def test_delete_keeps_assignments(self, client):
        project = _create_project(client, "Apollo")
        client.post("/collaborators", json={"name": "Alice", "projects": [project["id"]]})
        client.delete(f"/projects/{project['id']}")

        collaborators = client.get("/collaborators").get_json()
        assert len(collaborators) == 1
        assert collaborators[0]["projects"] == [
            {"projectId": project["id"], "name": "Unknown project", "daysWorked": 0}
        ]


class TestRecapApi:
    def _seed(self, client):
        apollo = _create_project(client, "Apollo")
        borealis = _create_project(client, "Borealis")
        alice = client.post(
            "/collaborators",
            json={"name": "Alice", "projects": [apollo["id"], borealis["id"]]},
        ).get_json()
        client.put(f"/api/tjm/{alice['id']}/update-tjm", json={"tjm": 500})
        client.put(
            f"/collaborators/{alice['id']}/add-days",
            json={"projectId": apollo["id"], "days": 2},
        )
        client.put(
            f"/collaborators/{alice['id']}/add-days",
            json={"projectId": borealis["id"], "days": 1},
        )
        return apollo, borealis

    def test_recap(self, client):
        self._seed(client)
        recap = client.get("/projects/recap").get_json()
        assert len(recap) == 1
        month = recap[0]
        assert (month["month"], month["year"]) == ("03", 2025)
        assert [(p["name"], p["totalCost"]) for p in month["projects"]] == [
            ("Apollo", 1000),
            ("Borealis", 500),
        ]
        assert month["totalMonthCost"] == 1500

    def test_recap_alias(self, client):
        self._seed(client)
        assert client.get("/recap").get_json() == client.get("/projects/recap").get_json()

    def test_recap_year_filter(self, client):
        self._seed(client)
        assert client.get("/recap?year=2024").get_json() == []
        assert len(client.get("/recap?year=2025").get_json()) == 1

    def test_recap_bad_year(self, client):
        resp = client.get("/recap?year=soon")
        assert resp.status_code == 400

    def test_recap_empty(self, client):
        assert client.get("/recap").get_json() == []


class TestAppHandlers:
    def test_health(self, client):
        body = client.get("/health").get_json()
        assert body["status"] == "healthy"
        assert body["service"] == "TJM Tracker"
        assert body["version"] == "0.1.0"

    def test_unknown_route_is_json(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_method_not_allowed(self, client):
        resp = client.patch("/projects")
        assert resp.status_code == 405
        assert "error" in resp.get_json()

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
