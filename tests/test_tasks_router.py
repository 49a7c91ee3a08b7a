"""
End-to-end tests for the /tasks API through FastAPI's TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from taskboard.main import create_app
from taskboard.repository import InMemoryTaskRepository, JsonFileTaskRepository


def _create(client, **body):
    body.setdefault("title", "Tarefa de Teste")
    resp = client.post("/tasks", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCrudFlow:
    def test_full_lifecycle(self, client):
        resp = client.post("/tasks", json={"title": "Tarefa de Teste", "description": "Testando o POST"})
        assert resp.status_code == 201
        created = resp.json()
        assert created["id"]
        assert created["title"] == "Tarefa de Teste"
        assert created["description"] == "Testando o POST"
        assert created["status"] == "A Fazer"
        assert created["created_at"]
        task_id = created["id"]

        resp = client.get(f"/tasks/{task_id}")
        assert resp.status_code == 200
        assert resp.json()["id"] == task_id

        resp = client.put(
            f"/tasks/{task_id}",
            json={"title": "Tarefa Atualizada", "description": "Testando o PUT", "status": "Em Progresso"},
        )
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["title"] == "Tarefa Atualizada"
        assert updated["status"] == "Em Progresso"
        assert updated["id"] == task_id
        assert updated["created_at"] == created["created_at"]

        resp = client.delete(f"/tasks/{task_id}")
        assert resp.status_code == 204
        assert resp.content == b""

        resp = client.get(f"/tasks/{task_id}")
        assert resp.status_code == 404
        assert resp.json() == {"error": "task not found"}


class TestCreate:
    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"description": "sem titulo"}])
    def test_missing_title(self, client, body):
        resp = client.post("/tasks", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "title is required"}

    def test_malformed_json(self, client):
        resp = client.post("/tasks", content=b"{\"title\": ", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid payload json"}

    def test_wrong_types(self, client):
        resp = client.post("/tasks", json={"title": ["a"]})
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid payload json"}

    def test_client_id_ignored(self, client):
        created = _create(client, id="mine", created_at="2000-01-01T00:00:00Z")
        assert created["id"] != "mine"
        assert not created["created_at"].startswith("2000")

    def test_explicit_status(self, client):
        assert _create(client, status="Concluído")["status"] == "Concluído"

    def test_unknown_status(self, client):
        resp = client.post("/tasks", json={"title": "x", "status": "Arquivada"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid task status"}

    def test_repository_failure_is_500(self, repo, monkeypatch):
        def boom(payload):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(repo, "create_task", boom)
        with TestClient(create_app(repo)) as c:
            resp = c.post("/tasks", json={"title": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "failed to create task"}


class TestList:
    def test_empty(self, client):
        resp = client.get("/tasks")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_lists_all(self, client):
        ids = {_create(client, title=f"t{i}")["id"] for i in range(3)}
        resp = client.get("/tasks")
        assert resp.status_code == 200
        assert {t["id"] for t in resp.json()} == ids


class TestUpdate:
    def test_unknown_id(self, client):
        resp = client.put("/tasks/missing", json={"title": "x", "status": "A Fazer"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "task not found"}

    def test_missing_title(self, client):
        task_id = _create(client)["id"]
        resp = client.put(f"/tasks/{task_id}", json={"title": "", "status": "A Fazer"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "title is required"}

    @pytest.mark.parametrize("body", [{"title": "x"}, {"title": "x", "status": "feito"}])
    def test_invalid_status_leaves_task_unchanged(self, client, body):
        created = _create(client)
        resp = client.put(f"/tasks/{created['id']}", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid task status"}
        assert client.get(f"/tasks/{created['id']}").json() == created

    def test_malformed_json(self, client):
        task_id = _create(client)["id"]
        resp = client.put(f"/tasks/{task_id}", content=b"nope", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid payload json"}


class TestDelete:
    def test_unknown_id(self, client):
        resp = client.delete("/tasks/missing")
        assert resp.status_code == 404
        assert resp.json() == {"error": "task not found"}


class TestAppWiring:
    def test_independent_apps(self):
        a = TestClient(create_app(InMemoryTaskRepository()))
        b = TestClient(create_app(InMemoryTaskRepository()))
        _create(a)
        assert len(a.get("/tasks").json()) == 1
        assert b.get("/tasks").json() == []

    def test_unknown_route_uses_error_shape(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert "error" in resp.json()

    def test_method_not_allowed_uses_error_shape(self, client):
        resp = client.patch("/tasks/abc", json={})
        assert resp.status_code == 405
        assert "error" in resp.json()

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_metrics_count_operations(self, client):
        _create(client)
        client.get("/tasks/missing")
        body = client.get("/metrics").text
        assert "taskboard_task_operations_total" in body
        assert 'operation="create",outcome="ok"' in body
        assert 'operation="get",outcome="404"' in body

    def test_cors_preflight(self, client):
        resp = client.options(
            "/tasks",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")

    def test_json_backend_persists_through_api(self, tmp_path):
        path = tmp_path / "task.json"
        with TestClient(create_app(JsonFileTaskRepository(path))) as c:
            task_id = _create(c)["id"]
        with TestClient(create_app(JsonFileTaskRepository(path))) as c:
            assert c.get(f"/tasks/{task_id}").status_code == 200
