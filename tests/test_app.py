from fastapi.testclient import TestClient

from app.main import app


def test_root_and_ping(client):
    assert client.get("/").json() == {"message": "Welcome to TODO API"}
    assert client.get("/ping").json() == {"message": "pong"}


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nothing-here")

    assert res.status_code == 404
    assert res.json() == {"status": "error", "message": "Route not found"}


def test_uncaught_error_is_generic_500(client, alice_headers, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("database exploded at /var/lib/secret")

    monkeypatch.setattr("app.api.todo.task.services.list_tasks", boom)

    with TestClient(app, raise_server_exceptions=False) as c:
        res = c.get("/api/tasks", headers=alice_headers)

    assert res.status_code == 500
    assert res.json() == {"status": "error", "message": "Internal server error"}
    assert "secret" not in res.text
