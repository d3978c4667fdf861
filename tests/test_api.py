import pytest
from bson import ObjectId

from taskboard.errors import InternalError


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "data": {"status": "ok", "service": "Taskboard API"}}


def test_walkthrough(client):
    resp = client.post("/api/auth/signup", json={"email": "a@x.com", "password": "secret1", "name": "Ann"})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["user"]["email"] == "a@x.com"
    assert "password" not in body["data"]["user"]
    headers = {"Authorization": f"Bearer {body['data']['token']}"}

    resp = client.post("/api/auth/signup", json={"email": "a@x.com", "password": "other2", "name": "Bob"})
    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "email already exists"}

    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "invalid email or password"}

    resp = client.post("/api/tasks", json={"title": ""}, headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "title is required"

    resp = client.post("/api/tasks", json={"title": "Buy milk", "priority": "low"}, headers=headers)
    assert resp.status_code == 201
    task = resp.get_json()["data"]
    assert task["status"] == "pending"
    assert task["priority"] == "low"

    resp = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["message"] == "Task deleted successfully"

    resp = client.get("/api/tasks", headers=headers)
    assert resp.status_code == 200
    assert task["id"] not in [t["id"] for t in resp.get_json()["data"]]


def test_login_failures_share_status_and_message(client, register):
    register(email="a@x.com")

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope123"})
    unknown_email = client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json()


def test_login_returns_user_and_token(client, register):
    account = register(email="a@x.com")

    resp = client.post("/api/auth/login", json={"email": "A@X.com", "password": "secret1"})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["user"] == account["user"]
    assert data["token"]


def test_signup_reports_missing_fields(client):
    resp = client.post("/api/auth/signup", json={"email": "a@x.com"})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "Missing required fields: password, name"}


def test_login_requires_credentials(client):
    resp = client.post("/api/auth/login", json={})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_profile(client, register):
    account = register()

    resp = client.get("/api/auth/profile", headers=account["headers"])

    assert resp.status_code == 200
    assert resp.get_json()["data"]["user"] == account["user"]


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-token"}, {"Authorization": "Token abc"}],
)
def test_profile_without_valid_proof_is_401(client, headers):
    resp = client.get("/api/auth/profile", headers=headers)

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "Not authenticated"}


def test_logout_in_token_mode_is_stateless(client, register):
    account = register()

    resp = client.post("/api/auth/logout", headers=account["headers"])

    assert resp.status_code == 200
    assert resp.get_json()["data"]["message"] == "Logged out successfully"
    # Tokens cannot be revoked server side; the client discards them
    assert client.get("/api/auth/profile", headers=account["headers"]).status_code == 200


def test_logout_without_proof_still_succeeds(client):
    assert client.post("/api/auth/logout").status_code == 200


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/tasks"),
        ("post", "/api/tasks"),
        ("get", "/api/tasks/{id}"),
        ("put", "/api/tasks/{id}"),
        ("delete", "/api/tasks/{id}"),
    ],
)
def test_task_routes_require_proof(client, method, path):
    resp = getattr(client, method)(path.format(id=ObjectId()), json={"title": "x"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_unauthenticated_caller_learns_nothing_about_existing_tasks(client, register):
    ann = register(email="ann@x.com")
    task = client.post("/api/tasks", json={"title": "secret plan"}, headers=ann["headers"]).get_json()["data"]

    existing = client.get(f"/api/tasks/{task['id']}")
    bogus = client.get(f"/api/tasks/{ObjectId()}")

    assert existing.status_code == bogus.status_code == 401
    assert existing.get_json() == bogus.get_json()


@pytest.mark.parametrize(
    "method,body",
    [("get", None), ("put", {"title": "hijacked"}), ("delete", None)],
)
def test_other_user_gets_403_and_bogus_id_gets_404(client, register, method, body):
    ann = register(email="ann@x.com")
    bob = register(email="bob@x.com", name="Bob")
    task = client.post("/api/tasks", json={"title": "Ann's task"}, headers=ann["headers"]).get_json()["data"]

    forbidden = getattr(client, method)(f"/api/tasks/{task['id']}", json=body, headers=bob["headers"])
    missing = getattr(client, method)(f"/api/tasks/{ObjectId()}", json=body, headers=bob["headers"])
    garbage = getattr(client, method)("/api/tasks/not-an-id", json=body, headers=bob["headers"])

    assert forbidden.status_code == 403
    assert "Ann's task" not in forbidden.get_data(as_text=True)
    assert missing.status_code == 404
    assert garbage.status_code == 404
    assert missing.get_json() == {"success": False, "error": "Task not found"}

    still_there = client.get(f"/api/tasks/{task['id']}", headers=ann["headers"]).get_json()["data"]
    assert still_there == task


def test_task_crud_over_http(client, register):
    ann = register()
    headers = ann["headers"]

    created = client.post(
        "/api/tasks",
        json={"title": " Write report ", "description": "Q3", "priority": "high", "dueDate": "2030-05-01"},
        headers=headers,
    )
    assert created.status_code == 201
    task = created.get_json()["data"]
    assert task["title"] == "Write report"
    assert task["userId"] == ann["user"]["id"]
    assert task["dueDate"] == "2030-05-01T00:00:00+00:00"

    fetched = client.get(f"/api/tasks/{task['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.get_json()["data"] == task

    updated = client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=headers)
    assert updated.status_code == 200
    assert updated.get_json()["data"]["status"] == "completed"
    assert updated.get_json()["data"]["title"] == "Write report"

    completed = client.get("/api/tasks?status=completed", headers=headers).get_json()["data"]
    pending = client.get("/api/tasks?status=pending", headers=headers).get_json()["data"]
    assert [t["id"] for t in completed] == [task["id"]]
    assert pending == []


def test_update_with_empty_title_is_400(client, register):
    headers = register()["headers"]
    task = client.post("/api/tasks", json={"title": "Buy milk"}, headers=headers).get_json()["data"]

    resp = client.put(f"/api/tasks/{task['id']}", json={"title": ""}, headers=headers)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "title is required"}


def test_invalid_status_filter_is_400(client, register):
    headers = register()["headers"]

    resp = client.get("/api/tasks?status=archived", headers=headers)

    assert resp.status_code == 400
    assert "status must be one of" in resp.get_json()["error"]


def test_non_object_body_is_400(client, register):
    headers = register()["headers"]

    resp = client.post("/api/tasks", json=["not", "an", "object"], headers=headers)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"


def test_unknown_route_uses_the_envelope(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Not Found"}


def test_unexpected_errors_become_500(app, client, register, monkeypatch):
    headers = register()["headers"]

    def explode(*args, **kwargs):
        raise RuntimeError("database on fire")

    monkeypatch.setattr(app.extensions["taskboard"].tasks, "list", explode)
    resp = client.get("/api/tasks", headers=headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal Server Error"}


@pytest.mark.parametrize("due_date", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00"])
def test_due_date_out_of_range_after_utc_shift_is_400(client, register, due_date):
    headers = register()["headers"]
    task = client.post("/api/tasks", json={"title": "Buy milk"}, headers=headers).get_json()["data"]

    created = client.post("/api/tasks", json={"title": "x", "dueDate": due_date}, headers=headers)
    updated = client.put(f"/api/tasks/{task['id']}", json={"dueDate": due_date}, headers=headers)

    for resp in (created, updated):
        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "error": "dueDate must be an ISO 8601 date string"}


def test_collection_routes_accept_trailing_slash(client, register):
    headers = register()["headers"]

    created = client.post("/api/tasks/", json={"title": "Buy milk"}, headers=headers)
    listed = client.get("/api/tasks/", headers=headers)

    assert created.status_code == 201
    assert listed.status_code == 200
    assert [t["id"] for t in listed.get_json()["data"]] == [created.get_json()["data"]["id"]]
    assert client.get("/api/tasks", headers=headers).status_code == 200


def test_internal_errors_use_the_envelope(app, client, register, monkeypatch):
    headers = register()["headers"]

    def fail(*args, **kwargs):
        raise InternalError()

    monkeypatch.setattr(app.extensions["taskboard"].tasks, "list", fail)
    resp = client.get("/api/tasks", headers=headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal Server Error"}
