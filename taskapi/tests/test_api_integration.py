from __future__ import annotations

import io
from pathlib import Path

import pytest

from taskapi.app import create_app
from taskapi.infrastructure.db import ENGINE, Base


@pytest.fixture()
def client():
    app = create_app()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    with app.test_client() as test_client:
        yield test_client
    Base.metadata.drop_all(bind=ENGINE)


def _register(client, username: str = "alice") -> dict[str, str]:
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": "secret123"},
    )
    assert response.status_code == 201, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['data']['token']}"}


def _create(client, headers, **fields) -> dict:
    response = client.post("/api/tasks", headers=headers, json=fields)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]["task"]


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json()["database"] == "ok"


def test_register_login_profile_flow(client) -> None:
    _register(client)

    login = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.get_json()['data']['token']}"}

    profile = client.get("/api/auth/profile", headers=headers)
    assert profile.status_code == 200
    user = profile.get_json()["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert "password_hash" not in user

    refreshed = client.post("/api/auth/refresh-token", headers=headers)
    assert refreshed.status_code == 200
    new_headers = {"Authorization": f"Bearer {refreshed.get_json()['data']['token']}"}
    assert client.get("/api/auth/profile", headers=new_headers).status_code == 200
    assert client.get("/api/auth/profile", headers=headers).status_code == 200


def test_duplicate_registration_conflicts(client) -> None:
    _register(client)

    response = client.post(
        "/api/auth/register",
        json={"username": "other", "email": "alice@example.com", "password": "secret123"},
    )

    assert response.status_code == 409


def test_tampered_token_is_rejected(client) -> None:
    headers = _register(client)
    token = headers["Authorization"].removeprefix("Bearer ")
    tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")

    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {tampered}"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"


def test_update_profile_and_login_with_new_password(client) -> None:
    headers = _register(client)

    updated = client.put("/api/auth/profile", headers=headers, json={"password": "brandnew1"})
    assert updated.status_code == 200

    old = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    new = client.post("/api/auth/login", json={"username": "alice", "password": "brandnew1"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_task_crud_and_ownership(client) -> None:
    alice = _register(client, "alice")
    bob = _register(client, "bob")
    task = _create(client, alice, title="Buy milk", due_date="2025-05-01")

    assert task["status"] == "pending"
    assert task["attachments"] == []
    assert task["due_date"] == "2025-05-01"

    assert client.get(f"/api/tasks/{task['id']}", headers=bob).status_code == 404
    assert (
        client.put(f"/api/tasks/{task['id']}", headers=bob, json={"title": "x"}).status_code
        == 404
    )
    assert client.put("/api/tasks/99999", headers=bob, json={"title": "x"}).status_code == 404

    patched = client.patch(
        f"/api/tasks/{task['id']}", headers=alice, json={"status": "completed", "due_date": ""}
    )
    assert patched.status_code == 200
    body = patched.get_json()["data"]["task"]
    assert body["status"] == "completed"
    assert body["due_date"] is None

    assert client.delete(f"/api/tasks/{task['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/tasks/{task['id']}", headers=alice).status_code == 404


def test_page_and_cursor_listing(client) -> None:
    headers = _register(client)
    ids = [_create(client, headers, title=f"Task {i:02d}")["id"] for i in range(15)]

    page1 = client.get("/api/tasks?page=1&limit=10", headers=headers).get_json()["data"]
    page2 = client.get("/api/tasks?page=2&limit=10", headers=headers).get_json()["data"]
    assert len(page1["tasks"]) == 10
    assert page1["pagination"]["hasMore"] is True
    assert len(page2["tasks"]) == 5
    assert page2["pagination"]["hasMore"] is False
    assert page2["pagination"]["totalCount"] == 15

    by_title = client.get(
        "/api/tasks?sortBy=title&sortOrder=asc&limit=3", headers=headers
    ).get_json()["data"]
    assert [t["title"] for t in by_title["tasks"]] == ["Task 00", "Task 01", "Task 02"]

    seen: list[int] = []
    cursor = 0
    while True:
        data = client.get(f"/api/tasks?cursor={cursor}&limit=4", headers=headers).get_json()[
            "data"
        ]
        seen.extend(t["id"] for t in data["tasks"])
        if not data["pagination"]["hasMore"]:
            assert data["pagination"]["nextCursor"] is None
            break
        cursor = data["pagination"]["nextCursor"]
    assert seen == ids


def test_listing_with_out_of_range_values(client) -> None:
    headers = _register(client)
    _create(client, headers, title="Only")

    huge_page = client.get("/api/tasks?page=100000000000000000000", headers=headers)
    assert huge_page.status_code == 200
    assert huge_page.get_json()["data"]["tasks"] == []

    huge_cursor = client.get("/api/tasks?cursor=100000000000000000000", headers=headers)
    assert huge_cursor.status_code == 400
    assert huge_cursor.get_json()["error"] == "invalid_cursor"

    max_cursor = client.get(f"/api/tasks?cursor={2**63 - 1}", headers=headers)
    assert max_cursor.status_code == 200
    assert max_cursor.get_json()["data"]["tasks"] == []

    blank_cursor = client.get("/api/tasks?cursor=", headers=headers)
    assert blank_cursor.status_code == 200
    assert blank_cursor.get_json()["data"]["pagination"]["totalCount"] == 1


def test_stats(client) -> None:
    headers = _register(client)
    for _ in range(3):
        _create(client, headers, title="p")
    for _ in range(2):
        _create(client, headers, title="c", status="completed")

    response = client.get("/api/tasks/stats", headers=headers)

    assert response.get_json()["data"]["stats"] == {"total": 5, "pending": 3, "completed": 2}


def test_attachment_lifecycle(client, upload_dir: Path) -> None:
    headers = _register(client)

    created = client.post(
        "/api/tasks",
        headers=headers,
        data={"title": "Files", "file": (io.BytesIO(b"first"), "first.txt", "text/plain")},
        content_type="multipart/form-data",
    )
    assert created.status_code == 201
    task = created.get_json()["data"]["task"]
    first_path = task["attachments"][0]
    assert Path(first_path).is_file()

    download = client.get(f"/api/tasks/{task['id']}/download", headers=headers)
    assert download.status_code == 200
    assert download.data == b"first"
    download.close()

    replaced = client.put(
        f"/api/tasks/{task['id']}",
        headers=headers,
        data={"attachments": (io.BytesIO(b"second"), "second.txt", "text/plain")},
        content_type="multipart/form-data",
    )
    assert replaced.status_code == 200
    second_path = replaced.get_json()["data"]["task"]["attachments"][0]
    assert not Path(first_path).exists()
    assert Path(second_path).is_file()

    name = Path(second_path).name
    by_name = client.get(f"/api/tasks/{task['id']}/attachments/{name}", headers=headers)
    assert by_name.status_code == 200
    by_name.close()

    assert client.delete(f"/api/tasks/{task['id']}", headers=headers).status_code == 200
    assert not Path(second_path).exists()


def test_delete_account_cascades(client) -> None:
    headers = _register(client)
    created = client.post(
        "/api/tasks",
        headers=headers,
        data={"title": "Files", "file": (io.BytesIO(b"data"), "a.txt", "text/plain")},
        content_type="multipart/form-data",
    )
    path = Path(created.get_json()["data"]["task"]["attachments"][0])

    assert client.delete("/api/auth/account", headers=headers).status_code == 200

    assert not path.exists()
    response = client.get("/api/tasks", headers=headers)
    assert response.status_code == 401
    assert response.get_json()["error"] == "user_not_found"


def test_login_lockout(client) -> None:
    _register(client, "locky")

    for _ in range(3):
        bad = client.post("/api/auth/login", json={"username": "locky", "password": "wrong!!"})
        assert bad.status_code == 401

    locked = client.post("/api/auth/login", json={"username": "locky", "password": "secret123"})
    assert locked.status_code == 429
    assert locked.get_json()["error"] == "account_locked"
