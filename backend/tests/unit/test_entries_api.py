from fastapi.testclient import TestClient

from backend.src.api.main import app
from backend.src.api.middleware import get_auth_context
from backend.src.services import config as config_module


def test_create_without_title_is_displayed_untitled(client, fake_db) -> None:
    response = client.post("/api/entries", json={"content": "hello"})

    assert response.status_code == 201
    data = response.json()
    assert data["entry"]["display_title"] == "Untitled"
    assert data["entry"]["title"] == ""
    assert data["notification"] == {
        "title": "Entry Added",
        "description": "Your knowledge vault has been updated.",
        "variant": "default",
    }
    assert data["data_version"] == 1

    listing = client.get("/api/entries").json()
    assert listing["entries"][0]["display_title"] == "Untitled"
    assert listing["pagination"]["total_count"] == 1


def test_create_registers_tags(client, fake_db) -> None:
    client.post("/api/entries", json={"content": "x", "tags": ["AI", "WORK"]})
    client.post("/api/entries", json={"content": "y", "tags": ["AI"]})

    names = sorted(row["name"] for row in fake_db.tables["tags"])
    assert names == ["AI", "WORK"]


def test_create_rejects_empty_content(client, fake_db) -> None:
    response = client.post("/api/entries", json={"content": "  "})

    assert response.status_code == 400
    assert response.json()["message"] == "Content cannot be empty."
    assert fake_db.tables.get("entries", []) == []


def test_create_remote_failure_is_destructive_notification(client, fake_db) -> None:
    fake_db.fail("entries", "insert", message="permission denied")

    response = client.post("/api/entries", json={"content": "hello"})

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "remote_request_failed"
    assert body["message"] == "permission denied"
    assert body["detail"]["title"] == "An Error Occurred"
    assert body["detail"]["variant"] == "destructive"


def test_share_target_uses_url_as_content(client) -> None:
    response = client.post(
        "/api/entries/share",
        json={"title": "Docs", "url": "https://example.com/docs"},
    )

    assert response.status_code == 201
    entry = response.json()["entry"]
    assert entry["content"] == "https://example.com/docs"
    assert entry["type"] == "LINK"


def test_share_target_without_content(client) -> None:
    response = client.post("/api/entries/share", json={"title": "Only a title"})

    assert response.status_code == 400
    assert response.json()["message"] == "Content cannot be empty."


def test_pagination_navigation(client, fake_db) -> None:
    fake_db.seed_entries(30)

    first = client.get("/api/entries").json()
    assert first["mode"] == "page"
    assert len(first["entries"]) == 24
    assert first["pagination"]["total_pages"] == 2

    second = client.post("/api/entries/next").json()
    assert second["pagination"]["current_page"] == 2
    assert len(second["entries"]) == 6

    # Already on the last page
    assert client.post("/api/entries/next").json()["pagination"]["current_page"] == 2
    assert client.post("/api/entries/prev").json()["pagination"]["current_page"] == 1


def test_go_to_page_out_of_range_is_ignored(client, fake_db) -> None:
    fake_db.seed_entries(30)

    assert client.get("/api/entries", params={"page": 2}).json()["pagination"]["current_page"] == 2
    assert client.get("/api/entries", params={"page": 9}).json()["pagination"]["current_page"] == 2


def test_refresh_reloads_after_external_change(client, fake_db) -> None:
    fake_db.seed_entries(2)
    assert client.get("/api/entries").json()["pagination"]["total_count"] == 2

    fake_db.seed_entries(1)
    assert client.get("/api/entries").json()["pagination"]["total_count"] == 2
    assert client.get("/api/entries", params={"refresh": True}).json()["pagination"]["total_count"] == 3


def test_list_failure_without_entries(client, fake_db) -> None:
    fake_db.fail("entries", "select", message="timeout")

    response = client.get("/api/entries")

    assert response.status_code == 502
    assert response.json()["message"] == "timeout"


def test_get_update_entry(client, fake_db) -> None:
    (row,) = fake_db.seed_entries(1)

    response = client.put(
        f"/api/entries/{row['id']}",
        json={"title": "مرحبا", "content": "نص", "tags": ["LIFE"]},
    )
    assert response.status_code == 200
    assert response.json()["notification"]["title"] == "Update Successful"

    detail = client.get(f"/api/entries/{row['id']}").json()
    assert detail["title"] == "مرحبا"
    assert detail["direction"] == "rtl"
    assert detail["tag_views"][0]["name"] == "LIFE"


def test_get_missing_entry(client) -> None:
    response = client.get("/api/entries/404")

    assert response.status_code == 404
    assert response.json()["detail"]["title"] == "Entry Not Found"


def test_delete_requires_confirmation(client, fake_db) -> None:
    (row,) = fake_db.seed_entries(1)

    response = client.delete(f"/api/entries/{row['id']}")

    assert response.status_code == 428
    body = response.json()
    assert body["detail"]["title"] == "Are you absolutely sure?"
    assert body["message"].startswith("This action cannot be undone.")
    assert len(fake_db.tables["entries"]) == 1


def test_delete_decreases_count(client, fake_db) -> None:
    rows = fake_db.seed_entries(3)
    before = client.get("/api/entries").json()["pagination"]["total_count"]

    response = client.delete(f"/api/entries/{rows[0]['id']}", params={"confirm": True})

    assert response.status_code == 200
    assert response.json()["notification"]["title"] == "Entry Deleted"
    after = client.get("/api/entries").json()["pagination"]["total_count"]
    assert after == before - 1


def test_delete_failure_title(client, fake_db) -> None:
    fake_db.seed_entries(1)
    fake_db.fail("entries", "delete")

    response = client.delete("/api/entries/1", params={"confirm": True})

    assert response.status_code == 502
    assert response.json()["detail"]["title"] == "Deletion Failed"


def test_missing_backend_configuration(auth_context, monkeypatch) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    config_module.reload_config()
    app.dependency_overrides = {get_auth_context: lambda: auth_context}
    try:
        response = TestClient(app).get("/api/entries")
    finally:
        app.dependency_overrides = {}

    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "configuration_error"
    assert body["message"] == "Please configure Supabase in settings first."
