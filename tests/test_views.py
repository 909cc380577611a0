# tests/test_views.py

from __future__ import annotations

from fastapi.testclient import TestClient

from tasktracker.db import TaskStore
from tasktracker.models import TaskStatus


def test_index_page(client: TestClient) -> None:
    resp = client.get("/app")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert 'id="add-form"' in resp.text
    assert 'id="error-banner"' in resp.text
    assert "/static/app.js" in resp.text


def test_static_assets_served(client: TestClient) -> None:
    assert client.get("/static/app.js").status_code == 200
    assert client.get("/static/style.css").status_code == 200


def test_empty_list_fragment(client: TestClient) -> None:
    resp = client.get("/items/htmx")
    assert resp.status_code == 200
    assert "empty-message" in resp.text


def test_add_from_form(client: TestClient, store: TaskStore) -> None:
    resp = client.post(
        "/items/htmx",
        data={"name": "Buy bread", "description": "rye", "due_date": ""},
    )
    assert resp.status_code == 200
    assert "Buy bread" in resp.text
    assert 'class="task-item"' in resp.text

    [record] = store.list_tasks()
    assert record.name == "Buy bread"
    assert record.due_date is None
    assert record.status is TaskStatus.PENDING


def test_add_from_form_requires_fields(client: TestClient, store: TaskStore) -> None:
    resp = client.post("/items/htmx", data={"name": "", "description": "x"})
    assert resp.status_code == 400
    assert store.list_tasks() == []


def test_edit_from_form(client: TestClient, store: TaskStore) -> None:
    task_id = store.create_task("Draft", "first", None)

    resp = client.put(
        f"/items/{task_id}/htmx",
        data={"name": "Final", "description": "second", "completed": "true", "due_date": "2025-06-01"},
    )
    assert resp.status_code == 200
    assert "Final" in resp.text
    assert "task-item completed" in resp.text
    assert 'value="2025-06-01"' in resp.text

    record = store.get_task(task_id)
    assert record.status is TaskStatus.DONE
    assert record.due_date.isoformat() == "2025-06-01"


def test_toggle_payload_flips_completion(client: TestClient, store: TaskStore) -> None:
    task_id = store.create_task("Flip", "me", None)

    fragment = client.get("/items/htmx").text
    assert "&quot;completed&quot;: true" in fragment

    resp = client.put(
        f"/items/{task_id}/htmx",
        data={"name": "Flip", "description": "me", "completed": "true", "due_date": ""},
    )
    assert "&quot;completed&quot;: false" in resp.text
    assert store.get_task(task_id).status is TaskStatus.DONE


def test_delete_from_view(client: TestClient, store: TaskStore) -> None:
    task_id = store.create_task("Gone", "soon", None)

    resp = client.delete(f"/items/{task_id}/htmx")
    assert resp.status_code == 200
    assert resp.text == ""
    assert store.get_task(task_id) is None

    resp = client.delete(f"/items/{task_id}/htmx")
    assert resp.status_code == 404
    assert resp.json()["error"]


def test_fragments_escape_user_text(client: TestClient, store: TaskStore) -> None:
    store.create_task("<script>alert(1)</script>", "a & b", None)

    resp = client.get("/items/htmx")
    assert "<script>alert(1)</script>" not in resp.text
    assert "&lt;script&gt;" in resp.text
    assert "a &amp; b" in resp.text


def test_form_update_requires_completed(client: TestClient, store: TaskStore) -> None:
    task_id = store.create_task("Finished", "already", None)
    store.update_task(task_id, "Finished", "already", TaskStatus.DONE, None)

    resp = client.put(f"/items/{task_id}/htmx", data={"name": "Finished", "description": "already"})
    assert resp.status_code == 400
    assert "completed" in resp.json()["error"]
    assert store.get_task(task_id).status is TaskStatus.DONE


def test_form_update_out_of_range_id_is_not_found(client: TestClient) -> None:
    resp = client.put(
        f"/items/{2**64}/htmx",
        data={"name": "a", "description": "b", "completed": "false"},
    )
    assert resp.status_code == 404
    assert client.delete(f"/items/{2**64}/htmx").status_code == 404


def test_list_fragment_is_empty_again_after_last_delete(client: TestClient, store: TaskStore) -> None:
    task_id = store.create_task("Only one", "left", None)
    assert client.delete(f"/items/{task_id}/htmx").status_code == 200

    assert "empty-message" in client.get("/items/htmx").text


def test_page_shows_task_count(client: TestClient) -> None:
    page = client.get("/app").text
    assert 'id="task-count"' in page

    script = client.get("/static/app.js").text
    assert "task-count" in script
    assert "empty-message" in script
    assert "input.toggle" in script
