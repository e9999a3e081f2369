# tests/test_api_users_reports.py

from __future__ import annotations

from io import BytesIO

from openpyxl import load_workbook

from taskboard.reports import XLSX_MEDIA_TYPE

from .factories import seed_task


def sheet_rows(content: bytes) -> list[tuple]:
    return list(load_workbook(BytesIO(content)).active.iter_rows(values_only=True))


def test_list_users_with_task_counts(client, db, users) -> None:
    seed_task(db, users.admin.id, [users.alice.id], status="pending")
    seed_task(db, users.admin.id, [users.alice.id, users.bob.id], status="in-progress")

    res = client.get("/api/users", headers=users.admin.headers)

    assert res.status_code == 200
    by_email = {u["email"]: u for u in res.json()}
    assert by_email["alice@example.com"]["pendingTasks"] == 1
    assert by_email["alice@example.com"]["inProgressTasks"] == 1
    assert by_email["bob@example.com"]["inProgressTasks"] == 1
    assert by_email["bob@example.com"]["completedTasks"] == 0
    assert all("password" not in u for u in res.json())


def test_list_users_is_admin_only(client, users) -> None:
    assert client.get("/api/users", headers=users.alice.headers).status_code == 403


def test_get_user(client, users) -> None:
    res = client.get(f"/api/users/{users.bob.id}", headers=users.alice.headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Bob"

    missing = client.get("/api/users/999", headers=users.alice.headers)
    assert missing.status_code == 404
    assert missing.json() == {"message": "User not found"}


def test_export_tasks_report(client, db, users) -> None:
    seed_task(db, users.admin.id, [users.alice.id, users.bob.id], title="Shared")
    seed_task(db, users.admin.id, [], title="Orphan")

    res = client.get("/api/reports/export/tasks", headers=users.admin.headers)

    assert res.status_code == 200
    assert res.headers["content-type"] == XLSX_MEDIA_TYPE
    assert res.headers["content-disposition"] == "attachment; filename=task_report.xlsx"
    rows = sheet_rows(res.content)
    assert rows[0][:2] == ("Task ID", "Title")
    assert rows[1][6] == "Alice (alice@example.com), Bob (bob@example.com)"
    assert rows[2][6] == "Unassigned"


def test_export_users_report(client, db, users) -> None:
    seed_task(db, users.admin.id, [users.alice.id, users.bob.id], status="Completed")

    res = client.get("/api/reports/export/users", headers=users.admin.headers)

    assert res.status_code == 200
    assert res.headers["content-disposition"] == "attachment; filename=users_tasks_report.xlsx"
    rows = sheet_rows(res.content)
    assert rows[0] == (
        "Name",
        "Email",
        "Total Assigned Tasks",
        "Pending Tasks",
        "In Progress Tasks",
        "Completed Tasks",
    )
    assert ("Alice", "alice@example.com", 1, 0, 0, 1) in rows
    assert ("Bob", "bob@example.com", 1, 0, 0, 1) in rows
    assert ("Ada Admin", "ada@example.com", 0, 0, 0, 0) in rows


def test_reports_are_admin_only(client, users) -> None:
    assert client.get("/api/reports/export/tasks", headers=users.bob.headers).status_code == 403
    assert client.get("/api/reports/export/users", headers=users.bob.headers).status_code == 403


def test_health(client) -> None:
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "services": {"database": True}}
