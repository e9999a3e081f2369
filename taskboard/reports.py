"""
Report projection: flatten tasks and users into spreadsheet rows, and encode
them as .xlsx workbooks.
"""
from io import BytesIO
from typing import Dict, List, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from taskboard.errors import UpstreamError
from taskboard.logger import get_logger
from taskboard.models import TaskStatus, parse_status

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, key, width)
Column = Tuple[str, str, int]

TASK_COLUMNS: List[Column] = [
    ("Task ID", "id", 20),
    ("Title", "title", 30),
    ("Description", "description", 50),
    ("Priority", "priority", 15),
    ("Status", "status", 20),
    ("Due Date", "due_date", 20),
    ("Assigned To", "assigned_to", 30),
]

USER_COLUMNS: List[Column] = [
    ("Name", "name", 30),
    ("Email", "email", 40),
    ("Total Assigned Tasks", "task_count", 20),
    ("Pending Tasks", "pending_tasks", 20),
    ("In Progress Tasks", "in_progress_tasks", 20),
    ("Completed Tasks", "completed_tasks", 20),
]

UNASSIGNED = "Unassigned"

_STATUS_COUNTER = {
    TaskStatus.PENDING: "pending_tasks",
    TaskStatus.IN_PROGRESS: "in_progress_tasks",
    TaskStatus.COMPLETED: "completed_tasks",
}


def format_assignee(user) -> str:
    """`name (email)`, or whatever identifier is available for a partial record."""
    name = getattr(user, "name", None)
    email = getattr(user, "email", None)
    if name and email:
        return f"{name} ({email})"
    if name or email:
        return name or email
    return str(getattr(user, "id", user))


def task_rows(tasks: Sequence) -> List[Dict]:
    rows = []
    for task in tasks:
        assignees = [format_assignee(user) for user in task.assigned_to or []]
        rows.append({
            "id": task.id,
            "title": task.title,
            "description": task.description,
            "priority": task.priority,
            "status": task.status,
            "due_date": task.due_date.date().isoformat() if task.due_date else "",
            "assigned_to": ", ".join(assignees) if assignees else UNASSIGNED,
        })
    return rows


def count_tasks_per_user(users: Sequence, tasks: Sequence) -> Dict[int, Dict]:
    """
    Per-user counters keyed by user id, in the order of `users`.

    Every (assignee, task) pair counts once; assignees that are not in
    `users` are skipped.
    """
    counters = {
        user.id: {
            "name": user.name,
            "email": user.email,
            "task_count": 0,
            "pending_tasks": 0,
            "in_progress_tasks": 0,
            "completed_tasks": 0,
        }
        for user in users
    }

    for task in tasks:
        bucket = _STATUS_COUNTER.get(parse_status(task.status))
        for assignee in task.assigned_to or []:
            user_id = getattr(assignee, "id", assignee)
            entry = counters.get(user_id)
            if entry is None:
                logger.debug(f"Skipping unknown assignee {user_id} on task {task.id}")
                continue
            entry["task_count"] += 1
            if bucket:
                entry[bucket] += 1

    return counters


def user_rows(users: Sequence, tasks: Sequence) -> List[Dict]:
    return list(count_tasks_per_user(users, tasks).values())


def encode_workbook(sheet_title: str, columns: Sequence[Column], rows: Sequence[Dict]) -> bytes:
    """
    Write rows into a single-sheet workbook and return the .xlsx bytes.

    Raises:
        UpstreamError: if the workbook cannot be produced
    """
    try:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_title

        sheet.append([header for header, _, _ in columns])
        for index, (_, _, width) in enumerate(columns, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width

        for row in rows:
            sheet.append([row.get(key) for _, key, _ in columns])

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
    except Exception as exc:
        logger.exception(f"Failed to encode workbook '{sheet_title}'")
        raise UpstreamError("Error generating report", str(exc)) from exc


def export_tasks_report(tasks: Sequence) -> bytes:
    return encode_workbook("Tasks Report", TASK_COLUMNS, task_rows(tasks))


def export_users_report(users: Sequence, tasks: Sequence) -> bytes:
    return encode_workbook("Users Tasks Report", USER_COLUMNS, user_rows(users, tasks))
