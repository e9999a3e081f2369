from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from taskboard import repository
from taskboard.auth.oauth2 import require_admin
from taskboard.db import get_db
from taskboard.logger import get_logger
from taskboard.models import User
from taskboard.reports import XLSX_MEDIA_TYPE, export_tasks_report, export_users_report

logger = get_logger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/export/tasks")
def export_tasks(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Download every task as a spreadsheet."""
    content = export_tasks_report(repository.scoped_tasks(db))
    logger.info(f"Tasks report exported by admin {admin.id}")
    return _xlsx_response(content, "task_report.xlsx")


@router.get("/export/users")
def export_users(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Download per-user task counts as a spreadsheet."""
    content = export_users_report(repository.list_users(db), repository.scoped_tasks(db))
    logger.info(f"Users report exported by admin {admin.id}")
    return _xlsx_response(content, "users_tasks_report.xlsx")
