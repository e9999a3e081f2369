"""
Task and user lookups against the database.

Every query error is rolled back, logged and re-raised as UpstreamError, so a
failing read aborts the whole response instead of returning partial data.
"""
from contextlib import contextmanager
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from taskboard.errors import NotFoundError, UpstreamError, ValidationError
from taskboard.logger import get_logger
from taskboard.models import Task, User
from taskboard.status_guard import is_admin

logger = get_logger(__name__)


@contextmanager
def store_errors(db: Session, action: str):
    """Translate SQLAlchemy failures inside the block into UpstreamError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Database error while trying to {action}")
        raise UpstreamError("Server Error", str(exc)) from exc


def _task_query(db: Session):
    return db.query(Task).options(selectinload(Task.assigned_to))


def scoped_tasks(db: Session, assignee: Optional[User] = None) -> List[Task]:
    """
    Tasks in insertion order: every task, or only those assigned to
    `assignee` when one is given.
    """
    with store_errors(db, "load tasks"):
        query = _task_query(db)
        if assignee is not None:
            query = query.filter(Task.assigned_to.any(User.id == assignee.id))
        return query.order_by(Task.id.asc()).all()


def visible_tasks(db: Session, requester: User) -> List[Task]:
    """Admins see every task; members see the tasks assigned to them."""
    return scoped_tasks(db, None if is_admin(requester) else requester)


def get_task(db: Session, task_id: int) -> Task:
    with store_errors(db, f"load task {task_id}"):
        task = _task_query(db).filter(Task.id == task_id).first()
    if task is None:
        raise NotFoundError("Task not found")
    return task


def get_user(db: Session, user_id: int) -> User:
    with store_errors(db, f"load user {user_id}"):
        user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    with store_errors(db, "look up user by email"):
        return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> List[User]:
    with store_errors(db, "list users"):
        return db.query(User).order_by(User.id.asc()).all()


def resolve_assignees(db: Session, user_ids: Iterable[int]) -> List[User]:
    """Load users for `user_ids`; any id without a user is a validation error."""
    wanted = list(dict.fromkeys(user_ids))
    if not wanted:
        return []
    with store_errors(db, "resolve assignees"):
        users = db.query(User).filter(User.id.in_(wanted)).all()
    by_id = {user.id: user for user in users}
    missing = [user_id for user_id in wanted if user_id not in by_id]
    if missing:
        raise ValidationError(f"Unknown assignee id(s): {', '.join(str(m) for m in missing)}")
    return [by_id[user_id] for user_id in wanted]


def save(db: Session, instance, action: str):
    with store_errors(db, action):
        db.add(instance)
        db.commit()
        db.refresh(instance)
    return instance


def delete(db: Session, instance, action: str) -> None:
    with store_errors(db, action):
        db.delete(instance)
        db.commit()
