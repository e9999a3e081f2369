"""
SQLAlchemy models for the taskboard: users and tasks.

Status and priority are stored as plain strings so that rows written by older
clients (e.g. "In Progress", "Completed") survive; the label tables below map
every accepted spelling to its enum member.
"""
import enum
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
    JSON,
    Table,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Role(str, enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"


STATUS_LABELS: Dict[str, TaskStatus] = {
    "pending": TaskStatus.PENDING,
    "Pending": TaskStatus.PENDING,
    "in-progress": TaskStatus.IN_PROGRESS,
    "In Progress": TaskStatus.IN_PROGRESS,
    "completed": TaskStatus.COMPLETED,
    "Completed": TaskStatus.COMPLETED,
}

PRIORITY_LABELS: Dict[str, Priority] = {
    "Low": Priority.LOW,
    "low": Priority.LOW,
    "Medium": Priority.MEDIUM,
    "medium": Priority.MEDIUM,
    "High": Priority.HIGH,
    "high": Priority.HIGH,
}


def parse_status(label) -> Optional[TaskStatus]:
    """Map a stored status label to its enum member, None if unrecognized."""
    if isinstance(label, TaskStatus):
        return label
    return STATUS_LABELS.get(label)


def parse_priority(label) -> Optional[Priority]:
    """Map a stored priority label to its enum member, None if unrecognized."""
    if isinstance(label, Priority):
        return label
    return PRIORITY_LABELS.get(label)


task_assignees = Table(
    "task_assignees",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """
    Model for application users.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.MEMBER.value)
    profile_image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    tasks = relationship("Task", secondary=task_assignees, back_populates="assigned_to")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class Task(Base):
    """
    Model for tasks.

    `todo_checklist` is an ordered list of {"text": str, "completed": bool};
    it is always replaced wholesale so JSON change tracking sees the write.
    """
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False, default=Priority.MEDIUM.value)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    progress = Column(Integer, nullable=False, default=0)
    due_date = Column(DateTime, nullable=True)
    todo_checklist = Column(JSON, nullable=False, default=list)
    attachments = Column(JSON, nullable=False, default=list)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    assigned_to = relationship(
        "User",
        secondary=task_assignees,
        back_populates="tasks",
        order_by="User.id",
    )
    created_by = relationship("User", foreign_keys=[created_by_id])

    __table_args__ = (
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_created_at", "created_at"),
    )

    @property
    def completed_todo_count(self) -> int:
        return sum(1 for item in self.todo_checklist or [] if item.get("completed"))

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title!r}, status={self.status})>"
