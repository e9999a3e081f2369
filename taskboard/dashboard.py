"""
Dashboard aggregation over a scoped task list.

Every function here is pure: the caller loads the scope (all tasks for an
admin, the requester's assigned tasks otherwise) and passes it in. Labels are
bucketed through the explicit tables in `taskboard.models`; anything they do
not recognize lands in `unrecognized` but is still counted in `all`.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from taskboard.models import (
    Priority,
    TaskStatus,
    parse_priority,
    parse_status,
    utcnow,
)

RECENT_TASKS_LIMIT = 10


@dataclass(frozen=True)
class StatusSummary:
    all: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "all": self.all,
            "pendingTasks": self.pending,
            "inProgressTasks": self.in_progress,
            "completedTasks": self.completed,
        }


@dataclass(frozen=True)
class StatusDistribution:
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    unrecognized: int = 0
    all: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "pending": self.pending,
            "inprogress": self.in_progress,
            "completed": self.completed,
            "all": self.all,
        }


@dataclass(frozen=True)
class PriorityLevels:
    low: int = 0
    medium: int = 0
    high: int = 0
    unrecognized: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"low": self.low, "medium": self.medium, "high": self.high}


@dataclass(frozen=True)
class DashboardData:
    summary: StatusSummary
    distribution: StatusDistribution
    priority_levels: PriorityLevels
    overdue: int
    recent: List = field(default_factory=list)

    def statistics(self) -> Dict[str, int]:
        return {
            "totalTasks": self.summary.all,
            "pendingTasks": self.summary.pending,
            "inProgressTasks": self.summary.in_progress,
            "completedTasks": self.summary.completed,
            "overdueTasks": self.overdue,
        }


def _count_statuses(tasks: Sequence) -> Dict[Optional[TaskStatus], int]:
    counts: Dict[Optional[TaskStatus], int] = {
        TaskStatus.PENDING: 0,
        TaskStatus.IN_PROGRESS: 0,
        TaskStatus.COMPLETED: 0,
        None: 0,
    }
    for task in tasks:
        counts[parse_status(task.status)] += 1
    return counts


def status_summary(tasks: Sequence) -> StatusSummary:
    counts = _count_statuses(tasks)
    return StatusSummary(
        all=len(tasks),
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
    )


def distribution(tasks: Sequence) -> StatusDistribution:
    counts = _count_statuses(tasks)
    return StatusDistribution(
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
        unrecognized=counts[None],
        all=len(tasks),
    )


def priority_levels(tasks: Sequence) -> PriorityLevels:
    counts: Dict[Optional[Priority], int] = {
        Priority.LOW: 0,
        Priority.MEDIUM: 0,
        Priority.HIGH: 0,
        None: 0,
    }
    for task in tasks:
        counts[parse_priority(task.priority)] += 1
    return PriorityLevels(
        low=counts[Priority.LOW],
        medium=counts[Priority.MEDIUM],
        high=counts[Priority.HIGH],
        unrecognized=counts[None],
    )


def is_overdue(task, now: datetime) -> bool:
    return (
        task.due_date is not None
        and task.due_date < now
        and parse_status(task.status) is not TaskStatus.COMPLETED
    )


def overdue_count(tasks: Sequence, now: Optional[datetime] = None) -> int:
    now = now or utcnow()
    return sum(1 for task in tasks if is_overdue(task, now))


def recent_tasks(tasks: Sequence, limit: int = RECENT_TASKS_LIMIT) -> List:
    """
    Newest tasks first. `tasks` must be in insertion order; the sort is
    stable so equal creation times keep that order.
    """
    if limit <= 0:
        return []
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)[:limit]


def build_dashboard(
    tasks: Sequence,
    now: Optional[datetime] = None,
    limit: int = RECENT_TASKS_LIMIT,
) -> DashboardData:
    tasks = list(tasks)
    return DashboardData(
        summary=status_summary(tasks),
        distribution=distribution(tasks),
        priority_levels=priority_levels(tasks),
        overdue=overdue_count(tasks, now),
        recent=recent_tasks(tasks, limit),
    )
