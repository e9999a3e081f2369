# tests/test_dashboard.py

from __future__ import annotations

from datetime import datetime, timedelta

from taskboard.dashboard import (
    build_dashboard,
    distribution,
    overdue_count,
    priority_levels,
    recent_tasks,
    status_summary,
)

from .factories import fake_task

NOW = datetime(2024, 6, 1, 12, 0, 0)
YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)


def test_user_scope_scenario() -> None:
    tasks = [
        fake_task(id=1, status="pending", due_date=YESTERDAY),
        fake_task(id=2, status="pending", due_date=TOMORROW),
        fake_task(id=3, status="in-progress"),
        fake_task(id=4, status="completed", due_date=YESTERDAY),
        fake_task(id=5, status="completed"),
    ]

    data = build_dashboard(tasks, now=NOW)

    stats = data.statistics()
    assert stats["totalTasks"] == 5
    assert stats["pendingTasks"] == 2
    assert stats["inProgressTasks"] == 1
    assert stats["completedTasks"] == 2
    assert stats["overdueTasks"] == 1
    assert data.distribution.to_dict() == {"pending": 2, "inprogress": 1, "completed": 2, "all": 5}


def test_legacy_labels_are_bucketed() -> None:
    tasks = [
        fake_task(status="In Progress"),
        fake_task(status="Completed"),
        fake_task(status="Pending"),
    ]
    summary = status_summary(tasks)
    assert (summary.pending, summary.in_progress, summary.completed) == (1, 1, 1)


def test_all_counts_unrecognized_statuses() -> None:
    tasks = [fake_task(status="blocked"), fake_task(status="IN PROGRESS"), fake_task(status="")]

    dist = distribution(tasks)

    assert dist.all == 3
    assert dist.unrecognized == 3
    assert dist.to_dict() == {"pending": 0, "inprogress": 0, "completed": 0, "all": 3}
    assert status_summary(tasks).all == 3


def test_priority_levels() -> None:
    tasks = [
        fake_task(priority="High"),
        fake_task(priority="High"),
        fake_task(priority="low"),
        fake_task(priority="Urgent"),
    ]

    levels = priority_levels(tasks)

    assert levels.to_dict() == {"low": 1, "medium": 0, "high": 2}
    assert levels.unrecognized == 1


def test_overdue_ignores_completed_and_undated_tasks() -> None:
    tasks = [
        fake_task(status="pending", due_date=YESTERDAY),
        fake_task(status="In Progress", due_date=YESTERDAY),
        fake_task(status="Completed", due_date=YESTERDAY),
        fake_task(status="pending", due_date=None),
        fake_task(status="pending", due_date=NOW),
    ]
    assert overdue_count(tasks, now=NOW) == 2


def test_recent_tasks_newest_first_with_stable_ties() -> None:
    tasks = [
        fake_task(id=1, created_at=datetime(2024, 1, 1)),
        fake_task(id=2, created_at=datetime(2024, 3, 1)),
        fake_task(id=3, created_at=datetime(2024, 3, 1)),
        fake_task(id=4, created_at=datetime(2024, 2, 1)),
    ]
    assert [t.id for t in recent_tasks(tasks)] == [2, 3, 4, 1]
    assert [t.id for t in recent_tasks(tasks, limit=2)] == [2, 3]
    assert recent_tasks(tasks, limit=0) == []


def test_recent_tasks_default_limit_is_ten() -> None:
    tasks = [fake_task(id=i, created_at=datetime(2024, 1, 1) + timedelta(hours=i)) for i in range(15)]
    assert [t.id for t in recent_tasks(tasks)] == list(range(14, 4, -1))


def test_empty_scope() -> None:
    data = build_dashboard([], now=NOW)
    assert data.statistics() == {
        "totalTasks": 0,
        "pendingTasks": 0,
        "inProgressTasks": 0,
        "completedTasks": 0,
        "overdueTasks": 0,
    }
    assert data.recent == []
