"""
Checklist progress calculation.
"""
from typing import Iterable, Mapping, Tuple

from taskboard.models import TaskStatus


def status_for_progress(progress: int) -> TaskStatus:
    if progress >= 100:
        return TaskStatus.COMPLETED
    if progress > 0:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.PENDING


def compute_progress(items: Iterable[Mapping]) -> Tuple[int, TaskStatus]:
    """
    Derive progress and status from checklist items.

    Args:
        items: Checklist entries, each a mapping with a `completed` flag

    Returns:
        (progress percentage 0-100 rounded half up, derived status)
    """
    items = list(items)
    total = len(items)
    if total == 0:
        return 0, TaskStatus.PENDING

    completed = sum(1 for item in items if item.get("completed"))
    # floor(100 * completed / total + 0.5) in integer arithmetic
    progress = (200 * completed + total) // (2 * total)
    return progress, status_for_progress(progress)
