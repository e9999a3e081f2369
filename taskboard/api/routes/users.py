from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard import repository
from taskboard.auth.oauth2 import get_current_user, require_admin
from taskboard.db import get_db
from taskboard.models import User
from taskboard.reports import count_tasks_per_user
from taskboard.schemas.user import UserOut, UserWithCounts

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserWithCounts])
def list_users(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All users with their pending / in-progress / completed task counts."""
    users = repository.list_users(db)
    counters = count_tasks_per_user(users, repository.scoped_tasks(db))
    return [
        UserWithCounts(
            **UserOut.model_validate(user).model_dump(),
            pending_tasks=counters[user.id]["pending_tasks"],
            in_progress_tasks=counters[user.id]["in_progress_tasks"],
            completed_tasks=counters[user.id]["completed_tasks"],
        )
        for user in users
    ]


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    requester: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return repository.get_user(db, user_id)
