from datetime import datetime
from typing import Optional

from taskboard.schemas.base import CamelModel


class UserBrief(CamelModel):
    id: int
    name: str
    email: str
    profile_image_url: Optional[str] = None


class UserOut(UserBrief):
    role: str
    created_at: datetime


class UserWithCounts(UserOut):
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
