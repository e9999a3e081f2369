"""
Bearer-token dependencies for route handlers.
"""
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from taskboard.auth.jwt_handler import decode_access_token
from taskboard.db import get_db
from taskboard.errors import AuthenticationError, AuthorizationError, NotFoundError
from taskboard.models import User
from taskboard import repository

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise AuthenticationError("Not authorized, no token")

    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Not authorized, token failed")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Not authorized, token failed")

    try:
        return repository.get_user(db, user_id)
    except NotFoundError:
        raise AuthenticationError("Not authorized, user no longer exists")


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise AuthorizationError("Not authorized as an Admin")
    return user
