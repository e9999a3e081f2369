from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from taskboard import repository
from taskboard.auth.jwt_handler import create_access_token
from taskboard.auth.oauth2 import get_current_user
from taskboard.auth.security import hash_password, verify_password
from taskboard.config import settings
from taskboard.db import get_db
from taskboard.errors import AuthenticationError, ValidationError
from taskboard.logger import get_logger
from taskboard.models import Role, User
from taskboard.schemas.auth import RegisterInput, Token
from taskboard.schemas.user import UserOut

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _token_for(user: User) -> Token:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return Token(
        access_token=token,
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
    )


@router.post("/register", response_model=Token, status_code=201)
def register(body: RegisterInput, db: Session = Depends(get_db)):
    if repository.get_user_by_email(db, body.email):
        raise ValidationError("User already exists")

    role = Role.MEMBER
    if body.admin_invite_token:
        if not settings.admin_invite_token or body.admin_invite_token != settings.admin_invite_token:
            raise ValidationError("Invalid admin invite token")
        role = Role.ADMIN

    user = User(
        name=body.name,
        email=body.email,
        password=hash_password(body.password),
        role=role.value,
        profile_image_url=body.profile_image_url,
    )
    repository.save(db, user, "register user")
    logger.info(f"Registered user {user.id} with role {user.role}")
    return _token_for(user)


@router.post("/token", response_model=Token)
def login(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    user = repository.get_user_by_email(db, form.username)
    if not user or not verify_password(form.password, str(user.password)):
        raise AuthenticationError("Invalid email or password")
    return _token_for(user)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
