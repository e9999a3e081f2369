from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from taskboard.schemas.base import CamelModel


class RegisterInput(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    profile_image_url: Optional[str] = None
    admin_invite_token: Optional[str] = None


# OAuth2 token response: keys stay snake_case for password-flow clients
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    email: str
    role: str
