# app/auth/schemas.py
from pydantic import BaseModel, Field

from app.auth.models import UserRole


class Actor(BaseModel):
    """The authenticated user behind the current request."""

    id: int
    role: UserRole | str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN_GLOBAL


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginOut(BaseModel):
    id: int
    name: str
    role: str


class SessionUserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str
    photo_url: str | None = None

    model_config = {"from_attributes": True}


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=1)
    photo_url: str | None = None
