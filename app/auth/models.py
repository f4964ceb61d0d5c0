# app/auth/models.py
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from app.core.database import Base


class UserRole(str, enum.Enum):
    ADMIN_GLOBAL = "admin_global"
    DESIGN = "diseno"
    USER = "usuario"
    GUEST = "invitado"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(30), nullable=False, default=UserRole.USER.value)
    password_hash = Column(String(255), nullable=False)
    photo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
