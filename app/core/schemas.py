# app/core/schemas.py
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Shape shared by every response. ``data`` is left out when empty."""

    status: Literal["success", "error"] = "success"
    message: str
    data: T | None = None


class IdOut(BaseModel):
    id: int
