# app/ticket/schemas.py
from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from app.ticket.models import TicketPriority, TicketStatus


def _required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1, validation_alias=AliasChoices("title", "titulo"))
    description: str = Field(..., min_length=1, validation_alias=AliasChoices("description", "descripcion"))
    assigned_department: str | None = Field(
        default=None,
        validation_alias=AliasChoices("assigned_department", "departamento_asignado"),
    )
    priority: TicketPriority | None = Field(
        default=None,
        validation_alias=AliasChoices("priority", "prioridad"),
    )

    @field_validator("priority", mode="before")
    @classmethod
    def blank_priority_is_default(cls, value):
        return _blank_to_none(value)

    @field_validator("title", "description")
    @classmethod
    def strip_required(cls, value: str) -> str:
        return _required_text(value)


class TicketAdminUpdate(BaseModel):
    """Sparse update: only the fields that are set end up in the UPDATE."""

    status: TicketStatus | None = Field(default=None, validation_alias=AliasChoices("status", "estado"))
    assigned_department: str | None = Field(
        default=None,
        validation_alias=AliasChoices("assigned_department", "departamento_asignado"),
    )
    priority: TicketPriority | None = Field(default=None, validation_alias=AliasChoices("priority", "prioridad"))

    @field_validator("status", "priority", mode="before")
    @classmethod
    def blank_choice_is_unset(cls, value):
        return _blank_to_none(value)

    @field_validator("assigned_department")
    @classmethod
    def blank_department_is_unset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.changes():
            raise ValueError("No fields were supplied to update.")
        return self

    def changes(self) -> dict:
        return {
            column: value.value if isinstance(value, Enum) else value
            for column, value in (
                ("status", self.status),
                ("assigned_department", self.assigned_department),
                ("priority", self.priority),
            )
            if value is not None
        }


class ReplyCreate(BaseModel):
    message: str = Field(..., min_length=1, validation_alias=AliasChoices("message", "mensaje"))

    @field_validator("message")
    @classmethod
    def strip_required(cls, value: str) -> str:
        return _required_text(value)


class TicketListItem(BaseModel):
    id: int
    title: str
    assigned_department: str
    status: str
    priority: str
    created_at: datetime
    owner_name: str

    model_config = {"from_attributes": True}


class TicketDetail(TicketListItem):
    owner_id: int
    description: str
    owner_email: str


class ReplyOut(BaseModel):
    id: int
    message: str
    created_at: datetime
    author_id: int
    author_name: str
    author_photo_url: str | None = None
    author_role: str

    model_config = {"from_attributes": True}
