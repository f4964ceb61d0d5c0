# app/ticket/models.py
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketStatus(str, enum.Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"


class TicketPriority(str, enum.Enum):
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# Listing precedence, lower sorts first
STATUS_PRECEDENCE = {s.value: i for i, s in enumerate(TicketStatus)}
PRIORITY_PRECEDENCE = {p.value: i for i, p in enumerate(TicketPriority)}


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    assigned_department = Column(String(100), nullable=False)
    status = Column(String(20), default=TicketStatus.OPEN.value, index=True, nullable=False)
    priority = Column(String(20), default=TicketPriority.MEDIUM.value, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class TicketReply(Base):
    __tablename__ = "ticket_replies"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id"), index=True, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
