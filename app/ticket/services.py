# app/ticket/services.py
import logging

from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.models import User
from app.auth.schemas import Actor
from app.core.config import get_settings
from app.core.errors import NotFound, PermissionDenied, StoreFailure, ValidationError
from app.ticket.models import (
    PRIORITY_PRECEDENCE,
    STATUS_PRECEDENCE,
    Ticket,
    TicketPriority,
    TicketReply,
    TicketStatus,
)
from app.ticket.permissions import can_admin_update, can_reply, can_view
from app.ticket.schemas import (
    ReplyCreate,
    ReplyOut,
    TicketAdminUpdate,
    TicketCreate,
    TicketDetail,
    TicketListItem,
)

logger = logging.getLogger(__name__)

status_rank = case(STATUS_PRECEDENCE, value=Ticket.status, else_=len(STATUS_PRECEDENCE))
priority_rank = case(PRIORITY_PRECEDENCE, value=Ticket.priority, else_=len(PRIORITY_PRECEDENCE))


def _get_ticket(db: Session, ticket_id: int) -> Ticket:
    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not ticket:
        raise NotFound("Ticket not found.")
    return ticket


def _deny(actor: Actor, ticket_id: int, action: str) -> PermissionDenied:
    logger.warning("User %s denied %s on ticket %s", actor.id, action, ticket_id)
    return PermissionDenied(f"Permission denied to {action} this ticket.")


def list_tickets(db: Session, actor: Actor) -> list[TicketListItem]:
    """Admins get every ticket ranked by urgency, everyone else their own, newest first."""
    query = db.query(
        Ticket.id,
        Ticket.title,
        Ticket.assigned_department,
        Ticket.status,
        Ticket.priority,
        Ticket.created_at,
        User.name.label("owner_name"),
    ).join(User, Ticket.owner_id == User.id)

    if actor.is_admin:
        query = query.order_by(status_rank, priority_rank, Ticket.id)
    else:
        query = query.filter(Ticket.owner_id == actor.id).order_by(
            status_rank, Ticket.created_at.desc(), Ticket.id.desc()
        )
    return [TicketListItem.model_validate(row) for row in query.all()]


def get_ticket_detail(db: Session, actor: Actor, ticket_id: int) -> TicketDetail:
    row = (
        db.query(
            Ticket.id,
            Ticket.owner_id,
            Ticket.title,
            Ticket.description,
            Ticket.assigned_department,
            Ticket.status,
            Ticket.priority,
            Ticket.created_at,
            User.name.label("owner_name"),
            User.email.label("owner_email"),
        )
        .join(User, Ticket.owner_id == User.id)
        .filter(Ticket.id == ticket_id)
        .first()
    )
    if not row:
        raise NotFound("Ticket not found.")
    if not can_view(actor, row):
        raise _deny(actor, ticket_id, "view")
    return TicketDetail.model_validate(row)


def list_replies(db: Session, actor: Actor, ticket_id: int) -> list[ReplyOut]:
    ticket = _get_ticket(db, ticket_id)
    if not can_view(actor, ticket):
        raise _deny(actor, ticket_id, "view")
    rows = (
        db.query(
            TicketReply.id,
            TicketReply.message,
            TicketReply.created_at,
            TicketReply.author_id,
            User.name.label("author_name"),
            User.photo_url.label("author_photo_url"),
            User.role.label("author_role"),
        )
        .join(User, TicketReply.author_id == User.id)
        .filter(TicketReply.ticket_id == ticket_id)
        .order_by(TicketReply.created_at.asc(), TicketReply.id.asc())
        .all()
    )
    return [ReplyOut.model_validate(row) for row in rows]


def create_ticket(db: Session, actor: Actor, payload: TicketCreate) -> Ticket:
    department = (payload.assigned_department or "").strip() or get_settings().DEFAULT_DEPARTMENT
    db_ticket = Ticket(
        owner_id=actor.id,
        title=payload.title,
        description=payload.description,
        assigned_department=department,
        priority=(payload.priority or TicketPriority.MEDIUM).value,
        status=TicketStatus.OPEN.value,
    )
    db.add(db_ticket)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not create ticket for user %s", actor.id)
        raise StoreFailure("Could not create the ticket.")
    db.refresh(db_ticket)
    logger.info("User %s opened ticket %s (%s)", actor.id, db_ticket.id, db_ticket.priority)
    return db_ticket


def add_reply(db: Session, actor: Actor, ticket_id: int, payload: ReplyCreate) -> TicketReply:
    """Store a reply and move an Open ticket to In Progress in the same transaction.

    The status change is a single conditional UPDATE so concurrent replies
    cannot race; Closed and In Progress tickets keep their status.
    """
    ticket = _get_ticket(db, ticket_id)
    if not can_reply(actor, ticket):
        raise _deny(actor, ticket_id, "reply to")

    reply = TicketReply(ticket_id=ticket_id, author_id=actor.id, message=payload.message)
    try:
        db.add(reply)
        db.flush()
        db.execute(
            update(Ticket)
            .where(Ticket.id == ticket_id)
            .values(
                status=case(
                    (Ticket.status == TicketStatus.OPEN.value, TicketStatus.IN_PROGRESS.value),
                    else_=Ticket.status,
                )
            )
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not add reply to ticket %s", ticket_id)
        raise StoreFailure("Could not add the reply.")
    db.refresh(reply)
    logger.info("User %s replied to ticket %s", actor.id, ticket_id)
    return reply


def admin_update_ticket(db: Session, actor: Actor, ticket_id: int, payload: TicketAdminUpdate) -> int:
    if not can_admin_update(actor):
        raise _deny(actor, ticket_id, "update")
    changes = payload.changes()
    if not changes:
        raise ValidationError("No fields were supplied to update.")

    try:
        result = db.execute(
            update(Ticket)
            .where(Ticket.id == ticket_id)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
        else:
            db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not update ticket %s", ticket_id)
        raise StoreFailure("Could not update the ticket.")
    if result.rowcount == 0:
        raise NotFound("Ticket not found.")
    logger.info("Admin %s updated ticket %s: %s", actor.id, ticket_id, ", ".join(sorted(changes)))
    return ticket_id
