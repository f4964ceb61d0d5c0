# app/ticket/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import get_actor
from app.auth.schemas import Actor
from app.core.database import get_db
from app.core.errors import PermissionDenied
from app.core.schemas import Envelope, IdOut
from app.ticket import services as ticket_service
from app.ticket.permissions import can_admin_update
from app.ticket.schemas import (
    ReplyCreate,
    ReplyOut,
    TicketAdminUpdate,
    TicketCreate,
    TicketDetail,
    TicketListItem,
)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def require_ticket_admin(actor: Actor = Depends(get_actor)) -> Actor:
    # resolved before the body so non-admins get 403 rather than a validation error
    if not can_admin_update(actor):
        raise PermissionDenied(
            "Permission denied. The global administrator profile is required to update tickets."
        )
    return actor


@router.get("", response_model=Envelope[list[TicketListItem]])
def list_all(actor: Actor = Depends(get_actor), db: Session = Depends(get_db)):
    items = ticket_service.list_tickets(db, actor)
    return Envelope(message="Ticket list retrieved.", data=items)


@router.post("", response_model=Envelope[IdOut], status_code=201)
def create(payload: TicketCreate, actor: Actor = Depends(get_actor), db: Session = Depends(get_db)):
    ticket = ticket_service.create_ticket(db, actor, payload)
    return Envelope(message="Ticket created.", data=IdOut(id=ticket.id))


@router.get("/{ticket_id}", response_model=Envelope[TicketDetail])
def get(ticket_id: int, actor: Actor = Depends(get_actor), db: Session = Depends(get_db)):
    ticket = ticket_service.get_ticket_detail(db, actor, ticket_id)
    return Envelope(message="Ticket detail retrieved.", data=ticket)


@router.patch("/{ticket_id}", response_model=Envelope[IdOut])
def admin_update(
    ticket_id: int,
    payload: TicketAdminUpdate,
    actor: Actor = Depends(require_ticket_admin),
    db: Session = Depends(get_db),
):
    updated_id = ticket_service.admin_update_ticket(db, actor, ticket_id, payload)
    return Envelope(message="Ticket updated.", data=IdOut(id=updated_id))


@router.get("/{ticket_id}/replies", response_model=Envelope[list[ReplyOut]])
def replies(ticket_id: int, actor: Actor = Depends(get_actor), db: Session = Depends(get_db)):
    items = ticket_service.list_replies(db, actor, ticket_id)
    return Envelope(message="Replies retrieved.", data=items)


@router.post("/{ticket_id}/replies", response_model=Envelope[IdOut], status_code=201)
def reply(
    ticket_id: int,
    payload: ReplyCreate,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
):
    created = ticket_service.add_reply(db, actor, ticket_id, payload)
    return Envelope(message="Reply added.", data=IdOut(id=created.id))
