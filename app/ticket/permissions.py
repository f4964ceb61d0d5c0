# app/ticket/permissions.py
"""Who may see and touch a ticket.

Only ``admin_global`` actors see every ticket; everybody else is limited to
the tickets they opened. Status, department and priority changes are an
admin-only operation on any ticket.
"""
from app.auth.schemas import Actor
from app.ticket.models import Ticket


def can_view(actor: Actor, ticket: Ticket) -> bool:
    return actor.is_admin or actor.id == ticket.owner_id


def can_reply(actor: Actor, ticket: Ticket) -> bool:
    return can_view(actor, ticket)


def can_admin_update(actor: Actor) -> bool:
    return actor.is_admin
