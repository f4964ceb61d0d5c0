# tests/test_permissions.py
import random

from app.auth.models import UserRole
from app.auth.schemas import Actor
from app.ticket.models import Ticket
from app.ticket.permissions import can_admin_update, can_reply, can_view


def test_owner_can_view_and_reply():
    actor = Actor(id=5, role=UserRole.USER)
    ticket = Ticket(id=42, owner_id=5)
    assert can_view(actor, ticket)
    assert can_reply(actor, ticket)


def test_other_user_cannot_view_or_reply():
    actor = Actor(id=9, role=UserRole.USER)
    ticket = Ticket(id=42, owner_id=5)
    assert not can_view(actor, ticket)
    assert not can_reply(actor, ticket)


def test_admin_sees_every_ticket():
    actor = Actor(id=1, role=UserRole.ADMIN_GLOBAL)
    assert can_view(actor, Ticket(id=1, owner_id=77))
    assert can_admin_update(actor)


def test_only_admin_updates():
    for role in (UserRole.USER, UserRole.DESIGN, UserRole.GUEST):
        assert not can_admin_update(Actor(id=1, role=role))


def test_unknown_role_is_not_admin():
    actor = Actor(id=3, role="superuser")
    assert not actor.is_admin
    assert not can_view(actor, Ticket(id=1, owner_id=4))


def test_view_iff_admin_or_owner_over_random_pairs():
    rng = random.Random(1234)
    roles = list(UserRole)
    for _ in range(500):
        actor = Actor(id=rng.randint(1, 10), role=rng.choice(roles))
        ticket = Ticket(id=rng.randint(1, 100), owner_id=rng.randint(1, 10))
        expected = actor.role == UserRole.ADMIN_GLOBAL or actor.id == ticket.owner_id
        assert can_view(actor, ticket) is expected
        assert can_reply(actor, ticket) is expected
