# app/auth/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.auth.models import User, UserRole
from app.auth.schemas import Actor
from app.auth import services as auth_service
from app.core.database import get_db
from app.core.errors import Unauthenticated

SESSION_USER_ID = "user_id"
SESSION_ROLE = "role"
SESSION_NAME = "name"


def start_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_ID] = user.id
    request.session[SESSION_ROLE] = user.role
    request.session[SESSION_NAME] = user.name


def end_session(request: Request) -> None:
    request.session.clear()


def get_actor(request: Request) -> Actor:
    """Build the request-scoped actor from the session cookie."""
    user_id = request.session.get(SESSION_USER_ID)
    if not user_id:
        raise Unauthenticated("Access denied. Authentication is required.")
    return Actor(id=user_id, role=request.session.get(SESSION_ROLE) or UserRole.GUEST)


def get_current_user(
    request: Request,
    actor: Actor = Depends(get_actor),
    db: Session = Depends(get_db),
) -> User:
    user = auth_service.get_user(db, actor.id)
    if not user:
        # the account was removed while the session was alive
        end_session(request)
        raise Unauthenticated("Session is no longer valid. User not found.")
    return user
