# app/auth/routes.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.auth import services as auth_service
from app.auth.dependencies import end_session, get_current_user, start_session
from app.auth.models import User
from app.auth.schemas import LoginOut, LoginRequest, PasswordChange, ProfileUpdate, SessionUserOut
from app.core.database import get_db
from app.core.schemas import Envelope

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=Envelope[LoginOut])
def login(credentials: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, credentials.email, credentials.password)
    start_session(request, user)
    return Envelope(
        message="Login successful.",
        data=LoginOut(id=user.id, name=user.name, role=user.role),
    )


@router.post("/logout", response_model=Envelope[None], response_model_exclude_none=True)
def logout(request: Request):
    end_session(request)
    return Envelope(message="Session closed.")


@router.get("/session", response_model=Envelope[SessionUserOut])
def check_session(user: User = Depends(get_current_user)):
    return Envelope(message="Session active.", data=SessionUserOut.model_validate(user))


@router.post("/password", response_model=Envelope[None], response_model_exclude_none=True)
def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    auth_service.change_password(db, user, payload.current_password, payload.new_password)
    return Envelope(message="Password changed.")


@router.patch("/profile", response_model=Envelope[SessionUserOut])
def update_profile(
    payload: ProfileUpdate,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = auth_service.update_profile(db, user, payload.name, payload.photo_url)
    start_session(request, user)
    return Envelope(message="Profile updated.", data=SessionUserOut.model_validate(user))
