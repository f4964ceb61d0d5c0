# app/auth/services.py
import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.models import User, UserRole
from app.core.errors import StoreFailure, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha512"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # malformed or unknown hash format in the store
        logger.warning("Stored password hash could not be parsed")
        return False


def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
    photo_url: str | None = None,
) -> User:
    user = User(
        name=name,
        email=email,
        role=UserRole(role).value,
        password_hash=hash_password(password),
        photo_url=photo_url,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"A user with email {email} already exists.")
    db.refresh(user)
    logger.info("Created user %s with role %s", user.id, user.role)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches.

    Unknown emails and wrong passwords fail the same way so callers cannot
    probe which accounts exist.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise Unauthenticated("Invalid credentials.")
    logger.info("User %s logged in", user.id)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise Unauthenticated("Current password is incorrect.")
    user.password_hash = hash_password(new_password)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not change password for user %s", user.id)
        raise StoreFailure("Could not change the password.")
    logger.info("User %s changed password", user.id)


def update_profile(db: Session, user: User, name: str, photo_url: str | None) -> User:
    user.name = name
    user.photo_url = photo_url
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not update profile for user %s", user.id)
        raise StoreFailure("Could not update the profile.")
    db.refresh(user)
    return user
