"""Credential store: registration and password verification."""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    StorageError,
    UsernameTakenError,
    ValidationError,
)
from app.core.security import (
    dummy_verify_password,
    get_password_hash,
    normalize_identifier,
    verify_password,
)
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user_by_email, get_user_by_username

logger = logging.getLogger("app")

MIN_PASSWORD_LENGTH = 6

# Constraint names (PostgreSQL) and qualified columns (SQLite) per conflict
_EMAIL_MARKERS = ("ix_users_email", "users.email")
_USERNAME_MARKERS = ("ix_users_username", "users.username")

def _violated_constraint(exc: IntegrityError) -> str:
    """Constraint name from psycopg2's diagnostics, else the driver's message head"""
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name:
        return constraint_name.lower()
    # Drop the DETAIL line, it echoes the duplicate value
    return str(exc.orig).lower().split("\ndetail:")[0]

def _conflict_from_integrity_error(db: Session, exc: IntegrityError, email: str, username: str):
    """Map a unique-constraint violation on users to the matching conflict"""
    violated = _violated_constraint(exc)
    if any(marker in violated for marker in _EMAIL_MARKERS):
        return EmailTakenError()
    if any(marker in violated for marker in _USERNAME_MARKERS):
        return UsernameTakenError()
    # Driver named neither column; ask the table which value now exists
    if get_user_by_email(db, email):
        return EmailTakenError()
    if get_user_by_username(db, username):
        return UsernameTakenError()
    return None

def register(db: Session, email: str, username: str, password: str) -> User:
    """Create a user with normalized email/username and a bcrypt hash"""
    email = normalize_identifier(email)
    username = normalize_identifier(username)
    password = password or ""

    if not email or not username or not password.strip():
        raise ValidationError("email, username and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

    # Fast feedback only; the unique indexes decide under concurrency
    try:
        if get_user_by_email(db, email):
            raise EmailTakenError()
        if get_user_by_username(db, username):
            raise UsernameTakenError()
    except SQLAlchemyError as e:
        logger.exception("Register pre-check failed")
        raise StorageError(detail=str(e))

    user = User(email=email, username=username, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        conflict = _conflict_from_integrity_error(db, e, email, username)
        if conflict is None:
            logger.exception("Register insert violated an unexpected constraint")
            raise StorageError(detail=str(e))
        logger.info(f"Register lost a uniqueness race: {conflict.code}")
        raise conflict
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Register insert failed")
        raise StorageError(detail=str(e))

    db.refresh(user)
    logger.info(f"Registered user id={user.id}")
    return user

def verify(db: Session, email: str, password: str) -> int:
    """Return the user id for valid credentials or raise InvalidCredentialsError"""
    try:
        user = get_user_by_email(db, email)
    except SQLAlchemyError as e:
        logger.exception("Credential lookup failed")
        raise StorageError(detail=str(e))

    if user is None:
        dummy_verify_password()
        logger.info("Login rejected: unknown email")
        raise InvalidCredentialsError()

    if not verify_password(password or "", user.password_hash):
        logger.info(f"Login rejected: bad password for user id={user.id}")
        raise InvalidCredentialsError()

    return user.id
