"""Session manager: one live session per user, opaque cookie tokens."""
from dataclasses import dataclass
from datetime import datetime, timedelta
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageError
from app.core.security import generate_session_token, mask_token, utcnow
from app.modules.auth.models.session import UserSession
from app.modules.auth.services.auth import verify

logger = logging.getLogger("app")

@dataclass(frozen=True)
class SessionToken:
    token: str
    user_id: int
    expires_at: datetime

@dataclass(frozen=True)
class ResolvedSession:
    user_id: int
    expires_at: datetime

def is_live(resolved: ResolvedSession, now: Optional[datetime] = None) -> bool:
    return resolved.expires_at > (now or utcnow())

def login(db: Session, email: str, password: str, lifetime: timedelta) -> SessionToken:
    """Verify credentials, then replace every session of the user with a new one"""
    user_id = verify(db, email, password)

    now = utcnow()
    session = UserSession(
        id=generate_session_token(),
        user_id=user_id,
        expires_at=now + lifetime,
        created_at=now,
    )
    try:
        db.query(UserSession).filter(UserSession.user_id == user_id).delete(synchronize_session=False)
        db.add(session)
        db.commit()
    except SQLAlchemyError as e:
        # Prior sessions survive: the delete is part of the rolled back transaction
        db.rollback()
        logger.exception(f"Session creation failed for user id={user_id}")
        raise StorageError(detail=str(e))

    logger.info(f"Login OK user id={user_id} sid={mask_token(session.id)}")
    return SessionToken(token=session.id, user_id=user_id, expires_at=session.expires_at)

def resolve(db: Session, token: str) -> Optional[ResolvedSession]:
    """Look the token up; expiry is the caller's check and nothing is purged"""
    if not token:
        return None
    try:
        row = (
            db.query(UserSession.user_id, UserSession.expires_at)
            .filter(UserSession.id == token)
            .first()
        )
    except SQLAlchemyError as e:
        logger.exception("Session lookup failed")
        raise StorageError(detail=str(e))
    if row is None:
        return None
    return ResolvedSession(user_id=row.user_id, expires_at=row.expires_at)

def logout(db: Session, token: str) -> None:
    if not token:
        return
    try:
        deleted = db.query(UserSession).filter(UserSession.id == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Logout failed")
        raise StorageError(detail=str(e))
    if deleted:
        logger.info(f"Logout sid={mask_token(token)}")
