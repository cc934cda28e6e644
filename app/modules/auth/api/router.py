"""Authentication router: registration and cookie-backed sessions"""
from datetime import timezone
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.deps import get_auth_context, get_session_token
from app.modules.auth.context import AuthContext
from app.modules.auth.schemas.auth import (
    ForgotPasswordRequest, LoginRequest, Message, RegisterRequest, SessionInfo, Viewer,
)
from app.modules.auth.services.auth import register
from app.modules.auth.services.session import SessionToken, login, logout
from app.modules.user_management.schemas.user import User as UserSchema

router = APIRouter()
logger = logging.getLogger("app")

def _set_session_cookie(response: Response, session: SessionToken) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.token,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        expires=session.expires_at.replace(tzinfo=timezone.utc),
    )

@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register_user(
    *,
    db: Session = Depends(get_db),
    user_in: RegisterRequest,
) -> Any:
    """Register a new account"""
    return register(db, user_in.email, user_in.username, user_in.password)

@router.post("/login", response_model=SessionInfo)
def login_user(
    *,
    db: Session = Depends(get_db),
    credentials: LoginRequest,
    response: Response,
) -> Any:
    """Open a session and hand its token back in the session cookie"""
    session = login(db, credentials.email, credentials.password, settings.session_lifetime)
    _set_session_cookie(response, session)
    return SessionInfo(user_id=session.user_id, expires_at=session.expires_at)

@router.post("/logout", response_model=Message)
def logout_user(
    *,
    db: Session = Depends(get_db),
    request: Request,
    response: Response,
) -> Any:
    """Drop the current session; logging out twice is fine"""
    logout(db, get_session_token(request))
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    return Message(detail="Logged out")

@router.post("/forgot", response_model=Message, status_code=status.HTTP_202_ACCEPTED)
def forgot_password(forgot_in: ForgotPasswordRequest) -> Any:
    """Password reset stub. Never reveals whether the email is registered."""
    logger.info("Password reset requested")
    return Message(detail="If the address is registered, reset instructions will follow")

@router.get("/me", response_model=Viewer)
def read_viewer(context: AuthContext = Depends(get_auth_context)) -> Any:
    """Who the session cookie resolves to, or the anonymous viewer"""
    return Viewer.from_context(context)
