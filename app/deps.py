import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotAuthenticatedError
from app.core.security import mask_token
from app.db.session import get_db
from app.modules.auth.context import ANONYMOUS, AuthContext
from app.modules.auth.services.session import is_live, resolve
from app.modules.user_management.services.user import get_user

logger = logging.getLogger("app")

def get_session_token(request: Request) -> str:
    return request.cookies.get(settings.SESSION_COOKIE_NAME, "")

def get_auth_context(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    """
    Dependency resolving the session cookie into an AuthContext.
    FastAPI caches it per request, so the cookie is read exactly once.
    """
    token = get_session_token(request)
    context = ANONYMOUS
    if token:
        resolved = resolve(db, token)
        if resolved is None:
            logger.info(f"Session FAIL sid={mask_token(token)}: not found")
        elif not is_live(resolved):
            logger.info(f"Session FAIL sid={mask_token(token)}: expired at {resolved.expires_at.isoformat()}")
        else:
            user = get_user(db, user_id=resolved.user_id)
            if user is None:
                logger.warning(f"Session sid={mask_token(token)} points to missing user id={resolved.user_id}")
            else:
                context = AuthContext(user_id=user.id, username=user.username)
    request.state.auth = context
    return context

def require_user(context: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """
    Capability gate for mutations: anonymous requests stop here with a 401
    """
    if not context.is_authenticated:
        raise NotAuthenticatedError()
    return context
