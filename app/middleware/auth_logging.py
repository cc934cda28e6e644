from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger("app")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        has_cookie = settings.SESSION_COOKIE_NAME in request.cookies
        path = request.url.path

        # Process the request
        response = await call_next(request)

        # Log auth-related status codes
        if response.status_code in [401, 403]:
            state = "with" if has_cookie else "without"
            logger.warning(f"Auth error: {response.status_code} on {path} ({state} session cookie)")

        return response
