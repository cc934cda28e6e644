import asyncio
import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.exceptions import RequestTimeoutError

logger = logging.getLogger("app")

class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Bounds total handling time. The handler thread may still be running when
    the 504 goes out; its DB session refuses to commit past the same deadline.
    """

    def __init__(self, app, timeout: float) -> None:
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(self, request: Request, call_next):
        # get_db reads this so commits share the 504 deadline
        request.state.deadline = time.monotonic() + self.timeout
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Request timeout after {self.timeout}s: {request.method} {request.url.path}")
            error = RequestTimeoutError()
            return JSONResponse(
                status_code=error.status_code,
                content={"code": error.code, "detail": error.message},
            )
