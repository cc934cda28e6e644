from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from app.modules.auth.context import AuthContext

class RegisterRequest(BaseModel):
    email: str
    username: str
    password: str

class LoginRequest(BaseModel):
    email: str
    password: str

class SessionInfo(BaseModel):
    """Returned on login; the token itself travels only in the cookie"""
    user_id: int
    expires_at: datetime

class Viewer(BaseModel):
    authenticated: bool = False
    user_id: Optional[int] = None
    username: Optional[str] = None
    initial: Optional[str] = None

    @classmethod
    def from_context(cls, context: AuthContext) -> "Viewer":
        if not context.is_authenticated:
            return cls()
        return cls(
            authenticated=True,
            user_id=context.user_id,
            username=context.username,
            initial=context.initial,
        )

class ForgotPasswordRequest(BaseModel):
    email: str = ""

class Message(BaseModel):
    detail: str
