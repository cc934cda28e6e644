# Implements security-related functionality:
# Password hashing and verification using bcrypt
# Session token generation
# Email/username normalization shared by registration and login

from datetime import datetime, timezone
import secrets
import logging

from passlib.context import CryptContext

logger = logging.getLogger("app")

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_BYTES = 32

def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)

def normalize_identifier(value: str) -> str:
    return (value or "").strip().lower()

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def dummy_verify_password() -> None:
    """Spend one hash round so unknown emails cost the same as bad passwords"""
    pwd_context.dummy_verify()

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def generate_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)

def mask_token(token: str) -> str:
    if not token:
        return "<empty>"
    return f"{token[:6]}..."
