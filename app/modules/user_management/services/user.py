from typing import Optional
from sqlalchemy.orm import Session

from app.core.security import normalize_identifier
from app.modules.user_management.models.user import User

def get_user(db: Session, user_id: int) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by normalized email"""
    return db.query(User).filter(User.email == normalize_identifier(email)).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by normalized username"""
    return db.query(User).filter(User.username == normalize_identifier(username)).first()
