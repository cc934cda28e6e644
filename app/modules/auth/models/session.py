from sqlalchemy import Column, String, DateTime, Integer, ForeignKey

from app.core.security import utcnow
from app.db.session import Base

class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(String, primary_key=True)  # opaque bearer token
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
