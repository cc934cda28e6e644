from datetime import datetime
from pydantic import BaseModel, ConfigDict

class User(BaseModel):
    """User model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    created_at: datetime
