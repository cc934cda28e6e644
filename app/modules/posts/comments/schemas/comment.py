from datetime import datetime
from pydantic import BaseModel, ConfigDict

class CommentCreate(BaseModel):
    content: str = ""

class Comment(BaseModel):
    """Comment model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime

class CommentView(Comment):
    """Comment as shown under a post in listings"""
    author: str
    likes: int = 0
    dislikes: int = 0
