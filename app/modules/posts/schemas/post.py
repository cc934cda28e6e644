from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.modules.posts.comments.schemas.comment import CommentView

class PostCreate(BaseModel):
    title: str = ""
    content: str = ""
    categories: List[str] = []
    new_category: Optional[str] = None

    def category_names(self) -> List[str]:
        """Picked categories plus the free-text one, if any"""
        names = list(self.categories)
        if self.new_category and self.new_category.strip():
            names.append(self.new_category)
        return names

class Post(BaseModel):
    """Post model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime

class PostView(Post):
    """Post with author, aggregated reactions and hydrated relations"""
    author: str
    likes: int = 0
    dislikes: int = 0
    categories: List[str] = []
    comments: List[CommentView] = []
