from typing import List, Optional
from pydantic import BaseModel

from app.modules.auth.schemas.auth import Viewer
from app.modules.posts.categories.schemas.category import Category
from app.modules.posts.schemas.post import PostView

class FeedFiltersOut(BaseModel):
    category: Optional[str] = None
    mine: bool = False
    liked: bool = False

class FeedResponse(BaseModel):
    """Feed response model returned to client"""
    posts: List[PostView]
    categories: List[Category]
    filters: FeedFiltersOut
    viewer: Viewer
