from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import require_user
from app.modules.auth.context import AuthContext
from app.modules.home_feed.services.feed import get_post_view
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostView
from app.modules.posts.services.post import create_post

router = APIRouter()

@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Session = Depends(get_db),
    post_in: PostCreate,
    context: AuthContext = Depends(require_user),
) -> Any:
    """
    Create new post. `categories` lists picked names and `new_category`
    adds one more; unknown names are created.
    """
    return create_post(db, context.user_id, post_in.title, post_in.content, post_in.category_names())

@router.get("/{post_id}", response_model=PostView)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_id: int,
) -> Any:
    """
    Get post by ID with reactions, categories and comments.
    """
    return get_post_view(db, post_id)
