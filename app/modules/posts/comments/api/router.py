from typing import Any

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import require_user
from app.modules.auth.context import AuthContext
from app.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from app.modules.posts.comments.services.comment import create_comment

router = APIRouter()

@router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_new_comment(
    *,
    db: Session = Depends(get_db),
    post_id: int = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    context: AuthContext = Depends(require_user),
) -> Any:
    """Create new comment on a post"""
    return create_comment(db, context.user_id, post_id, comment_in.content)
