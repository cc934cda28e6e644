from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.services.post import get_post

logger = logging.getLogger("app")

def get_comment(db: Session, comment_id: int) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def create_comment(db: Session, user_id: int, post_id: int, content: str) -> Comment:
    """Create a new comment on an existing post"""
    content = (content or "").strip()
    if not post_id or not content:
        raise ValidationError("Bad request")

    try:
        if get_post(db, post_id=post_id) is None:
            raise NotFoundError("Post not found")

        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        db.add(comment)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Creating comment failed on post id={post_id}")
        raise StorageError(detail=str(e))

    db.refresh(comment)
    return comment
