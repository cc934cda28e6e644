from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageError, ValidationError
from app.db.upsert import dialect_insert
from app.modules.posts.categories.services.category import ensure_category, normalize_category_name
from app.modules.posts.models.post import Post, post_categories

logger = logging.getLogger("app")

def get_post(db: Session, post_id: int) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def _distinct_category_names(names: List[str]) -> List[str]:
    seen = []
    for name in names or []:
        name = normalize_category_name(name)
        if name and name not in seen:
            seen.append(name)
    return seen

def create_post(db: Session, user_id: int, title: str, content: str, category_names: List[str]) -> Post:
    """
    Create a post and link it to its categories in a single transaction.

    Unknown category names are created on the fly. Duplicate links are
    skipped by the post_categories primary key. If anything fails the post
    is rolled back with the links, so no post is left without categories.
    """
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError("Title and content required")

    names = _distinct_category_names(category_names)
    if not names:
        raise ValidationError("Please pick at least one category")

    post = Post(user_id=user_id, title=title, content=content)
    try:
        db.add(post)
        db.flush()

        for name in names:
            category_id = ensure_category(db, name)
            link = (
                dialect_insert(db, post_categories)
                .values(post_id=post.id, category_id=category_id)
                .on_conflict_do_nothing()
            )
            db.execute(link)

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Creating post failed for user id={user_id}")
        raise StorageError(detail=str(e))

    db.refresh(post)
    logger.info(f"Created post id={post.id} user id={user_id} categories={names}")
    return post
