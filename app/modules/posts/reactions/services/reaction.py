import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.db.upsert import dialect_insert
from app.modules.posts.comments.services.comment import get_comment
from app.modules.posts.reactions.models.reaction import (
    REACTION_VALUES, TARGET_POST, TARGET_TYPES, Reaction,
)
from app.modules.posts.services.post import get_post

logger = logging.getLogger("app")

def validate_reaction(target_type: str, target_id: int, value: int) -> None:
    if target_type not in TARGET_TYPES or value not in REACTION_VALUES or not target_id:
        raise ValidationError("Bad request")

def _target_exists(db: Session, target_type: str, target_id: int) -> bool:
    if target_type == TARGET_POST:
        return get_post(db, post_id=target_id) is not None
    return get_comment(db, comment_id=target_id) is not None

def react(db: Session, user_id: int, target_type: str, target_id: int, value: int) -> Reaction:
    """
    Record a like (+1) or dislike (-1) on a post or comment.
    One atomic upsert on (user_id, target_type, target_id): the first
    reaction inserts, later ones overwrite the value.
    """
    validate_reaction(target_type, target_id, value)

    try:
        if not _target_exists(db, target_type, target_id):
            raise NotFoundError(f"{target_type.capitalize()} not found")

        stmt = dialect_insert(db, Reaction.__table__).values(
            user_id=user_id, target_type=target_type, target_id=target_id, value=value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "target_type", "target_id"],
            set_={"value": stmt.excluded.value},
        )
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Reaction upsert failed user id={user_id} {target_type}={target_id}")
        raise StorageError(detail=str(e))

    logger.info(f"Reaction user id={user_id} {target_type}={target_id} value={value}")
    return Reaction(user_id=user_id, target_type=target_type, target_id=target_id, value=value)
