from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint

from app.db.session import Base

TARGET_POST = "post"
TARGET_COMMENT = "comment"
TARGET_TYPES = (TARGET_POST, TARGET_COMMENT)

LIKE = 1
DISLIKE = -1
REACTION_VALUES = (LIKE, DISLIKE)

class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (
        CheckConstraint("target_type IN ('post', 'comment')", name="ck_reactions_target_type"),
        CheckConstraint("value IN (1, -1)", name="ck_reactions_value"),
    )

    # One row per (user, target); re-reacting updates value in place
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    target_type = Column(String, primary_key=True)
    target_id = Column(Integer, primary_key=True)
    value = Column(Integer, nullable=False)
