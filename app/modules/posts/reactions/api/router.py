from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import require_user
from app.modules.auth.context import AuthContext
from app.modules.posts.reactions.schemas.reaction import Reaction as ReactionSchema, ReactionCreate
from app.modules.posts.reactions.services.reaction import react

router = APIRouter()

@router.post("", response_model=ReactionSchema)
def create_or_update_reaction(
    *,
    db: Session = Depends(get_db),
    reaction_in: ReactionCreate,
    context: AuthContext = Depends(require_user),
) -> Any:
    """Like (1) or dislike (-1) a post or comment; reacting again overwrites"""
    return react(db, context.user_id, reaction_in.target_type, reaction_in.target_id, reaction_in.value)
