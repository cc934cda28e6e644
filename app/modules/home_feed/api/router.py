from typing import Any
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_auth_context
from app.modules.auth.context import AuthContext
from app.modules.home_feed.schemas.feed import FeedResponse
from app.modules.home_feed.services.feed import get_home_feed
from app.modules.home_feed.services.filters import FeedFilters

router = APIRouter()

@router.get("", response_model=FeedResponse)
def read_home_feed(
    *,
    request: Request,
    db: Session = Depends(get_db),
    context: AuthContext = Depends(get_auth_context),
) -> Any:
    """
    Main post listing. Accepts `cat=<name>` and the presence flags `mine`
    and `liked`; the flags only narrow results for a logged-in viewer.
    """
    filters = FeedFilters.from_query(request.query_params)
    return get_home_feed(db, filters, context)
