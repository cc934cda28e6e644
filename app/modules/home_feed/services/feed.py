from typing import List
import logging

from sqlalchemy import and_, case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.modules.auth.context import AuthContext
from app.modules.auth.schemas.auth import Viewer
from app.modules.home_feed.schemas.feed import FeedFiltersOut, FeedResponse
from app.modules.home_feed.services.filters import FeedFilters, PostPredicateComposer, compose_feed_predicates
from app.modules.posts.categories.models.category import Category
from app.modules.posts.categories.schemas.category import Category as CategorySchema
from app.modules.posts.categories.services.category import get_categories
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import CommentView
from app.modules.posts.models.post import Post, post_categories
from app.modules.posts.reactions.models.reaction import DISLIKE, LIKE, TARGET_COMMENT, TARGET_POST, Reaction
from app.modules.posts.schemas.post import PostView
from app.modules.user_management.models.user import User

logger = logging.getLogger("app")

FEED_LIMIT = 100

def _reaction_counts():
    # COUNT skips the NULLs of unmatched CASE rows, so no reactions gives 0
    likes = func.count(case((Reaction.value == LIKE, 1))).label("likes")
    dislikes = func.count(case((Reaction.value == DISLIKE, 1))).label("dislikes")
    return likes, dislikes

def _build_post_query(db: Session, composer: PostPredicateComposer):
    """Posts with author and aggregated likes/dislikes, newest first"""
    likes, dislikes = _reaction_counts()
    query = (
        db.query(
            Post.id,
            Post.user_id,
            Post.title,
            Post.content,
            Post.created_at,
            User.username.label("author"),
            likes,
            dislikes,
        )
        .join(User, User.id == Post.user_id)
        .outerjoin(
            Reaction,
            and_(Reaction.target_type == TARGET_POST, Reaction.target_id == Post.id),
        )
    )
    query = composer.apply(query)
    return (
        query
        .group_by(Post.id, Post.user_id, Post.title, Post.content, Post.created_at, User.username)
        .order_by(Post.created_at.desc(), Post.id.desc())
    )

def get_post_category_names(db: Session, post_id: int) -> List[str]:
    rows = (
        db.query(Category.name)
        .join(post_categories, post_categories.c.category_id == Category.id)
        .filter(post_categories.c.post_id == post_id)
        .order_by(Category.name)
        .all()
    )
    return [row.name for row in rows]

def get_post_comments(db: Session, post_id: int) -> List[CommentView]:
    """Comments of a post, oldest first, with author and reaction counts"""
    likes, dislikes = _reaction_counts()
    rows = (
        db.query(
            Comment.id,
            Comment.post_id,
            Comment.user_id,
            Comment.content,
            Comment.created_at,
            User.username.label("author"),
            likes,
            dislikes,
        )
        .join(User, User.id == Comment.user_id)
        .outerjoin(
            Reaction,
            and_(Reaction.target_type == TARGET_COMMENT, Reaction.target_id == Comment.id),
        )
        .filter(Comment.post_id == post_id)
        .group_by(Comment.id, Comment.post_id, Comment.user_id, Comment.content, Comment.created_at, User.username)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return [CommentView(**row._asdict()) for row in rows]

def _create_post_view(db: Session, row) -> PostView:
    """Hydrate one aggregated post row with its categories and comments"""
    return PostView(
        **row._asdict(),
        categories=get_post_category_names(db, row.id),
        comments=get_post_comments(db, row.id),
    )

def list_posts(db: Session, filters: FeedFilters, context: AuthContext) -> List[PostView]:
    """
    Filtered listing, capped at FEED_LIMIT. Any query failure aborts the
    whole listing; partial results are never returned.
    """
    composer = compose_feed_predicates(filters, context)
    try:
        rows = _build_post_query(db, composer).limit(FEED_LIMIT).all()
        return [_create_post_view(db, row) for row in rows]
    except SQLAlchemyError as e:
        logger.exception(f"Feed query failed filters={filters}")
        raise StorageError(detail=str(e))

def get_post_view(db: Session, post_id: int) -> PostView:
    composer = PostPredicateComposer().add(Post.id == post_id)
    try:
        row = _build_post_query(db, composer).first()
        if row is None:
            raise NotFoundError("Post not found")
        return _create_post_view(db, row)
    except SQLAlchemyError as e:
        logger.exception(f"Post query failed id={post_id}")
        raise StorageError(detail=str(e))

def get_home_feed(db: Session, filters: FeedFilters, context: AuthContext) -> FeedResponse:
    posts = list_posts(db, filters, context)
    try:
        categories = get_categories(db)
    except SQLAlchemyError as e:
        logger.exception("Category listing failed")
        raise StorageError(detail=str(e))

    return FeedResponse(
        posts=posts,
        categories=[CategorySchema.model_validate(category) for category in categories],
        filters=FeedFiltersOut(category=filters.category, mine=filters.mine, liked=filters.liked),
        viewer=Viewer.from_context(context),
    )
