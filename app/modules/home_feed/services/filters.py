"""Composable, parameter-bound predicates for the post listing."""
from dataclasses import dataclass
from typing import Mapping, Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import aliased

from app.modules.auth.context import AuthContext
from app.modules.posts.categories.models.category import Category
from app.modules.posts.models.post import Post, post_categories
from app.modules.posts.reactions.models.reaction import LIKE, TARGET_POST, Reaction


@dataclass(frozen=True)
class FeedFilters:
    category: Optional[str] = None
    mine: bool = False
    liked: bool = False

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "FeedFilters":
        """`cat=<name>` plus the presence flags `mine` and `liked`"""
        category = (params.get("cat") or "").strip()
        return cls(category=category or None, mine="mine" in params, liked="liked" in params)


class PostPredicateComposer:
    """
    Collects optional WHERE predicates over ``posts`` and ANDs the active ones.

    Every value is a bound parameter; nothing is spliced into SQL text.
    """

    def __init__(self) -> None:
        self._predicates = []

    @property
    def predicates(self) -> list:
        return list(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    def add(self, predicate) -> "PostPredicateComposer":
        self._predicates.append(predicate)
        return self

    def in_category(self, name: str) -> "PostPredicateComposer":
        linked = (
            select(post_categories.c.post_id)
            .join(Category, Category.id == post_categories.c.category_id)
            .where(post_categories.c.post_id == Post.id, Category.name == name)
            .correlate(Post)
        )
        self._predicates.append(linked.exists())
        return self

    def authored_by(self, user_id: int) -> "PostPredicateComposer":
        self._predicates.append(Post.user_id == user_id)
        return self

    def liked_by(self, user_id: int) -> "PostPredicateComposer":
        # Aliased so it never correlates with the aggregate join on reactions
        rx = aliased(Reaction, name="rx")
        liked = (
            select(rx.user_id)
            .where(
                rx.user_id == user_id,
                rx.target_type == TARGET_POST,
                rx.target_id == Post.id,
                rx.value == LIKE,
            )
            .correlate(Post)
        )
        self._predicates.append(liked.exists())
        return self

    def apply(self, query):
        if not self._predicates:
            return query
        return query.filter(and_(*self._predicates))


def compose_feed_predicates(filters: FeedFilters, context: AuthContext) -> PostPredicateComposer:
    """Identity-bound filters are dropped, not rejected, for anonymous viewers"""
    composer = PostPredicateComposer()
    if filters.category:
        composer.in_category(filters.category)
    if context.is_authenticated:
        if filters.mine:
            composer.authored_by(context.user_id)
        if filters.liked:
            composer.liked_by(context.user_id)
    return composer
