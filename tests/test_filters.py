from app.modules.auth.context import ANONYMOUS, AuthContext
from app.modules.home_feed.services.filters import FeedFilters, compose_feed_predicates


def test_from_query_reads_presence_flags():
    filters = FeedFilters.from_query({"cat": " news ", "mine": ""})

    assert filters == FeedFilters(category="news", mine=True, liked=False)


def test_from_query_blank_category_is_no_filter():
    assert FeedFilters.from_query({"cat": "  "}) == FeedFilters()


def test_no_filters_no_predicates():
    assert len(compose_feed_predicates(FeedFilters(), AuthContext(user_id=1))) == 0


def test_identity_filters_dropped_for_anonymous():
    filters = FeedFilters(category="news", mine=True, liked=True)

    composer = compose_feed_predicates(filters, ANONYMOUS)

    assert len(composer) == 1


def test_zero_identity_is_anonymous():
    composer = compose_feed_predicates(FeedFilters(mine=True, liked=True), AuthContext(user_id=0))

    assert len(composer) == 0


def test_all_filters_for_logged_in_viewer():
    filters = FeedFilters(category="news", mine=True, liked=True)

    composer = compose_feed_predicates(filters, AuthContext(user_id=7, username="alice"))

    assert len(composer) == 3


def test_category_value_is_bound_not_inlined():
    composer = compose_feed_predicates(FeedFilters(category="x' OR 1=1 --"), ANONYMOUS)

    compiled = composer.predicates[0].compile()
    assert "x' OR 1=1" not in str(compiled)
    assert "x' OR 1=1 --" in compiled.params.values()
