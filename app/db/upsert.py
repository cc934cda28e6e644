"""Dialect-aware INSERT for the ON CONFLICT statements the services need.

PostgreSQL and SQLite expose the same ``on_conflict_do_nothing`` /
``on_conflict_do_update`` API on their own ``insert`` constructs.
"""
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

SUPPORTED_DIALECTS = tuple(_INSERTS)


def dialect_insert(db: Session, table):
    dialect = db.get_bind().dialect.name
    try:
        insert = _INSERTS[dialect]
    except KeyError:
        raise ValueError(
            f"Unsupported database dialect '{dialect}'; "
            f"DATABASE_URL must use one of: {', '.join(SUPPORTED_DIALECTS)}"
        ) from None
    return insert(table)
