from typing import List

from sqlalchemy.orm import Session

from app.db.upsert import dialect_insert
from app.modules.posts.categories.models.category import Category

def normalize_category_name(name: str) -> str:
    return (name or "").strip()

def ensure_category(db: Session, name: str) -> int:
    """
    Get-or-create a category by its unique name and return its id.
    Runs inside the caller's transaction; concurrent creators of the same
    name both end up with the single surviving row.
    """
    stmt = (
        dialect_insert(db, Category.__table__)
        .values(name=name)
        .on_conflict_do_nothing(index_elements=["name"])
    )
    db.execute(stmt)
    return db.query(Category.id).filter(Category.name == name).scalar()

def get_categories(db: Session) -> List[Category]:
    """Get all categories, alphabetical"""
    return db.query(Category).order_by(Category.name).all()
