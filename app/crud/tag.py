from datetime import datetime, UTC
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.post_tag import post_tags
from app.models.tag import Tag

# dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def get_tag_by_name(db: Session, name: str) -> Optional[Tag]:
    return db.scalars(select(Tag).where(Tag.name == name)).first()


def get_or_create_tag(db: Session, name: str) -> Tag:
    """
    Return the tag called ``name``, inserting it first if it does not exist.

    The insert relies on the unique constraint on ``tags.name``, so two
    sessions racing on the same name still end up sharing one row.
    """
    now = datetime.now(UTC)
    dialect_insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)

    if dialect_insert is not None:
        stmt = dialect_insert(Tag.__table__).values(
            name=name, created_at=now, updated_at=now
        ).on_conflict_do_nothing(index_elements=["name"])
        db.execute(stmt)
        return db.scalars(select(Tag).where(Tag.name == name)).one()

    db_tag = get_tag_by_name(db, name)
    if db_tag:
        return db_tag

    try:
        with db.begin_nested():
            db_tag = Tag(name=name, created_at=now, updated_at=now)
            db.add(db_tag)
    except IntegrityError:
        db_tag = db.scalars(select(Tag).where(Tag.name == name)).one()
    return db_tag


def get_tag_names(db: Session) -> List[str]:
    """Distinct names of tags attached to at least one post."""
    stmt = (
        select(Tag.name)
        .join(post_tags, post_tags.c.tag_id == Tag.id)
        .distinct()
        .order_by(Tag.name)
    )
    return list(db.scalars(stmt).all())
