from typing import Iterable, List, Optional
from sqlalchemy import exists, or_, select
from sqlalchemy.orm import Session

from app.models.post import Post
from app.models.tag import Tag

# newest first; id breaks ties between posts created in the same instant
NEWEST_FIRST = (Post.created_at.desc(), Post.id.desc())


def get_post(db: Session, post_id: int) -> Optional[Post]:
    return db.get(Post, post_id)


def post_exists(db: Session, post_id: int) -> bool:
    return db.scalar(select(exists().where(Post.id == post_id)))


def save_post(db: Session, post: Post) -> Post:
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: int) -> None:
    db_post = get_post(db, post_id)
    if db_post is not None:
        db.delete(db_post)
        db.commit()


def delete_posts(db: Session, posts: Iterable[Post]) -> None:
    for post in posts:
        db.delete(post)
    db.commit()


def get_posts(db: Session) -> List[Post]:
    return list(db.scalars(select(Post)).all())


def get_posts_by_author(db: Session, author: str) -> List[Post]:
    stmt = select(Post).where(Post.author == author).order_by(*NEWEST_FIRST)
    return list(db.scalars(stmt).all())


def get_published_posts(db: Session) -> List[Post]:
    stmt = select(Post).where(Post.is_published.is_(True)).order_by(*NEWEST_FIRST)
    return list(db.scalars(stmt).all())


def get_posts_by_tag(db: Session, tag_name: str) -> List[Post]:
    stmt = (
        select(Post)
        .where(Post.tags.any(Tag.name == tag_name))
        .order_by(*NEWEST_FIRST)
    )
    return list(db.scalars(stmt).all())


def search_posts(db: Session, keyword: str) -> List[Post]:
    """Posts whose title, content or author contains ``keyword``."""
    stmt = (
        select(Post)
        .where(
            or_(
                Post.title.contains(keyword, autoescape=True),
                Post.content.contains(keyword, autoescape=True),
                Post.author.contains(keyword, autoescape=True),
            )
        )
        .order_by(*NEWEST_FIRST)
    )
    return list(db.scalars(stmt).all())
