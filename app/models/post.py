from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from app.db.database import Base
from app.models.post_tag import post_tags
from app.models.tag import Tag
from datetime import datetime, UTC

class Post(Base):
    """Post model"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    excerpt = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    author = Column(String, nullable=False, index=True)  # free text, not a user reference
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)  # only set while published
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    # one Tag row per name, so the set holds each name once
    tags = relationship(Tag, secondary=post_tags, collection_class=set, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Post {self.id} {self.title!r}>"
