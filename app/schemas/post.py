from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, List

class PostBase(BaseModel):
    """Fields shared by post requests and responses"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    excerpt: Optional[str] = None
    content: str
    author: str
    is_published: bool = False

class PostPayload(PostBase):
    """Create/update request body.

    Server-managed fields may be echoed back by clients; they are accepted
    and ignored. Null or blank tag names are skipped.
    """
    id: Optional[int] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: Optional[List[Optional[str]]] = Field(default=None, description="Tag names")

class PostResponse(PostBase):
    """Post as returned by the API"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    tags: List[str] = Field(default_factory=list)
