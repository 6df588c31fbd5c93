import logging
from datetime import datetime, UTC
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from app.core.exceptions import PostNotFoundError
from app.crud import post as post_crud
from app.crud import tag as tag_crud
from app.models.post import Post
from app.models.tag import Tag
from app.schemas.post import PostPayload, PostResponse

logger = logging.getLogger(__name__)


def post_to_response(post: Post) -> PostResponse:
    """Project a Post entity onto the public response model."""
    return PostResponse(
        id=post.id,
        title=post.title,
        excerpt=post.excerpt,
        content=post.content,
        author=post.author,
        is_published=post.is_published,
        published_at=post.published_at,
        created_at=post.created_at,
        updated_at=post.updated_at,
        tags=sorted(tag.name for tag in post.tags),
    )


class PostService:
    """Post use cases on top of the crud layer"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, payload: PostPayload) -> PostResponse:
        logger.info("Creating post with title: %s", payload.title)

        now = datetime.now(UTC)
        post = Post(
            title=payload.title,
            excerpt=payload.excerpt,
            content=payload.content,
            author=payload.author,
            is_published=payload.is_published,
            created_at=now,
            updated_at=now,
        )
        if payload.is_published:
            post.published_at = now
        if payload.tags:
            post.tags = self._resolve_tags(payload.tags)

        saved = post_crud.save_post(self.session, post)
        logger.debug("Created post with id: %s", saved.id)
        return post_to_response(saved)

    def get_by_id(self, post_id: int) -> PostResponse:
        logger.info("Fetching post with id: %s", post_id)
        return post_to_response(self._get_or_raise(post_id))

    def get_all(self) -> List[PostResponse]:
        logger.info("Fetching all posts")
        posts = post_crud.get_posts(self.session)
        logger.debug("Fetched %d posts", len(posts))
        return [post_to_response(post) for post in posts]

    def get_by_author(self, author: str) -> List[PostResponse]:
        logger.info("Fetching posts by author: %s", author)
        posts = post_crud.get_posts_by_author(self.session, author)
        logger.debug("Fetched %d posts by author %s", len(posts), author)
        return [post_to_response(post) for post in posts]

    def get_published(self) -> List[PostResponse]:
        logger.info("Fetching published posts")
        posts = post_crud.get_published_posts(self.session)
        logger.debug("Fetched %d published posts", len(posts))
        return [post_to_response(post) for post in posts]

    def get_by_tag(self, tag_name: str) -> List[PostResponse]:
        logger.info("Fetching posts with tag: %s", tag_name)
        posts = post_crud.get_posts_by_tag(self.session, tag_name)
        logger.debug("Fetched %d posts with tag %s", len(posts), tag_name)
        return [post_to_response(post) for post in posts]

    def search(self, keyword: str) -> List[PostResponse]:
        logger.info("Searching posts with keyword: %s", keyword)
        posts = post_crud.search_posts(self.session, keyword)
        logger.debug("Found %d posts with keyword %s", len(posts), keyword)
        return [post_to_response(post) for post in posts]

    def get_all_tag_names(self) -> List[str]:
        logger.info("Fetching all tags")
        return tag_crud.get_tag_names(self.session)

    def update(self, post_id: int, payload: PostPayload) -> PostResponse:
        logger.info("Updating post with id: %s", post_id)
        post = self._get_or_raise(post_id, action="update")

        post.title = payload.title
        post.excerpt = payload.excerpt
        post.content = payload.content
        post.author = payload.author
        # published_at belongs to publish()/unpublish()
        post.is_published = payload.is_published

        if payload.tags is not None:
            post.tags = self._resolve_tags(payload.tags)

        post.updated_at = datetime.now(UTC)
        updated = post_crud.save_post(self.session, post)
        logger.debug("Updated post with id: %s", updated.id)
        return post_to_response(updated)

    def delete(self, post_id: int) -> None:
        logger.info("Deleting post with id: %s", post_id)
        if not post_crud.post_exists(self.session, post_id):
            logger.warning("Cannot delete, post not found with id: %s", post_id)
            raise PostNotFoundError(post_id)

        post_crud.delete_post(self.session, post_id)
        logger.debug("Deleted post with id: %s", post_id)

    def delete_by_author(self, author: str) -> int:
        logger.warning("Deleting all posts by author: %s", author)
        posts = post_crud.get_posts_by_author(self.session, author)
        post_crud.delete_posts(self.session, posts)
        logger.debug("Deleted %d posts by author %s", len(posts), author)
        return len(posts)

    def publish(self, post_id: int) -> PostResponse:
        logger.info("Publishing post with id: %s", post_id)
        post = self._get_or_raise(post_id, action="publish")

        now = datetime.now(UTC)
        post.is_published = True
        post.published_at = now
        post.updated_at = now
        published = post_crud.save_post(self.session, post)
        logger.debug("Published post with id: %s", published.id)
        return post_to_response(published)

    def unpublish(self, post_id: int) -> PostResponse:
        logger.info("Unpublishing post with id: %s", post_id)
        post = self._get_or_raise(post_id, action="unpublish")

        post.is_published = False
        post.published_at = None
        post.updated_at = datetime.now(UTC)
        unpublished = post_crud.save_post(self.session, post)
        logger.debug("Unpublished post with id: %s", unpublished.id)
        return post_to_response(unpublished)

    def _get_or_raise(self, post_id: int, action: Optional[str] = None) -> Post:
        post = post_crud.get_post(self.session, post_id)
        if post is None:
            if action:
                logger.warning("Cannot %s, post not found with id: %s", action, post_id)
            else:
                logger.warning("Post not found with id: %s", post_id)
            raise PostNotFoundError(post_id)
        return post

    def _resolve_tags(self, names: Iterable[Optional[str]]) -> Set[Tag]:
        """Get-or-create a tag per non-blank name, one entry per distinct name."""
        tags = {}
        for name in names:
            if not name or not name.strip():
                continue
            name = name.strip()
            if name not in tags:
                logger.debug("Fetching or creating tag: %s", name)
                tags[name] = tag_crud.get_or_create_tag(self.session, name)
        return set(tags.values())
