from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.db.database import get_session
from app.schemas.post import PostPayload, PostResponse
from app.services.post import PostService
from typing import List

router = APIRouter()

def get_post_service(session: Session = Depends(get_session)) -> PostService:
    return PostService(session)

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="Create a new post")
def create_post(
    post: PostPayload,
    service: PostService = Depends(get_post_service)
):
    """Create a new post, creating any tags that do not exist yet"""
    return service.create(post)

@router.get("", response_model=List[PostResponse], summary="List all posts")
def list_posts(service: PostService = Depends(get_post_service)):
    return service.get_all()

# Fixed paths are registered before "/{post_id}" so they are not parsed as ids

@router.get("/published", response_model=List[PostResponse], summary="List published posts")
def list_published_posts(service: PostService = Depends(get_post_service)):
    """List published posts, newest first"""
    return service.get_published()

@router.get("/search", response_model=List[PostResponse], summary="Search posts by keyword")
def search_posts(
    keyword: str,
    service: PostService = Depends(get_post_service)
):
    """Search title, content and author for a substring, newest first"""
    return service.search(keyword)

@router.get("/tags", response_model=List[str], summary="List tag names in use")
def list_tag_names(service: PostService = Depends(get_post_service)):
    """Distinct names of tags attached to at least one post"""
    return service.get_all_tag_names()

@router.get("/author/name/{author}", response_model=List[PostResponse], summary="List posts by author")
def list_posts_by_author(
    author: str,
    service: PostService = Depends(get_post_service)
):
    return service.get_by_author(author)

@router.get("/tag/{tag}", response_model=List[PostResponse], summary="List posts with a tag")
def list_posts_by_tag(
    tag: str,
    service: PostService = Depends(get_post_service)
):
    return service.get_by_tag(tag)

@router.delete("/author/{author}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete all posts by an author")
def delete_posts_by_author(
    author: str,
    service: PostService = Depends(get_post_service)
):
    service.delete_by_author(author)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{post_id}", response_model=PostResponse, summary="Get a specific post")
def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    return service.get_by_id(post_id)

@router.put("/{post_id}", response_model=PostResponse, summary="Update a post, including title, content and tags of a post")
def update_post(
    post_id: int,
    post: PostPayload,
    service: PostService = Depends(get_post_service)
):
    """Update a post. Tags are replaced only when the payload carries a tag list"""
    return service.update(post_id, post)

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a post")
def delete_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    service.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.put("/{post_id}/publish", response_model=PostResponse, summary="Publish a post")
def publish_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    return service.publish(post_id)

@router.put("/{post_id}/unpublish", response_model=PostResponse, summary="Unpublish a post")
def unpublish_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    return service.unpublish(post_id)
