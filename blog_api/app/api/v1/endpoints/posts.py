"""
Post endpoints.

Every route requires a valid token.  Posts can be read by any
authenticated user; updates and deletes are only allowed for the
post's author.  Store failures are logged and answered with 500.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status

from blog_api.app.core.exceptions import (
    BlogAPIError,
    NotFoundError,
    StoreError,
    ValidationFailedError,
)
from blog_api.app.core.security import ensure_author, get_current_user_id
from blog_api.app.schemas.post import (
    PostCreate,
    PostCreated,
    PostDetailResponse,
    PostListResponse,
    PostUpdate,
    PostUpdatedResponse,
)
from blog_api.app.schemas.validation import InvalidResult, json_payload, validate
from blog_api.app.services.post_service import PostService


logger = logging.getLogger(__name__)

router = APIRouter()


def _require_post_id(post_id: str) -> str:
    post_id = post_id.strip()
    if not post_id:
        raise ValidationFailedError("Post ID is required")
    return post_id


@router.post("", response_model=PostCreated, summary="Create a post")
async def create_post(
    payload: Any = Depends(json_payload),
    user_id: str = Depends(get_current_user_id),
) -> PostCreated:
    result = validate(payload, PostCreate)
    if isinstance(result, InvalidResult):
        logger.info("Post payload rejected: %s", result.issues)
        raise ValidationFailedError("Validation failed")
    try:
        post_id = await PostService.create_post(user_id, result.data.title, result.data.content)
    except Exception as e:
        logger.exception("Failed to create post")
        raise StoreError("Unable to create post") from e
    return PostCreated(message="Post created", postId=post_id)


@router.get("", response_model=PostListResponse, summary="List posts")
async def list_posts(user_id: str = Depends(get_current_user_id)) -> PostListResponse:
    """Return all posts newest first, each with its author and comments."""
    try:
        posts = await PostService.list_posts()
    except Exception as e:
        logger.exception("Failed to list posts")
        raise StoreError("Error from server, not able to get posts") from e
    return PostListResponse(message="Got all posts", allPosts=posts)


@router.get("/{post_id}", response_model=PostDetailResponse, summary="Get a single post")
async def get_post(post_id: str, user_id: str = Depends(get_current_user_id)) -> PostDetailResponse:
    post_id = _require_post_id(post_id)
    try:
        post = await PostService.get_post(post_id)
    except Exception as e:
        logger.exception("Failed to fetch post %s", post_id)
        raise StoreError("Error from server, not able to get the post") from e
    if post is None:
        raise NotFoundError("Post not found")
    return PostDetailResponse(message="Got the single post", post=post)


@router.put("/{post_id}", response_model=PostUpdatedResponse, summary="Update a post")
async def update_post(
    post_id: str,
    payload: Any = Depends(json_payload),
    user_id: str = Depends(get_current_user_id),
) -> PostUpdatedResponse:
    """Change the title and/or content of a post the caller wrote."""
    post_id = _require_post_id(post_id)
    result = validate(payload, PostUpdate)
    if isinstance(result, InvalidResult):
        logger.info("Post update payload rejected: %s", result.issues)
        raise ValidationFailedError("Incorrect input")
    try:
        author_id = await PostService.get_author_id(post_id)
        if author_id is None:
            raise NotFoundError("Post not found")
        ensure_author(user_id, author_id)
        post = await PostService.update_post(post_id, result.data.changes())
    except BlogAPIError:
        raise
    except Exception as e:
        logger.exception("Failed to update post %s", post_id)
        raise StoreError() from e
    return PostUpdatedResponse(message="Post updated", post=post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a post")
async def delete_post(post_id: str, user_id: str = Depends(get_current_user_id)) -> Response:
    """Delete a post the caller wrote, along with its comments."""
    post_id = _require_post_id(post_id)
    try:
        author_id = await PostService.get_author_id(post_id)
        if author_id is None:
            raise NotFoundError("Post not found")
        ensure_author(user_id, author_id)
        await PostService.delete_post(post_id)
    except BlogAPIError:
        raise
    except Exception as e:
        logger.exception("Failed to delete post %s", post_id)
        raise StoreError() from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
