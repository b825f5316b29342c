"""
Comment endpoints.

All routes require a valid token.  A comment can be edited or removed
only by the user who wrote it.
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
from blog_api.app.schemas.comment import (
    CommentCreate,
    CommentCreated,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
    PostCommentsResponse,
)
from blog_api.app.schemas.validation import InvalidResult, json_payload, validate
from blog_api.app.services.comment_service import CommentService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=CommentCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
async def create_comment(
    payload: Any = Depends(json_payload),
    user_id: str = Depends(get_current_user_id),
) -> CommentCreated:
    """Create a comment on ``post_id``.

    Content is checked before the post id.  A post id that does not
    exist is rejected by the database and answered with 500.
    """
    result = validate(payload, CommentCreate)
    if isinstance(result, InvalidResult):
        logger.info("Comment payload rejected: %s", result.issues)
        raise ValidationFailedError("Invalid input")
    post_id = (result.data.post_id or "").strip()
    if not post_id:
        raise ValidationFailedError("post_id is required")
    try:
        comment_id = await CommentService.create_comment(post_id, result.data.content, user_id)
    except Exception as e:
        logger.exception("Failed to create comment on post %s", post_id)
        raise StoreError("Unable to create comment") from e
    return CommentCreated(message="Comment created", commentId=comment_id)


@router.get("", response_model=CommentListResponse, summary="List all comments")
async def list_comments(user_id: str = Depends(get_current_user_id)) -> CommentListResponse:
    try:
        comments = await CommentService.list_comments()
    except Exception as e:
        logger.exception("Failed to list comments")
        raise StoreError() from e
    return CommentListResponse(message="Got all comments", allComments=comments)


@router.get("/post/{post_id}", response_model=PostCommentsResponse, summary="List comments of a post")
async def list_post_comments(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
) -> PostCommentsResponse:
    try:
        comments = await CommentService.list_comments_for_post(post_id)
    except Exception as e:
        logger.exception("Failed to list comments for post %s", post_id)
        raise StoreError("Unable to fetch comments") from e
    return PostCommentsResponse(message="Got comments", comments=comments)


@router.put("/{comment_id}", response_model=CommentResponse, summary="Update a comment")
async def update_comment(
    comment_id: str,
    payload: Any = Depends(json_payload),
    user_id: str = Depends(get_current_user_id),
) -> CommentResponse:
    result = validate(payload, CommentUpdate)
    if isinstance(result, InvalidResult):
        logger.info("Comment update payload rejected: %s", result.issues)
        raise ValidationFailedError("Invalid input")
    try:
        author_id = await CommentService.get_author_id(comment_id)
        if author_id is None:
            raise NotFoundError("Comment not found")
        ensure_author(user_id, author_id)
        comment = await CommentService.update_comment(comment_id, result.data.content)
    except BlogAPIError:
        raise
    except Exception as e:
        logger.exception("Failed to update comment %s", comment_id)
        raise StoreError("Unable to update comment") from e
    return CommentResponse(message="Comment updated", comment=comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a comment")
async def delete_comment(comment_id: str, user_id: str = Depends(get_current_user_id)) -> Response:
    try:
        author_id = await CommentService.get_author_id(comment_id)
        if author_id is None:
            raise NotFoundError("Comment not found")
        ensure_author(user_id, author_id)
        await CommentService.delete_comment(comment_id)
    except BlogAPIError:
        raise
    except Exception as e:
        logger.exception("Failed to delete comment %s", comment_id)
        raise StoreError("Unable to delete comment") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
