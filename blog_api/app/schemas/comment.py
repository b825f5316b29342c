"""
Pydantic schemas for comments.

A comment belongs to exactly one post and one author.  Only its
``content`` can change after creation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .user import UserPublic, UserSummary


CONTENT_MIN, CONTENT_MAX = 3, 500


class CommentCreate(BaseModel):
    """Schema for creating a comment.

    ``post_id`` is optional at the schema level so that a missing post
    id can be reported separately from a bad ``content``.
    """

    content: str = Field(..., min_length=CONTENT_MIN, max_length=CONTENT_MAX)
    post_id: Optional[str] = Field(None, description="Identifier of the post being commented on")


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=CONTENT_MIN, max_length=CONTENT_MAX)


class CommentRead(BaseModel):
    """Schema for reading a comment from the API."""

    id: str
    content: str
    post_id: str
    author_id: str
    created_at: str
    updated_at: str


class CommentWithAuthor(CommentRead):
    author: UserPublic


class CommentListItem(CommentRead):
    author: UserSummary


class CommentCreated(BaseModel):
    message: str
    commentId: str


class CommentListResponse(BaseModel):
    message: str
    allComments: List[CommentListItem]


class PostCommentsResponse(BaseModel):
    message: str
    comments: List[CommentWithAuthor]


class CommentResponse(BaseModel):
    message: str
    comment: CommentRead
