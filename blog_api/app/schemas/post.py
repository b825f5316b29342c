"""
Pydantic schemas for posts.

Posts are written by one user and may be edited (title and/or
content) or deleted only by that user.  Read models embed the author
and, for list and detail views, the post's comments.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .comment import CommentWithAuthor
from .user import UserPublic


TITLE_MIN, TITLE_MAX = 3, 20
CONTENT_MIN = 3


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=TITLE_MIN, max_length=TITLE_MAX, examples=["Hello world"])
    content: str = Field(..., min_length=CONTENT_MIN, examples=["My first post."])


class PostUpdate(BaseModel):
    """Schema for a partial post update.

    At least one of ``title`` or ``content`` must be supplied.
    """

    title: Optional[str] = Field(None, min_length=TITLE_MIN, max_length=TITLE_MAX)
    content: Optional[str] = Field(None, min_length=CONTENT_MIN)

    @model_validator(mode="after")
    def require_one_field(self) -> "PostUpdate":
        if self.title is None and self.content is None:
            raise ValueError("At least one of title or content is required")
        return self

    def changes(self) -> dict:
        """Fields to write, skipping those not supplied."""
        return {key: value for key, value in (("title", self.title), ("content", self.content)) if value is not None}


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: str
    title: str
    content: str
    author_id: str
    created_at: str
    updated_at: str


class PostWithAuthor(PostRead):
    author: UserPublic


class PostDetail(PostWithAuthor):
    comments: List[CommentWithAuthor]


class PostCreated(BaseModel):
    message: str
    postId: str


class PostListResponse(BaseModel):
    message: str
    allPosts: List[PostDetail]


class PostDetailResponse(BaseModel):
    message: str
    post: PostDetail


class PostUpdatedResponse(BaseModel):
    message: str
    post: PostWithAuthor
