"""
Business logic for posts.

Posts are stored in the ``posts`` table.  Read operations embed the
author (id, username, e‑mail) and, for list and detail views, the
post's comments with their authors.  Deleting a post removes its
comments through ``ON DELETE CASCADE``.
"""

import logging
import sqlite3
import uuid
from typing import Dict, List, Optional

from ..core.db import get_connection, utcnow
from ..core.exceptions import NotFoundError
from ..schemas.post import PostDetail, PostWithAuthor
from ..schemas.user import UserPublic
from .comment_service import comments_by_post


logger = logging.getLogger(__name__)

_POST_SELECT = (
    "SELECT p.id, p.title, p.content, p.author_id, p.created_at, p.updated_at, "
    "u.username, u.email "
    "FROM posts p JOIN users u ON u.id = p.author_id"
)


def _row_to_post(row: sqlite3.Row) -> PostWithAuthor:
    return PostWithAuthor(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        author_id=row["author_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        author=UserPublic(id=row["author_id"], username=row["username"], email=row["email"]),
    )


class PostService:
    """Persistence operations for posts."""

    @classmethod
    async def create_post(cls, author_id: str, title: str, content: str) -> str:
        """Insert a post and return its id."""
        post_id = str(uuid.uuid4())
        now = utcnow()
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO posts (id, title, content, author_id, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (post_id, title, content, author_id, now, now),
            )
            conn.commit()
            logger.info("User %s created post %s", author_id, post_id)
            return post_id
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to create post for user %s: %s", author_id, e)
            raise
        finally:
            conn.close()

    @classmethod
    async def list_posts(cls) -> List[PostDetail]:
        """Return all posts, newest first, with authors and comments."""
        conn = get_connection()
        try:
            rows = conn.execute(f"{_POST_SELECT} ORDER BY p.created_at DESC, p.rowid DESC").fetchall()
            posts = [_row_to_post(row) for row in rows]
            comments = comments_by_post(conn, [post.id for post in posts])
            return [PostDetail(**post.model_dump(), comments=comments[post.id]) for post in posts]
        finally:
            conn.close()

    @classmethod
    async def get_post(cls, post_id: str) -> Optional[PostDetail]:
        """Return one post with its author and comments (newest first)."""
        conn = get_connection()
        try:
            row = conn.execute(f"{_POST_SELECT} WHERE p.id = ?", (post_id,)).fetchone()
            if not row:
                return None
            post = _row_to_post(row)
            return PostDetail(**post.model_dump(), comments=comments_by_post(conn, [post_id])[post_id])
        finally:
            conn.close()

    @classmethod
    async def get_author_id(cls, post_id: str) -> Optional[str]:
        """Return the author of a post, or ``None`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT author_id FROM posts WHERE id = ?", (post_id,)).fetchone()
            return row["author_id"] if row else None
        finally:
            conn.close()

    @classmethod
    async def update_post(cls, post_id: str, changes: Dict[str, str]) -> PostWithAuthor:
        """Apply a partial update and return the post with its author.

        Only ``title`` and ``content`` may change.  Raises
        ``NotFoundError`` if the post disappeared after the ownership
        check.
        """
        fields = {key: value for key, value in changes.items() if key in ("title", "content")}
        if not fields:
            raise ValueError("No updatable fields supplied")
        assignments = ", ".join(f"{key} = ?" for key in fields)
        conn = get_connection()
        try:
            cursor = conn.execute(
                f"UPDATE posts SET {assignments}, updated_at = ? WHERE id = ?",
                (*fields.values(), utcnow(), post_id),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError("Post not found")
            conn.commit()
            row = conn.execute(f"{_POST_SELECT} WHERE p.id = ?", (post_id,)).fetchone()
            if not row:
                raise NotFoundError("Post not found")
            logger.info("Updated post %s (%s)", post_id, ", ".join(fields))
            return _row_to_post(row)
        finally:
            conn.close()

    @classmethod
    async def delete_post(cls, post_id: str) -> None:
        """Delete a post together with its comments."""
        conn = get_connection()
        try:
            cursor = conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError("Post not found")
            conn.commit()
            logger.info("Deleted post %s", post_id)
        finally:
            conn.close()
