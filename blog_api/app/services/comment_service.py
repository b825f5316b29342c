"""
Business logic for comments.

Comments are stored in the ``comments`` table and always reference an
existing post and author (enforced by foreign keys).  Listings are
ordered newest first.  Ownership is checked by the endpoints using the
``author_id`` projection returned by ``get_author_id`` before
``update_comment`` or ``delete_comment`` is called.
"""

import logging
import sqlite3
import uuid
from typing import Dict, Iterable, List, Optional

from ..core.db import get_connection, utcnow
from ..core.exceptions import NotFoundError
from ..schemas.comment import CommentListItem, CommentRead, CommentWithAuthor
from ..schemas.user import UserPublic, UserSummary


logger = logging.getLogger(__name__)

_COMMENT_COLUMNS = "c.id, c.content, c.post_id, c.author_id, c.created_at, c.updated_at"
_NEWEST_FIRST = "ORDER BY c.created_at DESC, c.rowid DESC"


def _row_to_comment(row: sqlite3.Row) -> CommentRead:
    return CommentRead(
        id=row["id"],
        content=row["content"],
        post_id=row["post_id"],
        author_id=row["author_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_comment_with_author(row: sqlite3.Row) -> CommentWithAuthor:
    return CommentWithAuthor(
        **_row_to_comment(row).model_dump(),
        author=UserPublic(id=row["author_id"], username=row["username"], email=row["email"]),
    )


def comments_by_post(conn: sqlite3.Connection, post_ids: Iterable[str]) -> Dict[str, List[CommentWithAuthor]]:
    """Load comments (with authors) for several posts in one query.

    Returns a mapping from post id to its comments, newest first.
    Posts without comments map to an empty list.
    """
    ids = list(post_ids)
    grouped: Dict[str, List[CommentWithAuthor]] = {post_id: [] for post_id in ids}
    if not ids:
        return grouped
    placeholders = ", ".join("?" for _ in ids)
    rows = conn.execute(
        f"SELECT {_COMMENT_COLUMNS}, u.username, u.email "
        "FROM comments c JOIN users u ON u.id = c.author_id "
        f"WHERE c.post_id IN ({placeholders}) {_NEWEST_FIRST}",
        tuple(ids),
    ).fetchall()
    for row in rows:
        grouped[row["post_id"]].append(_row_to_comment_with_author(row))
    return grouped


class CommentService:
    """Persistence operations for comments."""

    @classmethod
    async def create_comment(cls, post_id: str, content: str, author_id: str) -> str:
        """Insert a comment and return its id.

        A ``post_id`` that does not reference an existing post violates
        the foreign key and raises ``sqlite3.IntegrityError``.
        """
        comment_id = str(uuid.uuid4())
        now = utcnow()
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO comments (id, content, post_id, author_id, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (comment_id, content, post_id, author_id, now, now),
            )
            conn.commit()
            logger.info("User %s commented %s on post %s", author_id, comment_id, post_id)
            return comment_id
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to create comment on post %s: %s", post_id, e)
            raise
        finally:
            conn.close()

    @classmethod
    async def list_comments(cls) -> List[CommentListItem]:
        """Return every comment, newest first, with author id and username."""
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_COMMENT_COLUMNS}, u.username "
                f"FROM comments c JOIN users u ON u.id = c.author_id {_NEWEST_FIRST}"
            ).fetchall()
            return [
                CommentListItem(
                    **_row_to_comment(row).model_dump(),
                    author=UserSummary(id=row["author_id"], username=row["username"]),
                )
                for row in rows
            ]
        finally:
            conn.close()

    @classmethod
    async def list_comments_for_post(cls, post_id: str) -> List[CommentWithAuthor]:
        """Return the comments of one post, newest first.

        An unknown ``post_id`` yields an empty list.
        """
        conn = get_connection()
        try:
            return comments_by_post(conn, [post_id])[post_id]
        finally:
            conn.close()

    @classmethod
    async def get_author_id(cls, comment_id: str) -> Optional[str]:
        """Return the author of a comment, or ``None`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT author_id FROM comments WHERE id = ?",
                (comment_id,),
            ).fetchone()
            return row["author_id"] if row else None
        finally:
            conn.close()

    @classmethod
    async def update_comment(cls, comment_id: str, content: str) -> CommentRead:
        """Replace a comment's content and return the updated row.

        Raises ``NotFoundError`` if the comment disappeared after the
        ownership check.
        """
        conn = get_connection()
        try:
            cursor = conn.execute(
                "UPDATE comments SET content = ?, updated_at = ? WHERE id = ?",
                (content, utcnow(), comment_id),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError("Comment not found")
            conn.commit()
            row = conn.execute(
                f"SELECT {_COMMENT_COLUMNS} FROM comments c WHERE c.id = ?",
                (comment_id,),
            ).fetchone()
            if not row:
                raise NotFoundError("Comment not found")
            return _row_to_comment(row)
        finally:
            conn.close()

    @classmethod
    async def delete_comment(cls, comment_id: str) -> None:
        conn = get_connection()
        try:
            cursor = conn.execute("DELETE FROM comments WHERE id = ?", (comment_id,))
            if cursor.rowcount == 0:
                conn.rollback()
                raise NotFoundError("Comment not found")
            conn.commit()
            logger.info("Deleted comment %s", comment_id)
        finally:
            conn.close()
