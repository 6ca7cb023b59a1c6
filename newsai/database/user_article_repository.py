"""
Repository for per-user article links: saved articles and reading history.
"""

import uuid
from datetime import datetime

from .connection import DatabaseConnection
from .converters import (
    parse_timestamp,
    row_to_article,
    row_to_reading_history,
    row_to_saved_article,
    to_timestamp,
    utcnow,
)
from .models import DBArticle, DBReadingHistory, DBSavedArticle

# Article columns aliased with an "a_" prefix for join queries
_ARTICLE_COLUMNS = ", ".join(
    f"a.{column} AS a_{column}"
    for column in (
        "id", "title", "content", "summary", "source", "category", "image_url",
        "original_url", "published_at", "read_time", "is_breaking", "is_hidden",
        "created_at",
    )
)


class UserArticleRepository:
    """Repository for saved-article and reading-history links."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    # --- Saved articles ---

    def get_saved(self, user_id: str) -> list[tuple[DBArticle, datetime]]:
        """Get a user's visible saved articles with their saved timestamp, newest first."""
        with self._db.conn() as conn:
            rows = conn.execute(
                f"""
                SELECT {_ARTICLE_COLUMNS}, s.saved_at
                FROM saved_articles s
                JOIN articles a ON a.id = s.article_id
                WHERE s.user_id = ? AND a.is_hidden = 0
                ORDER BY s.saved_at DESC
                """,
                (user_id,)
            ).fetchall()
            return [
                (row_to_article(row, prefix="a_"), parse_timestamp(row["saved_at"]))
                for row in rows
            ]

    def is_saved(self, user_id: str, article_id: str) -> bool:
        """Check whether a user already saved an article."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT 1 FROM saved_articles WHERE user_id = ? AND article_id = ?",
                (user_id, article_id)
            ).fetchone()
            return row is not None

    def save(self, user_id: str, article_id: str) -> DBSavedArticle:
        """Insert a saved-article link. Callers check is_saved() first."""
        saved_id = uuid.uuid4().hex
        with self._db.conn() as conn:
            conn.execute(
                """
                INSERT INTO saved_articles (id, article_id, user_id, saved_at)
                VALUES (?, ?, ?, ?)
                """,
                (saved_id, article_id, user_id, to_timestamp(utcnow()))
            )
            row = conn.execute(
                "SELECT * FROM saved_articles WHERE id = ?", (saved_id,)
            ).fetchone()
            return row_to_saved_article(row)

    def unsave(self, user_id: str, article_id: str) -> bool:
        """Remove a saved-article link. Returns False if nothing was saved."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "DELETE FROM saved_articles WHERE user_id = ? AND article_id = ?",
                (user_id, article_id)
            )
            return cursor.rowcount > 0

    # --- Reading history ---

    def get_history(
        self,
        user_id: str,
        limit: int = 50
    ) -> list[tuple[DBArticle, datetime]]:
        """Get a user's visible reading history, most recently read first."""
        with self._db.conn() as conn:
            rows = conn.execute(
                f"""
                SELECT {_ARTICLE_COLUMNS}, h.read_at
                FROM reading_history h
                JOIN articles a ON a.id = h.article_id
                WHERE h.user_id = ? AND a.is_hidden = 0
                ORDER BY h.read_at DESC
                LIMIT ?
                """,
                (user_id, limit)
            ).fetchall()
            return [
                (row_to_article(row, prefix="a_"), parse_timestamp(row["read_at"]))
                for row in rows
            ]

    def touch_history(self, user_id: str, article_id: str) -> DBReadingHistory:
        """
        Record that a user read an article.

        Re-reading updates read_at on the existing row instead of adding one.
        """
        read_at = to_timestamp(utcnow())
        with self._db.conn() as conn:
            existing = conn.execute(
                "SELECT id FROM reading_history WHERE user_id = ? AND article_id = ?",
                (user_id, article_id)
            ).fetchone()

            if existing:
                history_id = existing["id"]
                conn.execute(
                    "UPDATE reading_history SET read_at = ? WHERE id = ?",
                    (read_at, history_id)
                )
            else:
                history_id = uuid.uuid4().hex
                conn.execute(
                    """
                    INSERT INTO reading_history (id, article_id, user_id, read_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (history_id, article_id, user_id, read_at)
                )

            row = conn.execute(
                "SELECT * FROM reading_history WHERE id = ?", (history_id,)
            ).fetchone()
            return row_to_reading_history(row)

    def clear_history(self, user_id: str) -> bool:
        """Delete all history for a user. Returns True if anything was removed."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "DELETE FROM reading_history WHERE user_id = ?", (user_id,)
            )
            return cursor.rowcount > 0

