"""
Article repository - CRUD operations for articles.
"""

import uuid

from .connection import DatabaseConnection
from .converters import row_to_article, to_timestamp, utcnow
from .models import DBArticle, NewArticle

# Columns an admin may change through update()
UPDATABLE_COLUMNS = (
    "title", "content", "summary", "source", "category", "image_url",
    "original_url", "published_at", "read_time", "is_breaking", "is_hidden",
)


class ArticleRepository:
    """Repository for article operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(self, article: NewArticle) -> DBArticle:
        """Insert a new article and return the stored row."""
        article_id = uuid.uuid4().hex
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO articles
                   (id, title, content, summary, source, category, image_url, original_url,
                    published_at, read_time, is_breaking, is_hidden, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (article_id, article.title, article.content, article.summary,
                 article.source, article.category, article.image_url, article.original_url,
                 to_timestamp(article.published_at), article.read_time,
                 article.is_breaking, article.is_hidden, to_timestamp(utcnow()))
            )
            row = conn.execute(
                "SELECT * FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row)

    def get(self, article_id: str) -> DBArticle | None:
        """Get single article by ID."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row) if row else None

    def get_many(
        self,
        category: str | None = None,
        limit: int = 20,
        offset: int = 0,
        include_hidden: bool = False
    ) -> list[DBArticle]:
        """
        Get articles, newest first.

        "all" (or None) applies no category filter; "breaking" filters on the
        breaking flag rather than the category column.
        """
        query = "SELECT * FROM articles WHERE 1=1"
        params: list = []

        if not include_hidden:
            query += " AND is_hidden = 0"
        if category == "breaking":
            query += " AND is_breaking = 1"
        elif category and category != "all":
            query += " AND category = ?"
            params.append(category)

        query += " ORDER BY published_at DESC, created_at DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with self._db.conn() as conn:
            rows = conn.execute(query, params).fetchall()
            return [row_to_article(row) for row in rows]

    def get_breaking(self, limit: int = 5) -> list[DBArticle]:
        """Get the most recent visible breaking articles."""
        return self.get_many(category="breaking", limit=limit)

    def update(self, article_id: str, **updates) -> DBArticle | None:
        """Partially update an article. Returns the updated row or None if absent."""
        fields = {k: v for k, v in updates.items() if k in UPDATABLE_COLUMNS}
        if "published_at" in fields:
            fields["published_at"] = to_timestamp(fields["published_at"])

        with self._db.conn() as conn:
            if fields:
                assignments = ", ".join(f"{column} = ?" for column in fields)
                conn.execute(
                    f"UPDATE articles SET {assignments} WHERE id = ?",
                    [*fields.values(), article_id]
                )
            row = conn.execute(
                "SELECT * FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row) if row else None

    def hide(self, article_id: str) -> bool:
        """Soft-hide an article. Returns False if it does not exist."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "UPDATE articles SET is_hidden = 1 WHERE id = ?", (article_id,)
            )
            return cursor.rowcount > 0

    def delete(self, article_id: str) -> bool:
        """Hard-delete an article (saved and history rows cascade)."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
            return cursor.rowcount > 0
