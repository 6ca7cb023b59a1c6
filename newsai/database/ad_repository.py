"""
Ad banner repository - CRUD operations for promotional banners.
"""

import uuid

from .connection import DatabaseConnection
from .converters import row_to_ad_banner, to_timestamp, utcnow
from .models import DBAdBanner

UPDATABLE_COLUMNS = ("title", "image_url", "click_url", "position", "is_active")


class AdRepository:
    """Repository for ad banner operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(
        self,
        title: str,
        image_url: str,
        click_url: str,
        position: str,
        is_active: bool = True
    ) -> DBAdBanner:
        """Create a new ad banner."""
        ad_id = uuid.uuid4().hex
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO ad_banners (id, title, image_url, click_url, position, is_active, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (ad_id, title, image_url, click_url, position, is_active, to_timestamp(utcnow()))
            )
            row = conn.execute("SELECT * FROM ad_banners WHERE id = ?", (ad_id,)).fetchone()
            return row_to_ad_banner(row)

    def get(self, ad_id: str) -> DBAdBanner | None:
        """Get a single banner by ID, active or not."""
        with self._db.conn() as conn:
            row = conn.execute("SELECT * FROM ad_banners WHERE id = ?", (ad_id,)).fetchone()
            return row_to_ad_banner(row) if row else None

    def get_active(self, position: str | None = None) -> list[DBAdBanner]:
        """Get active banners, optionally for one position, newest first."""
        query = "SELECT * FROM ad_banners WHERE is_active = 1"
        params: list = []
        if position:
            query += " AND position = ?"
            params.append(position)
        query += " ORDER BY created_at DESC"

        with self._db.conn() as conn:
            rows = conn.execute(query, params).fetchall()
            return [row_to_ad_banner(row) for row in rows]

    def update(self, ad_id: str, **updates) -> DBAdBanner | None:
        """Partially update a banner. Returns None if it does not exist."""
        fields = {k: v for k, v in updates.items() if k in UPDATABLE_COLUMNS}
        with self._db.conn() as conn:
            if fields:
                assignments = ", ".join(f"{column} = ?" for column in fields)
                conn.execute(
                    f"UPDATE ad_banners SET {assignments} WHERE id = ?",
                    [*fields.values(), ad_id]
                )
            row = conn.execute("SELECT * FROM ad_banners WHERE id = ?", (ad_id,)).fetchone()
            return row_to_ad_banner(row) if row else None

    def delete(self, ad_id: str) -> bool:
        """Delete a banner. Returns False if it does not exist."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM ad_banners WHERE id = ?", (ad_id,))
            return cursor.rowcount > 0
