"""
Notification repository - Web Push subscription storage.
"""

import uuid

from .connection import DatabaseConnection
from .converters import row_to_push_subscription, to_timestamp, utcnow
from .models import DBPushSubscription


class NotificationRepository:
    """Repository for push subscription operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def save_subscription(
        self,
        user_id: str,
        endpoint: str,
        p256dh: str,
        auth: str
    ) -> DBPushSubscription:
        """
        Register a push subscription.

        Any existing subscription for the same (user, endpoint) is replaced.
        """
        subscription_id = uuid.uuid4().hex
        with self._db.conn() as conn:
            conn.execute(
                "DELETE FROM push_subscriptions WHERE user_id = ? AND endpoint = ?",
                (user_id, endpoint)
            )
            conn.execute(
                """INSERT INTO push_subscriptions (id, user_id, endpoint, p256dh, auth, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (subscription_id, user_id, endpoint, p256dh, auth, to_timestamp(utcnow()))
            )
            row = conn.execute(
                "SELECT * FROM push_subscriptions WHERE id = ?", (subscription_id,)
            ).fetchone()
            return row_to_push_subscription(row)

    def get_subscriptions(self, user_id: str | None = None) -> list[DBPushSubscription]:
        """Get push subscriptions, optionally for a single user."""
        with self._db.conn() as conn:
            query = "SELECT * FROM push_subscriptions"
            params: tuple = ()
            if user_id is not None:
                query += " WHERE user_id = ?"
                params = (user_id,)
            query += " ORDER BY created_at DESC"
            rows = conn.execute(query, params).fetchall()
            return [row_to_push_subscription(row) for row in rows]

    def delete_subscription(self, user_id: str, endpoint: str) -> bool:
        """Delete a subscription. Returns False if none matched."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "DELETE FROM push_subscriptions WHERE user_id = ? AND endpoint = ?",
                (user_id, endpoint)
            )
            return cursor.rowcount > 0
