"""
Repository for user operations.
"""

import json
import sqlite3
import uuid

from ..exceptions import DuplicateUsernameError
from .connection import DatabaseConnection
from .converters import row_to_user, to_timestamp, utcnow
from .models import DEFAULT_NOTIFICATION_PREFERENCES, DBUser


class UserRepository:
    """Repository for user CRUD operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def create(
        self,
        username: str,
        password_hash: str,
        is_admin: bool = False,
        user_id: str | None = None
    ) -> DBUser:
        """
        Create a new user.

        Args:
            username: Unique login name
            password_hash: bcrypt hash of the password
            is_admin: Grants access to admin routes
            user_id: Fixed ID (used for the provisioned admin user)

        Returns:
            The created user

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        user_id = user_id or uuid.uuid4().hex
        with self._db.conn() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO users (id, username, password, is_admin, notification_preferences, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, username, password_hash, is_admin,
                     json.dumps(DEFAULT_NOTIFICATION_PREFERENCES), to_timestamp(utcnow()))
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateUsernameError(username) from e
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return row_to_user(row)

    def get_by_id(self, user_id: str) -> DBUser | None:
        """Get user by ID."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (user_id,)
            )
            row = cursor.fetchone()
            return row_to_user(row) if row else None

    def get_by_username(self, username: str) -> DBUser | None:
        """Get user by username."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "SELECT * FROM users WHERE username = ?",
                (username,)
            )
            row = cursor.fetchone()
            return row_to_user(row) if row else None

    def ensure_admin(self, user_id: str, username: str, password_hash: str) -> DBUser:
        """
        Get or create the admin user record.

        The admin login checks fixed credentials, so the record only exists to
        carry the admin flag for session-based authorization.
        """
        existing = self.get_by_id(user_id)
        if existing:
            if not existing.is_admin:
                with self._db.conn() as conn:
                    conn.execute("UPDATE users SET is_admin = 1 WHERE id = ?", (user_id,))
                existing.is_admin = True
            return existing
        return self.create(username, password_hash, is_admin=True, user_id=user_id)

    def update_notification_preferences(self, user_id: str, preferences: dict) -> DBUser | None:
        """Replace a user's notification preferences."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE users SET notification_preferences = ? WHERE id = ?",
                (json.dumps(preferences), user_id)
            )
        return self.get_by_id(user_id)

    def set_push_subscription(self, user_id: str, subscription: dict | None):
        """Store the user's most recent push subscription payload."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE users SET push_subscription = ? WHERE id = ?",
                (json.dumps(subscription) if subscription is not None else None, user_id)
            )
