"""
Session repository - server-side login sessions.
"""

from datetime import timedelta

from .connection import DatabaseConnection
from .converters import row_to_session, to_timestamp, utcnow
from .models import DBSession


class SessionRepository:
    """Repository for session records keyed by an opaque session id."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def create(self, sid: str, user_id: str, max_age: int) -> DBSession:
        """Create a session that expires max_age seconds from now."""
        now = utcnow()
        expires_at = now + timedelta(seconds=max_age)
        with self._db.conn() as conn:
            conn.execute(
                "INSERT INTO sessions (sid, user_id, expires_at, created_at) VALUES (?, ?, ?, ?)",
                (sid, user_id, to_timestamp(expires_at), to_timestamp(now))
            )
        return DBSession(sid=sid, user_id=user_id, expires_at=expires_at, created_at=now)

    def get(self, sid: str) -> DBSession | None:
        """Get a live session. Expired sessions are deleted and reported as absent."""
        with self._db.conn() as conn:
            row = conn.execute("SELECT * FROM sessions WHERE sid = ?", (sid,)).fetchone()
            if not row:
                return None
            session = row_to_session(row)
            if session.expires_at <= utcnow():
                conn.execute("DELETE FROM sessions WHERE sid = ?", (sid,))
                return None
            return session

    def delete(self, sid: str) -> bool:
        """Destroy a session."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM sessions WHERE sid = ?", (sid,))
            return cursor.rowcount > 0

    def purge_expired(self) -> int:
        """Delete all expired sessions. Returns count removed."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "DELETE FROM sessions WHERE expires_at <= ?", (to_timestamp(utcnow()),)
            )
            return cursor.rowcount
