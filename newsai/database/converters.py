"""
Database row converters - convert SQLite rows to dataclasses.
"""

import json
import sqlite3
from datetime import datetime, timezone

from .models import (
    DEFAULT_NOTIFICATION_PREFERENCES,
    DBAdBanner,
    DBArticle,
    DBPushSubscription,
    DBReadingHistory,
    DBSavedArticle,
    DBSession,
    DBUser,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_timestamp(value: datetime) -> str:
    """Serialize a datetime for storage. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: str | None) -> datetime:
    """Parse a stored ISO timestamp, falling back to now for bad data."""
    if value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return utcnow()
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return utcnow()


def _parse_json(value: str | None) -> dict | None:
    if not value:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def row_to_article(row: sqlite3.Row, prefix: str = "") -> DBArticle:
    """
    Convert a database row to a DBArticle.

    Join queries alias article columns with a prefix (e.g. "a_") to keep them
    apart from the join table's own id column.
    """
    return DBArticle(
        id=row[f"{prefix}id"],
        title=row[f"{prefix}title"],
        content=row[f"{prefix}content"],
        summary=row[f"{prefix}summary"],
        source=row[f"{prefix}source"],
        category=row[f"{prefix}category"],
        image_url=row[f"{prefix}image_url"],
        original_url=row[f"{prefix}original_url"],
        published_at=parse_timestamp(row[f"{prefix}published_at"]),
        read_time=int(row[f"{prefix}read_time"]),
        is_breaking=bool(row[f"{prefix}is_breaking"]),
        is_hidden=bool(row[f"{prefix}is_hidden"]),
        created_at=parse_timestamp(row[f"{prefix}created_at"]),
    )


def row_to_saved_article(row: sqlite3.Row) -> DBSavedArticle:
    """Convert a database row to a DBSavedArticle."""
    return DBSavedArticle(
        id=row["id"],
        user_id=row["user_id"],
        article_id=row["article_id"],
        saved_at=parse_timestamp(row["saved_at"]),
    )


def row_to_reading_history(row: sqlite3.Row) -> DBReadingHistory:
    """Convert a database row to a DBReadingHistory."""
    return DBReadingHistory(
        id=row["id"],
        user_id=row["user_id"],
        article_id=row["article_id"],
        read_at=parse_timestamp(row["read_at"]),
    )


def row_to_user(row: sqlite3.Row) -> DBUser:
    """Convert a database row to a DBUser."""
    preferences = dict(DEFAULT_NOTIFICATION_PREFERENCES)
    preferences.update(_parse_json(row["notification_preferences"]) or {})

    return DBUser(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        is_admin=bool(row["is_admin"]),
        created_at=parse_timestamp(row["created_at"]),
        notification_preferences=preferences,
        push_subscription=_parse_json(row["push_subscription"]),
    )


def row_to_push_subscription(row: sqlite3.Row) -> DBPushSubscription:
    """Convert a database row to a DBPushSubscription."""
    return DBPushSubscription(
        id=row["id"],
        user_id=row["user_id"],
        endpoint=row["endpoint"],
        p256dh=row["p256dh"],
        auth=row["auth"],
        created_at=parse_timestamp(row["created_at"]),
    )


def row_to_ad_banner(row: sqlite3.Row) -> DBAdBanner:
    """Convert a database row to a DBAdBanner."""
    return DBAdBanner(
        id=row["id"],
        title=row["title"],
        image_url=row["image_url"],
        click_url=row["click_url"],
        position=row["position"],
        is_active=bool(row["is_active"]),
        created_at=parse_timestamp(row["created_at"]),
    )


def row_to_session(row: sqlite3.Row) -> DBSession:
    """Convert a database row to a DBSession."""
    return DBSession(
        sid=row["sid"],
        user_id=row["user_id"],
        expires_at=parse_timestamp(row["expires_at"]),
        created_at=parse_timestamp(row["created_at"]),
    )
