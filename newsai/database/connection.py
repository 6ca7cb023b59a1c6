"""
Database connection management and schema initialization.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class DatabaseConnection:
    """Manages database connection and schema."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def conn(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with row factory."""
        connection = sqlite3.connect(self.db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _init_schema(self):
        """Initialize database schema."""
        with self.conn() as connection:
            connection.executescript("""
                CREATE TABLE IF NOT EXISTS articles (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    summary TEXT NOT NULL,
                    source TEXT NOT NULL,
                    category TEXT NOT NULL,
                    image_url TEXT,
                    original_url TEXT NOT NULL,
                    published_at TIMESTAMP NOT NULL,
                    read_time INTEGER NOT NULL DEFAULT 3,
                    is_breaking BOOLEAN NOT NULL DEFAULT FALSE,
                    is_hidden BOOLEAN NOT NULL DEFAULT FALSE,
                    created_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    username TEXT UNIQUE NOT NULL,
                    password TEXT NOT NULL,
                    is_admin BOOLEAN NOT NULL DEFAULT FALSE,
                    notification_preferences TEXT,
                    push_subscription TEXT,
                    created_at TIMESTAMP NOT NULL
                );

                -- Uniqueness per (user, article) is checked by the caller before insert
                CREATE TABLE IF NOT EXISTS saved_articles (
                    id TEXT PRIMARY KEY,
                    article_id TEXT NOT NULL REFERENCES articles(id) ON DELETE CASCADE,
                    user_id TEXT NOT NULL,
                    saved_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS reading_history (
                    id TEXT PRIMARY KEY,
                    article_id TEXT NOT NULL REFERENCES articles(id) ON DELETE CASCADE,
                    user_id TEXT NOT NULL,
                    read_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS push_subscriptions (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    endpoint TEXT NOT NULL,
                    p256dh TEXT NOT NULL,
                    auth TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS ad_banners (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    image_url TEXT NOT NULL,
                    click_url TEXT NOT NULL,
                    position TEXT NOT NULL CHECK(position IN ('top', 'middle', 'bottom')),
                    is_active BOOLEAN NOT NULL DEFAULT TRUE,
                    created_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS sessions (
                    sid TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    expires_at TIMESTAMP NOT NULL,
                    created_at TIMESTAMP NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_articles_published ON articles(published_at DESC);
                CREATE INDEX IF NOT EXISTS idx_articles_category ON articles(category, is_hidden, published_at DESC);
                CREATE INDEX IF NOT EXISTS idx_articles_breaking ON articles(is_breaking, is_hidden, published_at DESC);
                CREATE INDEX IF NOT EXISTS idx_saved_user ON saved_articles(user_id, saved_at DESC);
                CREATE INDEX IF NOT EXISTS idx_history_user ON reading_history(user_id, read_at DESC);
                CREATE INDEX IF NOT EXISTS idx_push_user ON push_subscriptions(user_id, endpoint);
                CREATE INDEX IF NOT EXISTS idx_ads_position ON ad_banners(position, is_active);
                CREATE INDEX IF NOT EXISTS idx_sessions_expire ON sessions(expires_at);
            """)
