"""
Database facade - provides unified access to all repositories.

Implements the Storage interface on top of SQLite, delegating to one
repository per entity.
"""

from datetime import datetime
from pathlib import Path

from .ad_repository import AdRepository
from .article_repository import ArticleRepository
from .connection import DatabaseConnection
from .models import (
    DBAdBanner,
    DBArticle,
    DBPushSubscription,
    DBReadingHistory,
    DBSavedArticle,
    DBSession,
    DBUser,
    NewArticle,
)
from .notification_repository import NotificationRepository
from .session_repository import SessionRepository
from .user_article_repository import UserArticleRepository
from .user_repository import UserRepository


class Database:
    """Unified database access facade."""

    def __init__(self, db_path: Path):
        self._connection = DatabaseConnection(db_path)

        # Initialize repositories
        self.articles = ArticleRepository(self._connection)
        self.user_articles = UserArticleRepository(self._connection)
        self.users = UserRepository(self._connection)
        self.notifications = NotificationRepository(self._connection)
        self.ads = AdRepository(self._connection)
        self.sessions = SessionRepository(self._connection)

    # ─────────────────────────────────────────────────────────────
    # Article operations (delegated to ArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def create_article(self, article: NewArticle) -> DBArticle:
        return self.articles.add(article)

    def get_article(self, article_id: str) -> DBArticle | None:
        return self.articles.get(article_id)

    def get_articles(
        self,
        category: str | None = None,
        limit: int = 20,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> list[DBArticle]:
        return self.articles.get_many(category, limit, offset, include_hidden)

    def get_breaking_news(self, limit: int = 5) -> list[DBArticle]:
        return self.articles.get_breaking(limit)

    def update_article(self, article_id: str, **updates) -> DBArticle | None:
        return self.articles.update(article_id, **updates)

    def hide_article(self, article_id: str) -> bool:
        return self.articles.hide(article_id)

    def delete_article(self, article_id: str) -> bool:
        return self.articles.delete(article_id)

    # ─────────────────────────────────────────────────────────────
    # Saved articles and reading history (delegated to UserArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def get_saved_articles(self, user_id: str) -> list[tuple[DBArticle, datetime]]:
        return self.user_articles.get_saved(user_id)

    def save_article(self, user_id: str, article_id: str) -> DBSavedArticle:
        return self.user_articles.save(user_id, article_id)

    def unsave_article(self, user_id: str, article_id: str) -> bool:
        return self.user_articles.unsave(user_id, article_id)

    def is_article_saved(self, user_id: str, article_id: str) -> bool:
        return self.user_articles.is_saved(user_id, article_id)

    def get_reading_history(
        self, user_id: str, limit: int = 50
    ) -> list[tuple[DBArticle, datetime]]:
        return self.user_articles.get_history(user_id, limit)

    def add_to_reading_history(self, user_id: str, article_id: str) -> DBReadingHistory:
        return self.user_articles.touch_history(user_id, article_id)

    def clear_reading_history(self, user_id: str) -> bool:
        return self.user_articles.clear_history(user_id)

    # ─────────────────────────────────────────────────────────────
    # User operations (delegated to UserRepository)
    # ─────────────────────────────────────────────────────────────

    def get_user(self, user_id: str) -> DBUser | None:
        return self.users.get_by_id(user_id)

    def get_user_by_username(self, username: str) -> DBUser | None:
        return self.users.get_by_username(username)

    def create_user(
        self, username: str, password_hash: str, is_admin: bool = False
    ) -> DBUser:
        return self.users.create(username, password_hash, is_admin)

    def ensure_admin_user(self, user_id: str, username: str, password_hash: str) -> DBUser:
        return self.users.ensure_admin(user_id, username, password_hash)

    def update_notification_preferences(
        self, user_id: str, preferences: dict
    ) -> DBUser | None:
        return self.users.update_notification_preferences(user_id, preferences)

    def set_push_subscription(self, user_id: str, subscription: dict | None) -> None:
        self.users.set_push_subscription(user_id, subscription)

    # ─────────────────────────────────────────────────────────────
    # Push subscription operations (delegated to NotificationRepository)
    # ─────────────────────────────────────────────────────────────

    def save_push_subscription(
        self, user_id: str, endpoint: str, p256dh: str, auth: str
    ) -> DBPushSubscription:
        return self.notifications.save_subscription(user_id, endpoint, p256dh, auth)

    def get_push_subscriptions(self, user_id: str | None = None) -> list[DBPushSubscription]:
        return self.notifications.get_subscriptions(user_id)

    def delete_push_subscription(self, user_id: str, endpoint: str) -> bool:
        return self.notifications.delete_subscription(user_id, endpoint)

    # ─────────────────────────────────────────────────────────────
    # Ad banner operations (delegated to AdRepository)
    # ─────────────────────────────────────────────────────────────

    def get_ad_banners(self, position: str | None = None) -> list[DBAdBanner]:
        return self.ads.get_active(position)

    def get_ad_banner(self, ad_id: str) -> DBAdBanner | None:
        return self.ads.get(ad_id)

    def create_ad_banner(
        self,
        title: str,
        image_url: str,
        click_url: str,
        position: str,
        is_active: bool = True,
    ) -> DBAdBanner:
        return self.ads.add(title, image_url, click_url, position, is_active)

    def update_ad_banner(self, ad_id: str, **updates) -> DBAdBanner | None:
        return self.ads.update(ad_id, **updates)

    def delete_ad_banner(self, ad_id: str) -> bool:
        return self.ads.delete(ad_id)

    # ─────────────────────────────────────────────────────────────
    # Session operations (delegated to SessionRepository)
    # ─────────────────────────────────────────────────────────────

    def create_session(self, sid: str, user_id: str, max_age: int) -> DBSession:
        return self.sessions.create(sid, user_id, max_age)

    def get_session(self, sid: str) -> DBSession | None:
        return self.sessions.get(sid)

    def delete_session(self, sid: str) -> bool:
        return self.sessions.delete(sid)

    def purge_expired_sessions(self) -> int:
        return self.sessions.purge_expired()
