"""
Storage interface shared by the SQLite database and the in-memory double.
"""

from datetime import datetime
from typing import Protocol

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


class Storage(Protocol):
    """Everything the routes and the ingestion pipeline need from persistence."""

    # Articles
    def create_article(self, article: NewArticle) -> DBArticle: ...
    def get_article(self, article_id: str) -> DBArticle | None: ...
    def get_articles(
        self,
        category: str | None = None,
        limit: int = 20,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> list[DBArticle]: ...
    def get_breaking_news(self, limit: int = 5) -> list[DBArticle]: ...
    def update_article(self, article_id: str, **updates) -> DBArticle | None: ...
    def hide_article(self, article_id: str) -> bool: ...
    def delete_article(self, article_id: str) -> bool: ...

    # Saved articles
    def get_saved_articles(self, user_id: str) -> list[tuple[DBArticle, datetime]]: ...
    def save_article(self, user_id: str, article_id: str) -> DBSavedArticle: ...
    def unsave_article(self, user_id: str, article_id: str) -> bool: ...
    def is_article_saved(self, user_id: str, article_id: str) -> bool: ...

    # Reading history
    def get_reading_history(
        self, user_id: str, limit: int = 50
    ) -> list[tuple[DBArticle, datetime]]: ...
    def add_to_reading_history(self, user_id: str, article_id: str) -> DBReadingHistory: ...
    def clear_reading_history(self, user_id: str) -> bool: ...

    # Users
    def get_user(self, user_id: str) -> DBUser | None: ...
    def get_user_by_username(self, username: str) -> DBUser | None: ...
    def create_user(
        self, username: str, password_hash: str, is_admin: bool = False
    ) -> DBUser: ...
    def ensure_admin_user(self, user_id: str, username: str, password_hash: str) -> DBUser: ...
    def update_notification_preferences(
        self, user_id: str, preferences: dict
    ) -> DBUser | None: ...
    def set_push_subscription(self, user_id: str, subscription: dict | None) -> None: ...

    # Push subscriptions
    def save_push_subscription(
        self, user_id: str, endpoint: str, p256dh: str, auth: str
    ) -> DBPushSubscription: ...
    def get_push_subscriptions(self, user_id: str | None = None) -> list[DBPushSubscription]: ...
    def delete_push_subscription(self, user_id: str, endpoint: str) -> bool: ...

    # Ad banners
    def get_ad_banners(self, position: str | None = None) -> list[DBAdBanner]: ...
    def get_ad_banner(self, ad_id: str) -> DBAdBanner | None: ...
    def create_ad_banner(
        self,
        title: str,
        image_url: str,
        click_url: str,
        position: str,
        is_active: bool = True,
    ) -> DBAdBanner: ...
    def update_ad_banner(self, ad_id: str, **updates) -> DBAdBanner | None: ...
    def delete_ad_banner(self, ad_id: str) -> bool: ...

    # Sessions
    def create_session(self, sid: str, user_id: str, max_age: int) -> DBSession: ...
    def get_session(self, sid: str) -> DBSession | None: ...
    def delete_session(self, sid: str) -> bool: ...
    def purge_expired_sessions(self) -> int: ...
