"""
In-memory storage with the same interface as Database.

Used by tests that exercise the ingestion pipeline without touching SQLite.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta

from ..exceptions import DuplicateUsernameError
from .ad_repository import UPDATABLE_COLUMNS as AD_COLUMNS
from .article_repository import UPDATABLE_COLUMNS as ARTICLE_COLUMNS
from .converters import utcnow
from .models import (
    DEFAULT_NOTIFICATION_PREFERENCES,
    DBAdBanner,
    DBArticle,
    DBPushSubscription,
    DBReadingHistory,
    DBSavedArticle,
    DBSession,
    DBUser,
    NewArticle,
)


def _newest_first(items, key):
    # Reverse before the stable sort so ties keep the most recent insert first
    return sorted(reversed(items), key=key, reverse=True)


class MemoryStorage:
    """Dict-backed Storage implementation."""

    def __init__(self):
        self.articles: dict[str, DBArticle] = {}
        self.saved: list[DBSavedArticle] = []
        self.history: list[DBReadingHistory] = []
        self.users: dict[str, DBUser] = {}
        self.push_subscriptions: list[DBPushSubscription] = []
        self.ads: dict[str, DBAdBanner] = {}
        self.sessions: dict[str, DBSession] = {}

    # --- Articles ---

    def create_article(self, article: NewArticle) -> DBArticle:
        stored = DBArticle(
            id=uuid.uuid4().hex,
            title=article.title,
            content=article.content,
            summary=article.summary,
            source=article.source,
            category=article.category,
            original_url=article.original_url,
            published_at=article.published_at,
            created_at=utcnow(),
            image_url=article.image_url,
            read_time=article.read_time,
            is_breaking=article.is_breaking,
            is_hidden=article.is_hidden,
        )
        self.articles[stored.id] = stored
        return replace(stored)

    def get_article(self, article_id: str) -> DBArticle | None:
        article = self.articles.get(article_id)
        return replace(article) if article else None

    def get_articles(
        self,
        category: str | None = None,
        limit: int = 20,
        offset: int = 0,
        include_hidden: bool = False,
    ) -> list[DBArticle]:
        matches = []
        for article in self.articles.values():
            if article.is_hidden and not include_hidden:
                continue
            if category == "breaking":
                if not article.is_breaking:
                    continue
            elif category and category != "all" and article.category != category:
                continue
            matches.append(article)

        ordered = _newest_first(matches, key=lambda a: (a.published_at, a.created_at))
        return [replace(a) for a in ordered[offset:offset + limit]]

    def get_breaking_news(self, limit: int = 5) -> list[DBArticle]:
        return self.get_articles(category="breaking", limit=limit)

    def update_article(self, article_id: str, **updates) -> DBArticle | None:
        article = self.articles.get(article_id)
        if article is None:
            return None
        fields = {k: v for k, v in updates.items() if k in ARTICLE_COLUMNS}
        self.articles[article_id] = replace(article, **fields)
        return replace(self.articles[article_id])

    def hide_article(self, article_id: str) -> bool:
        return self.update_article(article_id, is_hidden=True) is not None

    def delete_article(self, article_id: str) -> bool:
        if self.articles.pop(article_id, None) is None:
            return False
        self.saved = [s for s in self.saved if s.article_id != article_id]
        self.history = [h for h in self.history if h.article_id != article_id]
        return True

    # --- Saved articles ---

    def _visible_links(self, links, user_id: str, timestamp) -> list[tuple[DBArticle, datetime]]:
        result = []
        for link in _newest_first([l for l in links if l.user_id == user_id], key=timestamp):
            article = self.articles.get(link.article_id)
            if article and not article.is_hidden:
                result.append((replace(article), timestamp(link)))
        return result

    def get_saved_articles(self, user_id: str) -> list[tuple[DBArticle, datetime]]:
        return self._visible_links(self.saved, user_id, lambda s: s.saved_at)

    def save_article(self, user_id: str, article_id: str) -> DBSavedArticle:
        saved = DBSavedArticle(
            id=uuid.uuid4().hex, user_id=user_id, article_id=article_id, saved_at=utcnow()
        )
        self.saved.append(saved)
        return saved

    def unsave_article(self, user_id: str, article_id: str) -> bool:
        before = len(self.saved)
        self.saved = [
            s for s in self.saved
            if not (s.user_id == user_id and s.article_id == article_id)
        ]
        return len(self.saved) < before

    def is_article_saved(self, user_id: str, article_id: str) -> bool:
        return any(s.user_id == user_id and s.article_id == article_id for s in self.saved)

    # --- Reading history ---

    def get_reading_history(
        self, user_id: str, limit: int = 50
    ) -> list[tuple[DBArticle, datetime]]:
        return self._visible_links(self.history, user_id, lambda h: h.read_at)[:limit]

    def add_to_reading_history(self, user_id: str, article_id: str) -> DBReadingHistory:
        for index, entry in enumerate(self.history):
            if entry.user_id == user_id and entry.article_id == article_id:
                # Move to the end so insertion order tracks recency
                del self.history[index]
                touched = replace(entry, read_at=utcnow())
                self.history.append(touched)
                return touched
        entry = DBReadingHistory(
            id=uuid.uuid4().hex, user_id=user_id, article_id=article_id, read_at=utcnow()
        )
        self.history.append(entry)
        return entry

    def clear_reading_history(self, user_id: str) -> bool:
        before = len(self.history)
        self.history = [h for h in self.history if h.user_id != user_id]
        return len(self.history) < before

    # --- Users ---

    def get_user(self, user_id: str) -> DBUser | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> DBUser | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(
        self,
        username: str,
        password_hash: str,
        is_admin: bool = False,
        user_id: str | None = None,
    ) -> DBUser:
        if self.get_user_by_username(username):
            raise DuplicateUsernameError(username)
        user = DBUser(
            id=user_id or uuid.uuid4().hex,
            username=username,
            password=password_hash,
            is_admin=is_admin,
            created_at=utcnow(),
            notification_preferences=dict(DEFAULT_NOTIFICATION_PREFERENCES),
        )
        self.users[user.id] = user
        return user

    def ensure_admin_user(self, user_id: str, username: str, password_hash: str) -> DBUser:
        existing = self.users.get(user_id)
        if existing:
            existing.is_admin = True
            return existing
        return self.create_user(username, password_hash, is_admin=True, user_id=user_id)

    def update_notification_preferences(
        self, user_id: str, preferences: dict
    ) -> DBUser | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        merged = dict(DEFAULT_NOTIFICATION_PREFERENCES)
        merged.update(preferences)
        user.notification_preferences = merged
        return user

    def set_push_subscription(self, user_id: str, subscription: dict | None) -> None:
        user = self.users.get(user_id)
        if user:
            user.push_subscription = subscription

    # --- Push subscriptions ---

    def save_push_subscription(
        self, user_id: str, endpoint: str, p256dh: str, auth: str
    ) -> DBPushSubscription:
        self.delete_push_subscription(user_id, endpoint)
        subscription = DBPushSubscription(
            id=uuid.uuid4().hex,
            user_id=user_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            created_at=utcnow(),
        )
        self.push_subscriptions.append(subscription)
        return subscription

    def get_push_subscriptions(self, user_id: str | None = None) -> list[DBPushSubscription]:
        matches = [
            s for s in self.push_subscriptions
            if user_id is None or s.user_id == user_id
        ]
        return _newest_first(matches, key=lambda s: s.created_at)

    def delete_push_subscription(self, user_id: str, endpoint: str) -> bool:
        before = len(self.push_subscriptions)
        self.push_subscriptions = [
            s for s in self.push_subscriptions
            if not (s.user_id == user_id and s.endpoint == endpoint)
        ]
        return len(self.push_subscriptions) < before

    # --- Ad banners ---

    def get_ad_banners(self, position: str | None = None) -> list[DBAdBanner]:
        matches = [
            ad for ad in self.ads.values()
            if ad.is_active and (not position or ad.position == position)
        ]
        return _newest_first(matches, key=lambda ad: ad.created_at)

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
        ad = DBAdBanner(
            id=uuid.uuid4().hex,
            title=title,
            image_url=image_url,
            click_url=click_url,
            position=position,
            is_active=is_active,
            created_at=utcnow(),
        )
        self.ads[ad.id] = ad
        return ad

    def update_ad_banner(self, ad_id: str, **updates) -> DBAdBanner | None:
        ad = self.ads.get(ad_id)
        if ad is None:
            return None
        fields = {k: v for k, v in updates.items() if k in AD_COLUMNS}
        self.ads[ad_id] = replace(ad, **fields)
        return self.ads[ad_id]

    def delete_ad_banner(self, ad_id: str) -> bool:
        return self.ads.pop(ad_id, None) is not None

    # --- Sessions ---

    def create_session(self, sid: str, user_id: str, max_age: int) -> DBSession:
        now = utcnow()
        session = DBSession(
            sid=sid, user_id=user_id, expires_at=now + timedelta(seconds=max_age), created_at=now
        )
        self.sessions[sid] = session
        return session

    def get_session(self, sid: str) -> DBSession | None:
        session = self.sessions.get(sid)
        if session and session.expires_at <= utcnow():
            del self.sessions[sid]
            return None
        return session

    def delete_session(self, sid: str) -> bool:
        return self.sessions.pop(sid, None) is not None

    def purge_expired_sessions(self) -> int:
        now = utcnow()
        expired = [sid for sid, s in self.sessions.items() if s.expires_at <= now]
        for sid in expired:
            del self.sessions[sid]
        return len(expired)
