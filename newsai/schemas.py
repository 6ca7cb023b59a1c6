"""
Pydantic models for API request/response validation.

JSON field names are camelCase; request bodies also accept snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .database import AdPosition, Category, DBAdBanner, DBArticle, DBPushSubscription, DBUser
from .database.models import DBReadingHistory, DBSavedArticle


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(CamelModel):
    """Article as served to the client."""
    id: str
    title: str
    content: str
    summary: str
    source: str
    category: str
    image_url: str | None
    original_url: str
    published_at: str
    read_time: int
    is_breaking: bool
    is_hidden: bool
    created_at: str

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            summary=article.summary,
            source=article.source,
            category=article.category,
            image_url=article.image_url,
            original_url=article.original_url,
            published_at=article.published_at.isoformat(),
            read_time=article.read_time,
            is_breaking=article.is_breaking,
            is_hidden=article.is_hidden,
            created_at=article.created_at.isoformat(),
        )


class RefreshRequest(CamelModel):
    """Optional category for a general refresh."""
    category: Category | None = None


class RefreshResponse(CamelModel):
    message: str
    count: int
    degraded: int
    articles: list[ArticleResponse]


# ─────────────────────────────────────────────────────────────
# Saved Articles & Reading History Schemas
# ─────────────────────────────────────────────────────────────

class SaveArticleRequest(CamelModel):
    user_id: str = Field(min_length=1)
    article_id: str = Field(min_length=1)


class SavedArticleResponse(ArticleResponse):
    """Saved article listing entry: the article plus when it was saved."""
    saved_at: str

    @classmethod
    def from_saved(cls, article: DBArticle, saved_at: datetime) -> "SavedArticleResponse":
        return cls(**ArticleResponse.from_db(article).model_dump(), saved_at=saved_at.isoformat())


class SavedArticleRecord(CamelModel):
    """The saved-article link row created by POST /api/saved."""
    id: str
    user_id: str
    article_id: str
    saved_at: str

    @classmethod
    def from_db(cls, saved: DBSavedArticle) -> "SavedArticleRecord":
        return cls(
            id=saved.id,
            user_id=saved.user_id,
            article_id=saved.article_id,
            saved_at=saved.saved_at.isoformat(),
        )


class HistoryRequest(CamelModel):
    article_id: str = Field(min_length=1)


class HistoryEntryResponse(CamelModel):
    article: ArticleResponse
    read_at: str

    @classmethod
    def from_db(cls, article: DBArticle, read_at: datetime) -> "HistoryEntryResponse":
        return cls(article=ArticleResponse.from_db(article), read_at=read_at.isoformat())


class HistoryRecord(CamelModel):
    id: str
    user_id: str
    article_id: str
    read_at: str

    @classmethod
    def from_db(cls, entry: DBReadingHistory) -> "HistoryRecord":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            article_id=entry.article_id,
            read_at=entry.read_at.isoformat(),
        )


# ─────────────────────────────────────────────────────────────
# Auth & User Schemas
# ─────────────────────────────────────────────────────────────

class CredentialsRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class NotificationPreferences(CamelModel):
    """The three notification flags; omitted flags take their defaults."""
    push_notifications: bool = True
    breaking_news: bool = True
    email_updates: bool = False


class UserResponse(CamelModel):
    id: str
    username: str
    is_admin: bool
    notification_preferences: NotificationPreferences

    @classmethod
    def from_db(cls, user: DBUser) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            notification_preferences=NotificationPreferences.model_validate(
                user.notification_preferences
            ),
        )


# ─────────────────────────────────────────────────────────────
# Push Notification Schemas
# ─────────────────────────────────────────────────────────────

class PushKeys(CamelModel):
    # Web Push key names are not camelCase
    p256dh: str = Field(min_length=1, alias="p256dh")
    auth: str = Field(min_length=1)


class PushSubscriptionRequest(CamelModel):
    """Browser PushSubscription JSON."""
    endpoint: str = Field(min_length=1)
    keys: PushKeys


class UnsubscribeRequest(CamelModel):
    endpoint: str = Field(min_length=1)


class PushSubscriptionResponse(CamelModel):
    id: str
    user_id: str
    endpoint: str
    p256dh: str = Field(alias="p256dh")
    auth: str
    created_at: str

    @classmethod
    def from_db(cls, subscription: DBPushSubscription) -> "PushSubscriptionResponse":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            endpoint=subscription.endpoint,
            p256dh=subscription.p256dh,
            auth=subscription.auth,
            created_at=subscription.created_at.isoformat(),
        )


# ─────────────────────────────────────────────────────────────
# Ad Banner Schemas
# ─────────────────────────────────────────────────────────────

class AdBannerCreate(CamelModel):
    title: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    click_url: str = Field(min_length=1)
    position: AdPosition
    is_active: bool = True


class AdBannerUpdate(CamelModel):
    """Partial update; only fields present in the body are changed."""
    title: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(default=None, min_length=1)
    click_url: str | None = Field(default=None, min_length=1)
    position: AdPosition | None = None
    is_active: bool | None = None


class AdBannerResponse(CamelModel):
    id: str
    title: str
    image_url: str
    click_url: str
    position: str
    is_active: bool
    created_at: str

    @classmethod
    def from_db(cls, ad: DBAdBanner) -> "AdBannerResponse":
        return cls(
            id=ad.id,
            title=ad.title,
            image_url=ad.image_url,
            click_url=ad.click_url,
            position=ad.position,
            is_active=ad.is_active,
            created_at=ad.created_at.isoformat(),
        )


# ─────────────────────────────────────────────────────────────
# Misc Schemas
# ─────────────────────────────────────────────────────────────

class StatusResponse(CamelModel):
    status: str
    version: str
    summarization_enabled: bool
    llm_provider: str | None = None
    news_source_configured: bool
