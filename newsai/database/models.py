"""
Database models - dataclasses for database entities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Category(str, Enum):
    """Feed selector. ALL and BREAKING are pseudo-categories."""
    ALL = "all"
    BREAKING = "breaking"
    POLITICS = "politics"
    TECH = "tech"
    SPORTS = "sports"
    BUSINESS = "business"


# Categories an article can actually be stored under
ARTICLE_CATEGORIES = ("politics", "tech", "sports", "business", "breaking")


class AdPosition(str, Enum):
    """Slot in the feed where an ad banner renders."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


DEFAULT_NOTIFICATION_PREFERENCES = {
    "pushNotifications": True,
    "breakingNews": True,
    "emailUpdates": False,
}


@dataclass
class NewArticle:
    """Normalized article produced by ingestion, not yet persisted."""
    title: str
    content: str
    summary: str
    source: str
    category: str
    original_url: str
    published_at: datetime
    image_url: str | None = None
    read_time: int = 3
    is_breaking: bool = False
    is_hidden: bool = False


@dataclass
class DBArticle:
    id: str
    title: str
    content: str
    summary: str
    source: str
    category: str
    original_url: str
    published_at: datetime
    created_at: datetime
    image_url: str | None = None
    read_time: int = 3
    is_breaking: bool = False
    is_hidden: bool = False


@dataclass
class DBSavedArticle:
    id: str
    user_id: str
    article_id: str
    saved_at: datetime


@dataclass
class DBReadingHistory:
    id: str
    user_id: str
    article_id: str
    read_at: datetime


@dataclass
class DBUser:
    id: str
    username: str
    password: str  # bcrypt hash
    is_admin: bool
    created_at: datetime
    notification_preferences: dict = field(
        default_factory=lambda: dict(DEFAULT_NOTIFICATION_PREFERENCES)
    )
    push_subscription: dict | None = None


@dataclass
class DBPushSubscription:
    id: str
    user_id: str
    endpoint: str
    p256dh: str
    auth: str
    created_at: datetime


@dataclass
class DBAdBanner:
    id: str
    title: str
    image_url: str
    click_url: str
    position: str
    is_active: bool
    created_at: datetime


@dataclass
class DBSession:
    sid: str
    user_id: str
    expires_at: datetime
    created_at: datetime
