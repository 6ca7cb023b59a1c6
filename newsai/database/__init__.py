"""
Database module - SQLite persistence for articles, users and sessions.

Uses repository pattern for better separation of concerns.
"""

from .connection import DatabaseConnection
from .models import (
    ARTICLE_CATEGORIES,
    AdPosition,
    Category,
    DBAdBanner,
    DBArticle,
    DBPushSubscription,
    DBSession,
    DBUser,
    NewArticle,
)
from .database import Database
from .memory import MemoryStorage
from .storage import Storage

__all__ = [
    "ARTICLE_CATEGORIES",
    "AdPosition",
    "Category",
    "Database",
    "DatabaseConnection",
    "DBAdBanner",
    "DBArticle",
    "DBPushSubscription",
    "DBSession",
    "DBUser",
    "MemoryStorage",
    "NewArticle",
    "Storage",
]
