"""
Error types and HTTP exception helpers.

Provides the news source error raised by the ingestion collaborators and
helper functions for the 404 patterns the routes share.
"""

from typing import TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class NewsSourceError(Exception):
    """The external news API failed or returned a non-ok payload."""
    pass


class DuplicateUsernameError(Exception):
    """A user with this username already exists."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(db.get_article(id), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")


def require_user(user: T | None) -> T:
    """Raise 404 if user is None."""
    return require_resource(user, "User not found")


def require_ad(ad: T | None) -> T:
    """Raise 404 if ad banner is None."""
    return require_resource(ad, "Ad banner not found")


def require_found(found: bool, detail: str) -> None:
    """Raise 404 when a delete/hide style operation matched nothing."""
    if not found:
        raise HTTPException(status_code=404, detail=detail)
