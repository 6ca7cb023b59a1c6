"""
API route modules.
"""

from .admin import router as admin_router
from .ads import router as ads_router
from .articles import router as articles_router
from .auth import router as auth_router
from .history import router as history_router
from .misc import router as misc_router, public_router as misc_public_router
from .notifications import router as notifications_router
from .saved import router as saved_router

__all__ = [
    "admin_router",
    "ads_router",
    "articles_router",
    "auth_router",
    "history_router",
    "misc_router",
    "misc_public_router",
    "notifications_router",
    "saved_router",
]
