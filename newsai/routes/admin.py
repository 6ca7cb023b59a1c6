"""
Admin routes: admin login, article moderation, ad banner management.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..auth import (
    ADMIN_USER_ID,
    check_admin_credentials,
    hash_password,
    require_admin,
    start_session,
)
from ..config import config, get_db
from ..database import Category, Database
from ..exceptions import DuplicateUsernameError, require_ad, require_found
from ..schemas import (
    AdBannerCreate,
    AdBannerResponse,
    AdBannerUpdate,
    ArticleResponse,
    CredentialsRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# ─────────────────────────────────────────────────────────────
# Login
# ─────────────────────────────────────────────────────────────

@router.post("/login")
async def admin_login(
    payload: CredentialsRequest,
    response: Response,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Check the configured admin credentials and start an admin session."""
    if not check_admin_credentials(payload.username, payload.password):
        logger.warning(f"Failed admin login for '{payload.username}'")
        raise HTTPException(status_code=401, detail="Invalid admin credentials")

    # Admin routes authorize via the user record, so make sure it exists
    existing = db.get_user(ADMIN_USER_ID)
    if existing is None or not existing.is_admin:
        try:
            db.ensure_admin_user(
                ADMIN_USER_ID, config.ADMIN_USERNAME, hash_password(config.ADMIN_PASSWORD)
            )
        except DuplicateUsernameError:
            logger.error(f"Admin username '{config.ADMIN_USERNAME}' is held by a regular account")
            raise HTTPException(status_code=409, detail="Admin username is already registered")

    start_session(response, db, ADMIN_USER_ID)
    return {"success": True, "message": "Admin login successful"}


# ─────────────────────────────────────────────────────────────
# Articles
# ─────────────────────────────────────────────────────────────

@router.get("/articles", dependencies=[Depends(require_admin)])
async def list_all_articles(
    db: Annotated[Database, Depends(get_db)],
    category: Category = Category.ALL,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> list[ArticleResponse]:
    """All articles including hidden ones."""
    articles = db.get_articles(
        category=category.value, limit=limit, offset=offset, include_hidden=True
    )
    return [ArticleResponse.from_db(a) for a in articles]


@router.post("/articles/{article_id}/hide", dependencies=[Depends(require_admin)])
async def hide_article(
    article_id: str,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    require_found(db.hide_article(article_id), "Article not found")
    logger.info(f"Article {article_id} hidden")
    return {"message": "Article hidden successfully"}


@router.delete("/articles/{article_id}", dependencies=[Depends(require_admin)])
async def delete_article(
    article_id: str,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Hard delete; saved and history links go with it."""
    require_found(db.delete_article(article_id), "Article not found")
    logger.info(f"Article {article_id} deleted")
    return {"message": "Article deleted successfully"}


# ─────────────────────────────────────────────────────────────
# Ad Banners
# ─────────────────────────────────────────────────────────────

@router.post("/ads", status_code=201, dependencies=[Depends(require_admin)])
async def create_ad_banner(
    payload: AdBannerCreate,
    db: Annotated[Database, Depends(get_db)],
) -> AdBannerResponse:
    ad = db.create_ad_banner(
        title=payload.title,
        image_url=payload.image_url,
        click_url=payload.click_url,
        position=payload.position.value,
        is_active=payload.is_active,
    )
    return AdBannerResponse.from_db(ad)


@router.put("/ads/{ad_id}", dependencies=[Depends(require_admin)])
async def update_ad_banner(
    ad_id: str,
    payload: AdBannerUpdate,
    db: Annotated[Database, Depends(get_db)],
) -> AdBannerResponse:
    """Partial update: only fields present in the body change."""
    updates = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return AdBannerResponse.from_db(require_ad(db.update_ad_banner(ad_id, **updates)))


@router.delete("/ads/{ad_id}", dependencies=[Depends(require_admin)])
async def delete_ad_banner(
    ad_id: str,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    require_found(db.delete_ad_banner(ad_id), "Ad banner not found")
    return {"message": "Ad banner deleted successfully"}
