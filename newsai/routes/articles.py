"""
Article routes: list, detail, breaking news, and refresh from the news source.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..config import get_db, get_pipeline
from ..database import Category, Database
from ..exceptions import require_article
from ..ingestion import IngestionPipeline, IngestionResult
from ..rate_limit import limiter, refresh_limit
from ..schemas import ArticleResponse, RefreshRequest, RefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["articles"])


def _refresh_response(message: str, result: IngestionResult) -> RefreshResponse:
    return RefreshResponse(
        message=message,
        count=result.count,
        degraded=result.degraded,
        articles=[ArticleResponse.from_db(a) for a in result.articles],
    )


# ─────────────────────────────────────────────────────────────
# Listing
# ─────────────────────────────────────────────────────────────

@router.get("/articles")
async def list_articles(
    db: Annotated[Database, Depends(get_db)],
    category: Category = Category.ALL,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> list[ArticleResponse]:
    """List visible articles, newest first.

    "all" applies no filter; "breaking" returns articles flagged as breaking
    regardless of their category.
    """
    articles = db.get_articles(category=category.value, limit=limit, offset=offset)
    return [ArticleResponse.from_db(a) for a in articles]


@router.get("/articles/{article_id}")
async def get_article(
    article_id: str,
    db: Annotated[Database, Depends(get_db)],
) -> ArticleResponse:
    """Get a single article."""
    return ArticleResponse.from_db(require_article(db.get_article(article_id)))


@router.get("/breaking")
async def get_breaking_news(
    db: Annotated[Database, Depends(get_db)],
) -> list[ArticleResponse]:
    """Top five visible breaking articles."""
    return [ArticleResponse.from_db(a) for a in db.get_breaking_news(limit=5)]


# ─────────────────────────────────────────────────────────────
# Refresh (rate limited: every article costs an LLM call)
# ─────────────────────────────────────────────────────────────

@router.post("/articles/refresh")
@limiter.limit(refresh_limit)
async def refresh_articles(
    request: Request,
    pipeline: Annotated[IngestionPipeline, Depends(get_pipeline)],
    payload: RefreshRequest | None = None,
) -> RefreshResponse:
    """Fetch headlines, summarize them and store the results."""
    category = payload.category.value if payload and payload.category else None
    try:
        result = await pipeline.refresh(category)
    except Exception as e:
        logger.exception(f"Error refreshing articles (category={category})")
        raise HTTPException(status_code=500, detail="Failed to refresh articles") from e

    return _refresh_response("Articles refreshed successfully", result)


@router.post("/breaking/refresh")
@limiter.limit(refresh_limit)
async def refresh_breaking_news(
    request: Request,
    pipeline: Annotated[IngestionPipeline, Depends(get_pipeline)],
) -> RefreshResponse:
    """Fetch the latest headlines and store them as breaking news."""
    try:
        result = await pipeline.refresh_breaking()
    except Exception as e:
        logger.exception("Error refreshing breaking news")
        raise HTTPException(status_code=500, detail="Failed to refresh breaking news") from e

    return _refresh_response("Breaking news refreshed successfully", result)
