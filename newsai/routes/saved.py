"""
Saved article routes. The client identifies the user with a userId parameter.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_db
from ..database import Database
from ..exceptions import require_article, require_found
from ..schemas import SaveArticleRequest, SavedArticleRecord, SavedArticleResponse

router = APIRouter(prefix="/saved", tags=["saved"])

UserIdQuery = Annotated[str | None, Query(alias="userId")]


def _require_user_id(user_id: str | None) -> str:
    if not user_id:
        raise HTTPException(status_code=400, detail="User ID is required")
    return user_id


@router.get("")
async def list_saved_articles(
    db: Annotated[Database, Depends(get_db)],
    user_id: UserIdQuery = None,
) -> list[SavedArticleResponse]:
    """A user's saved articles, most recently saved first. Hidden articles are omitted."""
    user_id = _require_user_id(user_id)
    return [
        SavedArticleResponse.from_saved(article, saved_at)
        for article, saved_at in db.get_saved_articles(user_id)
    ]


@router.post("", status_code=201)
async def save_article(
    payload: SaveArticleRequest,
    db: Annotated[Database, Depends(get_db)],
) -> SavedArticleRecord:
    """Save an article for a user."""
    require_article(db.get_article(payload.article_id))

    if db.is_article_saved(payload.user_id, payload.article_id):
        raise HTTPException(status_code=409, detail="Article already saved")

    return SavedArticleRecord.from_db(db.save_article(payload.user_id, payload.article_id))


@router.delete("/{article_id}")
async def unsave_article(
    article_id: str,
    db: Annotated[Database, Depends(get_db)],
    user_id: UserIdQuery = None,
) -> dict:
    """Remove an article from a user's saved list."""
    user_id = _require_user_id(user_id)
    require_found(db.unsave_article(user_id, article_id), "Saved article not found")
    return {"message": "Article unsaved successfully"}
