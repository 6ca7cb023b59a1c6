"""
Reading history routes for the logged-in user.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ..auth import SessionDep
from ..config import get_db
from ..database import Database
from ..exceptions import require_article
from ..schemas import HistoryEntryResponse, HistoryRecord, HistoryRequest

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def get_reading_history(
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
    limit: int = Query(default=50, ge=1, le=200),
) -> list[HistoryEntryResponse]:
    """Most recently read first; hidden articles are omitted."""
    return [
        HistoryEntryResponse.from_db(article, read_at)
        for article, read_at in db.get_reading_history(session.user_id, limit)
    ]


@router.post("", status_code=201)
async def add_to_reading_history(
    payload: HistoryRequest,
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> HistoryRecord:
    """Record a read. Re-reading an article refreshes its timestamp."""
    require_article(db.get_article(payload.article_id))
    return HistoryRecord.from_db(db.add_to_reading_history(session.user_id, payload.article_id))


@router.delete("")
async def clear_reading_history(
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    db.clear_reading_history(session.user_id)
    return {"message": "Reading history cleared successfully"}
