"""
Public ad banner routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import get_db
from ..database import AdPosition, Database
from ..schemas import AdBannerResponse

router = APIRouter(prefix="/ads", tags=["ads"])


@router.get("")
async def list_ad_banners(
    db: Annotated[Database, Depends(get_db)],
    position: AdPosition | None = None,
) -> list[AdBannerResponse]:
    """Active banners, optionally for a single slot."""
    ads = db.get_ad_banners(position.value if position else None)
    return [AdBannerResponse.from_db(ad) for ad in ads]
