"""
Miscellaneous routes: health check and the PWA manifest.
"""

from fastapi import APIRouter

from .. import __version__
from ..config import config, state
from ..schemas import StatusResponse

router = APIRouter(tags=["misc"])

# Served outside the /api prefix
public_router = APIRouter(tags=["pwa"])

ICON_SIZES = (72, 96, 128, 144, 152, 192, 384, 512)


def _icon(size: int) -> dict:
    icon = {
        "src": f"/icons/icon-{size}x{size}.png",
        "sizes": f"{size}x{size}",
        "type": "image/png",
    }
    if size == 192:
        icon["purpose"] = "any maskable"
    return icon


MANIFEST = {
    "name": "NewsAI",
    "short_name": "NewsAI",
    "description": "AI-powered news aggregation with bilingual support",
    "start_url": "/",
    "display": "standalone",
    "background_color": "#ffffff",
    "theme_color": "#3b82f6",
    "icons": [_icon(size) for size in ICON_SIZES],
}


@router.get("/status")
async def health_check() -> StatusResponse:
    """API health check."""
    return StatusResponse(
        status="ok",
        version=__version__,
        summarization_enabled=state.summarizer is not None and state.summarizer.enabled,
        llm_provider=state.provider.name if state.provider else None,
        news_source_configured=bool(config.NEWS_API_KEY),
    )


@public_router.get("/manifest.json")
async def manifest() -> dict:
    """Static web app manifest."""
    return MANIFEST
