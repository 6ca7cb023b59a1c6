"""
NewsAI API Server

FastAPI application providing endpoints for:
- Articles (list, detail, breaking news, refresh from NewsAPI)
- Saved articles and reading history
- Accounts and sessions
- Push subscriptions and notification preferences
- Admin moderation and ad banners
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import config, state
from .database import Database
from .ingestion import IngestionPipeline, PipelineConfig, RandomPromotion
from .news_source import NewsClient
from .providers import get_provider_from_env
from .rate_limit import setup_rate_limiting
from .routes import (
    admin_router,
    ads_router,
    articles_router,
    auth_router,
    history_router,
    misc_public_router,
    misc_router,
    notifications_router,
    saved_router,
)
from .summarizer import Summarizer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.db is None:
        state.db = Database(config.DB_PATH)

        state.provider = get_provider_from_env(
            openai_key=config.OPENAI_API_KEY or None,
            anthropic_key=config.ANTHROPIC_API_KEY or None,
            preferred_provider=config.LLM_PROVIDER or None,
            default_model=config.LLM_MODEL or None,
            timeout=config.LLM_TIMEOUT,
        )
        if state.provider:
            logger.info(f"LLM provider initialized: {state.provider.name}")
        else:
            logger.warning(
                "No LLM API key configured. Set OPENAI_API_KEY or ANTHROPIC_API_KEY. "
                "Ingested articles will carry the fallback summary."
            )
        state.summarizer = Summarizer(provider=state.provider)

        if not config.NEWS_API_KEY:
            logger.warning("NEWS_API_KEY not set; refresh requests will fail upstream")
        state.news_client = NewsClient(
            api_key=config.NEWS_API_KEY,
            base_url=config.NEWS_API_BASE_URL,
            timeout=config.NEWS_API_TIMEOUT,
        )

        state.pipeline = IngestionPipeline(
            storage=state.db,
            news_client=state.news_client,
            summarizer=state.summarizer,
            promotion=RandomPromotion(rate=config.BREAKING_PROMOTION_RATE),
            config=PipelineConfig(page_size=config.REFRESH_PAGE_SIZE),
        )

    purged = state.db.purge_expired_sessions()
    if purged:
        logger.info(f"Removed {purged} expired sessions")

    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 rather than FastAPI's default 422."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app = FastAPI(
    title="NewsAI API",
    version=__version__,
    lifespan=lifespan
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
setup_rate_limiting(app)

# Include routers
app.include_router(misc_router, prefix="/api")
app.include_router(articles_router, prefix="/api")
app.include_router(saved_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(history_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(ads_router, prefix="/api")
app.include_router(misc_public_router)


def main():
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
