"""
Article ingestion pipeline.

fetch -> filter -> summarize/categorize -> normalize -> persist

Items are processed one at a time inside the calling request. A news source
failure aborts the batch and produces an empty result; a summarizer failure
only degrades the affected article to the fallback analysis.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from .database.converters import utcnow
from .database.models import DBArticle, NewArticle
from .database.storage import Storage
from .exceptions import NewsSourceError
from .extractors import clean_article_text
from .news_source import NewsClient
from .summarizer import Summarizer

logger = logging.getLogger(__name__)

REMOVED_TITLE = "[Removed]"
UNKNOWN_SOURCE = "Unknown Source"

# Decides whether a raw item from a general refresh is promoted to breaking
PromotionPolicy = Callable[[dict], bool]


class RandomPromotion:
    """Promote each article independently with a fixed probability."""

    def __init__(self, rate: float = 0.1, seed: int | None = None):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Promotion rate must be within [0, 1], got {rate}")
        self.rate = rate
        self._rng = random.Random(seed)

    def __call__(self, raw: dict) -> bool:
        return self.rate > 0 and self._rng.random() < self.rate


def never_promote(raw: dict) -> bool:
    return False


@dataclass
class PipelineConfig:
    page_size: int = 20
    breaking_page_size: int = 5
    breaking_limit: int = 3


@dataclass
class IngestionResult:
    """Articles stored by one refresh run."""
    articles: list[DBArticle] = field(default_factory=list)
    degraded: int = 0  # stored articles carrying the fallback summary

    @property
    def count(self) -> int:
        return len(self.articles)


def is_usable(raw: dict) -> bool:
    """Items without a title or body, or withdrawn by the publisher, are skipped."""
    title = raw.get("title")
    content = raw.get("content")
    if not isinstance(title, str) or not title.strip() or title == REMOVED_TITLE:
        return False
    return isinstance(content, str) and bool(content.strip())


def parse_published_at(value) -> datetime:
    """Parse NewsAPI's ISO timestamp ("2024-05-01T12:00:00Z"); missing or bad means now."""
    if not isinstance(value, str) or not value:
        return utcnow()
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable publishedAt '{value}', using current time")
        return utcnow()
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def source_name(raw: dict) -> str:
    source = raw.get("source")
    name = source.get("name") if isinstance(source, dict) else None
    return name or UNKNOWN_SOURCE


class IngestionPipeline:
    """Pulls headlines from the news source into storage."""

    def __init__(
        self,
        storage: Storage,
        news_client: NewsClient,
        summarizer: Summarizer,
        promotion: PromotionPolicy = never_promote,
        config: PipelineConfig | None = None,
    ):
        self.storage = storage
        self.news_client = news_client
        self.summarizer = summarizer
        self.promotion = promotion
        self.config = config or PipelineConfig()

    async def refresh(self, category: str | None = None) -> IngestionResult:
        """
        Run a general refresh.

        Args:
            category: Optional selector; "all" and "breaking" fetch unfiltered,
                and "breaking" also flags every stored article as breaking

        Returns:
            IngestionResult (empty if the news source failed)
        """
        try:
            items = await self.news_client.fetch_top_headlines(
                category=category, page_size=self.config.page_size
            )
        except NewsSourceError as e:
            logger.error(f"Failed to fetch news articles (category={category}): {e}")
            return IngestionResult()

        result = IngestionResult()
        for raw in items:
            if not is_usable(raw):
                continue
            analysis = await self.summarizer.analyze_async(
                raw["title"], clean_article_text(raw["content"])
            )
            is_breaking = category == "breaking" or self.promotion(raw)
            article = self._normalize(raw, analysis.summary, analysis.read_time,
                                      analysis.category, is_breaking)
            self._persist(article, analysis.fallback, result)

        logger.info(
            f"Refresh stored {result.count} articles "
            f"(category={category or 'all'}, degraded={result.degraded})"
        )
        return result

    async def refresh_breaking(self) -> IngestionResult:
        """Fetch the latest headlines and store the first few as breaking news."""
        try:
            items = await self.news_client.fetch_top_headlines(
                page_size=self.config.breaking_page_size, sort_by="publishedAt"
            )
        except NewsSourceError as e:
            logger.error(f"Failed to fetch breaking news: {e}")
            return IngestionResult()

        result = IngestionResult()
        for raw in items[:self.config.breaking_limit]:
            if not is_usable(raw):
                continue
            analysis = await self.summarizer.analyze_async(
                raw["title"], clean_article_text(raw["content"])
            )
            article = self._normalize(raw, analysis.summary, analysis.read_time,
                                      "breaking", True)
            self._persist(article, analysis.fallback, result)

        logger.info(f"Breaking refresh stored {result.count} articles (degraded={result.degraded})")
        return result

    def _normalize(
        self,
        raw: dict,
        summary: str,
        read_time: int,
        category: str,
        is_breaking: bool,
    ) -> NewArticle:
        return NewArticle(
            title=raw["title"],
            content=raw.get("content") or raw.get("description") or "",
            summary=summary,
            source=source_name(raw),
            category=category,
            image_url=raw.get("urlToImage") or None,
            original_url=raw.get("url") or "",
            published_at=parse_published_at(raw.get("publishedAt")),
            read_time=read_time,
            is_breaking=is_breaking,
        )

    def _persist(self, article: NewArticle, degraded: bool, result: IngestionResult):
        try:
            stored = self.storage.create_article(article)
        except Exception:
            logger.exception(f"Error storing article '{article.title}'")
            return
        result.articles.append(stored)
        if degraded:
            result.degraded += 1
