"""
News source client - NewsAPI top-headlines.

Raw items are returned as dicts; filtering and normalization happen in the
ingestion pipeline.
"""

import logging

import httpx

from .exceptions import NewsSourceError

logger = logging.getLogger(__name__)

# App categories that NewsAPI names differently
CATEGORY_MAP = {"tech": "technology"}

# Selectors that mean "no category filter" upstream
UNFILTERED_CATEGORIES = ("all", "breaking")


class NewsClient:
    """Async client for the NewsAPI top-headlines endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://newsapi.org/v2",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            api_key: NewsAPI key
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def build_params(
        self,
        category: str | None = None,
        page_size: int = 20,
        sort_by: str | None = None,
    ) -> dict:
        params = {
            "apiKey": self.api_key,
            "language": "en",
            "pageSize": str(page_size),
        }
        if category and category not in UNFILTERED_CATEGORIES:
            params["category"] = CATEGORY_MAP.get(category, category)
        if sort_by:
            params["sortBy"] = sort_by
        return params

    async def fetch_top_headlines(
        self,
        category: str | None = None,
        page_size: int = 20,
        sort_by: str | None = None,
    ) -> list[dict]:
        """
        Fetch raw top-headline items.

        Raises:
            NewsSourceError: On transport errors, non-2xx responses, or a
                payload whose status is not "ok"
        """
        url = f"{self.base_url}/top-headlines"
        params = self.build_params(category, page_size, sort_by)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise NewsSourceError(f"NewsAPI request failed: {e}") from e

        if not response.is_success:
            raise NewsSourceError(f"NewsAPI request failed: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise NewsSourceError("NewsAPI returned invalid JSON") from e

        if not isinstance(data, dict) or data.get("status") != "ok":
            status = data.get("status") if isinstance(data, dict) else None
            raise NewsSourceError(f"NewsAPI error: {status}")

        articles = data.get("articles") or []
        logger.info(
            f"Fetched {len(articles)} headlines (category={category or 'all'}, pageSize={page_size})"
        )
        return [item for item in articles if isinstance(item, dict)]
