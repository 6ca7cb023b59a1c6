"""
Pytest fixtures for backend tests.
"""

import json
import os
import tempfile
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from newsai.config import config, state
from newsai.database import Database, MemoryStorage
from newsai.ingestion import IngestionPipeline, never_promote
from newsai.news_source import NewsClient
from newsai.providers import LLMProvider, LLMResponse
from newsai.rate_limit import limiter
from newsai.server import app
from newsai.summarizer import Summarizer

# Keep bcrypt cheap and the refresh routes unthrottled unless a test opts in
config.BCRYPT_ROUNDS = 4
limiter.enabled = False

VALID_ANALYSIS = json.dumps({
    "summary": "Lawmakers passed the bill after a long debate.",
    "readTime": 4,
    "category": "tech",
})


class MockProvider(LLMProvider):
    """Mock LLM provider that returns pre-configured responses."""

    name = "mock"
    supports_json_mode = True

    def __init__(self, default_response: str = VALID_ANALYSIS):
        self.calls: list[dict] = []
        self.responses: list[str | Exception] = []
        self.default_response = default_response

    @property
    def default_model(self) -> str:
        return "mock-model"

    def queue_response(self, response: str | Exception):
        """Queue a response (or an exception to raise) for the next call."""
        self.responses.append(response)

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> LLMResponse:
        self.calls.append({
            "user_prompt": user_prompt,
            "system_prompt": system_prompt,
            "json_mode": json_mode,
        })
        response = self.responses.pop(0) if self.responses else self.default_response
        if isinstance(response, Exception):
            raise response
        return LLMResponse(text=response, model=model or self.default_model)


class FakeNewsAPI:
    """Stands in for NewsAPI behind an httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.payload: dict = {"status": "ok", "totalResults": 0, "articles": []}
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None  # raised instead of responding

    def set_articles(self, articles: list[dict]):
        self.payload = {"status": "ok", "totalResults": len(articles), "articles": articles}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_params(self) -> dict:
        return dict(self.requests[-1].url.params)


def make_raw_article(index: int = 1, **overrides) -> dict:
    """A NewsAPI top-headlines item."""
    article = {
        "source": {"id": None, "name": f"Source {index}"},
        "author": "Reporter",
        "title": f"Headline number {index}",
        "description": f"Description {index}",
        "url": f"https://news.example.com/story-{index}",
        "urlToImage": f"https://news.example.com/story-{index}.jpg",
        "publishedAt": f"2024-05-0{index % 9 + 1}T12:00:00Z",
        "content": f"<p>Body of story {index}.</p> Lots more text… [+1200 chars]",
    }
    article.update(overrides)
    return article


@pytest.fixture
def raw_article():
    """Factory for NewsAPI items."""
    return make_raw_article


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    # Cleanup
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture
def test_db(temp_db_path):
    """Create a test database instance."""
    db = Database(temp_db_path)
    yield db


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def mock_provider():
    return MockProvider()


@pytest.fixture
def news_api():
    return FakeNewsAPI()


@pytest.fixture
def news_client(news_api):
    return NewsClient(api_key="test-key", base_url="https://newsapi.test/v2", transport=news_api.transport)


@pytest.fixture
def client(temp_db_path, mock_provider, news_client):
    """Create a test client with an isolated database and fake collaborators."""
    # Store original state
    original_db = state.db
    original_provider = state.provider
    original_summarizer = state.summarizer
    original_news_client = state.news_client
    original_pipeline = state.pipeline

    # Set up test state with fresh instances
    test_db = Database(temp_db_path)
    state.db = test_db
    state.provider = mock_provider
    state.summarizer = Summarizer(provider=mock_provider)
    state.news_client = news_client
    state.pipeline = IngestionPipeline(
        storage=test_db,
        news_client=news_client,
        summarizer=state.summarizer,
        promotion=never_promote,
    )

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    # Restore original state
    state.db = original_db
    state.provider = original_provider
    state.summarizer = original_summarizer
    state.news_client = original_news_client
    state.pipeline = original_pipeline


@pytest.fixture
def seeded_articles(client):
    """Five articles published on consecutive days, one per category; the last is breaking."""
    from datetime import datetime, timezone

    from newsai.database import NewArticle

    specs = [
        ("Election results are in", "politics", False, 1),
        ("New phone launches", "tech", False, 2),
        ("Cup final tonight", "sports", False, 3),
        ("Markets rally", "business", False, 4),
        ("Earthquake strikes coast", "breaking", True, 5),
    ]
    articles = []
    for title, category, is_breaking, day in specs:
        articles.append(state.db.create_article(NewArticle(
            title=title,
            content=f"{title} content",
            summary=f"{title} summary",
            source="Wire",
            category=category,
            original_url=f"https://news.example.com/{day}",
            published_at=datetime(2024, 5, day, 12, tzinfo=timezone.utc),
            read_time=3,
            is_breaking=is_breaking,
        )))
    return articles


@pytest.fixture
def user_client(client):
    """Client logged in as a freshly registered user."""
    response = client.post(
        "/api/auth/register", json={"username": "reader", "password": "secret123"}
    )
    assert response.status_code == 201
    return client, response.json()["user"]


@pytest.fixture
def admin_client(client):
    """Client logged in through the admin login."""
    response = client.post(
        "/api/admin/login",
        json={"username": config.ADMIN_USERNAME, "password": config.ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client
