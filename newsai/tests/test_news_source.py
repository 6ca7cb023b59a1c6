"""
Tests for the NewsAPI client and article text cleaning.
"""

import asyncio

import httpx
import pytest

from newsai.exceptions import NewsSourceError
from newsai.extractors import clean_article_text
from newsai.news_source import NewsClient


def _fetch(client, **kwargs):
    return asyncio.run(client.fetch_top_headlines(**kwargs))


class TestBuildParams:
    def test_defaults(self):
        params = NewsClient("key").build_params()
        assert params == {"apiKey": "key", "language": "en", "pageSize": "20"}

    @pytest.mark.parametrize("category, expected", [
        ("tech", "technology"),
        ("sports", "sports"),
        ("politics", "politics"),
        ("business", "business"),
    ])
    def test_category_mapping(self, category, expected):
        assert NewsClient("key").build_params(category)["category"] == expected

    @pytest.mark.parametrize("category", ["all", "breaking", None])
    def test_unfiltered_selectors(self, category):
        assert "category" not in NewsClient("key").build_params(category)

    def test_sort_by(self):
        params = NewsClient("key").build_params(page_size=5, sort_by="publishedAt")
        assert params["sortBy"] == "publishedAt"
        assert params["pageSize"] == "5"


class TestFetch:
    def test_returns_articles(self, news_api, news_client, raw_article):
        news_api.set_articles([raw_article(1), raw_article(2)])

        items = _fetch(news_client, category="tech")
        assert [i["title"] for i in items] == ["Headline number 1", "Headline number 2"]
        assert news_api.requests[0].url.path == "/v2/top-headlines"

    def test_http_error(self, news_api, news_client):
        news_api.status_code = 401
        with pytest.raises(NewsSourceError):
            _fetch(news_client)

    def test_non_ok_status(self, news_api, news_client):
        news_api.payload = {"status": "error", "message": "rate limited"}
        with pytest.raises(NewsSourceError):
            _fetch(news_client)

    def test_transport_error(self, news_api, news_client):
        news_api.error = httpx.ReadTimeout("timed out")
        with pytest.raises(NewsSourceError):
            _fetch(news_client)

    def test_invalid_json(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        client = NewsClient("key", transport=transport)
        with pytest.raises(NewsSourceError):
            _fetch(client)


class TestCleanArticleText:
    def test_strips_html_and_marker(self):
        raw = "<p>Officials <b>confirmed</b> the plan.</p> More soon… [+2417 chars]"
        assert clean_article_text(raw) == "Officials confirmed the plan. More soon…"

    def test_plain_text_unchanged(self):
        assert clean_article_text("Plain body text.") == "Plain body text."

    def test_empty(self):
        assert clean_article_text(None) == ""
        assert clean_article_text("") == ""
