"""
Summarizer - LLM-powered article analysis.

Asks the configured provider for a short summary, an estimated read time
and a category, then validates the answer. Any failure yields a fixed
fallback analysis so one bad article never stops an ingestion run.
"""

import json
import logging
import re
from dataclasses import dataclass

from .database.models import ARTICLE_CATEGORIES
from .providers import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_READ_TIME = 3
MIN_READ_TIME = 1
MAX_READ_TIME = 10
DEFAULT_CATEGORY = "tech"
MISSING_SUMMARY = "Summary not available"
FALLBACK_SUMMARY = "Unable to generate summary at this time."

# Anthropic has no JSON mode and sometimes fences its output
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass
class ArticleAnalysis:
    """Validated summarizer output for one article."""
    summary: str
    read_time: int
    category: str
    fallback: bool = False


def fallback_analysis() -> ArticleAnalysis:
    return ArticleAnalysis(
        summary=FALLBACK_SUMMARY,
        read_time=DEFAULT_READ_TIME,
        category=DEFAULT_CATEGORY,
        fallback=True,
    )


def coerce_read_time(value) -> int:
    """Coerce a model-supplied read time to an int in [1, 10]."""
    if isinstance(value, bool):
        return DEFAULT_READ_TIME
    try:
        minutes = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_READ_TIME
    if minutes == 0:
        # A zero from the model means it gave no estimate
        return DEFAULT_READ_TIME
    return max(MIN_READ_TIME, min(MAX_READ_TIME, minutes))


def coerce_category(value) -> str:
    """Exact match against the stored categories; anything else is tech."""
    return value if value in ARTICLE_CATEGORIES else DEFAULT_CATEGORY


class Summarizer:
    """LLM-powered article analyzer."""

    # Maximum content length to send to API
    MAX_CONTENT_LENGTH = 8000

    SYSTEM_PROMPT = (
        "You are a news analysis expert. Analyze articles and provide concise "
        "summaries with appropriate categorization. Always respond with valid JSON."
    )

    INSTRUCTION_PROMPT = """Please analyze this news article and provide a JSON response with the following format:
{
  "summary": "A concise 2-3 sentence summary highlighting the key points",
  "readTime": "Estimated reading time in minutes (integer)",
  "category": "One of: politics, tech, sports, business, breaking"
}"""

    MAX_TOKENS = 500

    def __init__(self, provider: LLMProvider | None, model: str | None = None):
        """
        Initialize summarizer.

        Args:
            provider: LLM provider, or None when no API key is configured
                (every analysis then returns the fallback)
            model: Optional model override
        """
        self.provider = provider
        self.model = model or None

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    def build_prompt(self, title: str, content: str) -> str:
        truncated = content[:self.MAX_CONTENT_LENGTH]
        return (
            f"{self.INSTRUCTION_PROMPT}\n\n"
            f"Article Title: {title}\n"
            f"Article Content: {truncated}"
        )

    def parse_response(self, text: str) -> ArticleAnalysis:
        """
        Validate a raw model response.

        Raises:
            ValueError: If the response is not a JSON object
        """
        result = json.loads(_CODE_FENCE.sub("", text.strip()) or "{}")
        if not isinstance(result, dict):
            raise ValueError(f"Expected a JSON object, got {type(result).__name__}")

        summary = result.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = MISSING_SUMMARY

        return ArticleAnalysis(
            summary=summary.strip(),
            read_time=coerce_read_time(result.get("readTime")),
            category=coerce_category(result.get("category")),
        )

    async def analyze_async(self, title: str, content: str) -> ArticleAnalysis:
        """
        Analyze an article. Never raises.

        Args:
            title: Article headline
            content: Plain-text article body

        Returns:
            ArticleAnalysis; fallback=True if the provider is missing or failed
        """
        if self.provider is None:
            logger.warning(f"No LLM provider configured, using fallback summary for '{title}'")
            return fallback_analysis()

        try:
            response = await self.provider.complete(
                user_prompt=self.build_prompt(title, content),
                system_prompt=self.SYSTEM_PROMPT,
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                json_mode=self.provider.supports_json_mode,
            )
            return self.parse_response(response.text)
        except Exception as e:
            logger.error(f"Failed to summarize article '{title}': {e}")
            return fallback_analysis()
