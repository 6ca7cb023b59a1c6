"""
Text extraction helpers for article bodies from the news source.
"""

import re

from bs4 import BeautifulSoup

# NewsAPI cuts bodies off with a marker like "... [+3410 chars]"
TRUNCATION_MARKER = re.compile(r"\s*\[\+\d+ chars\]\s*$")


def extract_html_text(content: str) -> str:
    """
    Extract text from HTML content.

    Args:
        content: HTML string (plain text passes through unchanged)

    Returns:
        Extracted text with blank lines collapsed
    """
    soup = BeautifulSoup(content, "html.parser")

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    text = soup.get_text(separator=" ")

    lines = [" ".join(line.split()) for line in text.splitlines()]
    lines = [line for line in lines if line]
    return "\n".join(lines)


def strip_truncation_marker(text: str) -> str:
    """Remove a trailing "[+N chars]" marker."""
    return TRUNCATION_MARKER.sub("", text)


def clean_article_text(content: str | None) -> str:
    """Prepare an article body for the summarizer prompt."""
    if not content:
        return ""
    return strip_truncation_marker(extract_html_text(content)).strip()
