"""
LLM providers used by the summarizer.
"""

from .anthropic import AnthropicProvider
from .base import LLMProvider, LLMResponse
from .factory import PROVIDERS, create_provider, get_provider_from_env
from .openai import OpenAIProvider

__all__ = [
    "PROVIDERS",
    "AnthropicProvider",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "create_provider",
    "get_provider_from_env",
]
