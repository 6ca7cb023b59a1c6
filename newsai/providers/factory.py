"""
Provider selection from configured API keys.
"""

import logging

from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider

logger = logging.getLogger(__name__)

# Fallback order when no provider is preferred
PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def create_provider(
    name: str,
    api_key: str,
    model: str | None = None,
    timeout: float | None = None,
) -> LLMProvider:
    """
    Build a provider by name.

    Raises:
        ValueError: If the name is not a known provider
    """
    try:
        provider_class = PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown provider '{name}'. Available: {', '.join(PROVIDERS)}") from None
    return provider_class(api_key=api_key, model=model, timeout=timeout)


def get_provider_from_env(
    openai_key: str | None = None,
    anthropic_key: str | None = None,
    preferred_provider: str | None = None,
    default_model: str | None = None,
    timeout: float | None = None,
) -> LLMProvider | None:
    """
    Pick a provider from the keys that are set.

    The preferred provider wins when its key is present; otherwise OpenAI,
    then Anthropic. Returns None when no key is configured, in which case
    articles are stored with the fallback summary.
    """
    keys = {"openai": openai_key, "anthropic": anthropic_key}

    if preferred_provider:
        preferred = preferred_provider.lower()
        if preferred not in keys:
            logger.warning(f"Unknown LLM_PROVIDER '{preferred_provider}', using default order")
        elif not keys[preferred]:
            logger.warning(f"LLM_PROVIDER is '{preferred}' but its API key is not set")
        else:
            return create_provider(preferred, keys[preferred], model=default_model, timeout=timeout)

    for name, api_key in keys.items():
        if api_key:
            return create_provider(name, api_key, model=default_model, timeout=timeout)
    return None
