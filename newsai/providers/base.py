"""
Base LLM provider interface.

The summarizer sends one prompt per article and expects a JSON object
back, so the interface is a single async completion call.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Text returned by a provider for one prompt."""
    text: str
    model: str
    stop_reason: str | None = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Implementations wrap a vendor's async SDK client, so a completion never
    blocks the event loop serving the refresh request.
    """

    name: str = ""

    # Whether the vendor can be told to return a JSON object. Providers
    # without it rely on the prompt asking for JSON.
    supports_json_mode: bool = False

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when a call does not name one."""

    @abstractmethod
    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Generate a completion.

        Args:
            user_prompt: The article prompt
            system_prompt: Optional system instructions
            model: Model override (defaults to the provider's default)
            max_tokens: Maximum tokens in the response
            json_mode: Ask for a JSON object if the vendor supports it

        Returns:
            LLMResponse with the generated text

        Raises:
            Whatever the vendor SDK raises; callers treat any failure alike.
        """
