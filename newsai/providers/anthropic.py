"""
Anthropic provider.

Claude has no JSON mode; the summarizer's prompt asks for JSON and strips
any code fence the model wraps around it.
"""

from anthropic import AsyncAnthropic

from .base import LLMProvider, LLMResponse


class AnthropicProvider(LLMProvider):
    """Anthropic messages provider."""

    name = "anthropic"

    DEFAULT_MODEL = "claude-haiku-4-5-20251001"

    def __init__(self, api_key: str, model: str | None = None, timeout: float | None = None):
        options = {"timeout": timeout} if timeout is not None else {}
        self.client = AsyncAnthropic(api_key=api_key, **options)
        self._default_model = model or self.DEFAULT_MODEL

    @property
    def default_model(self) -> str:
        return self._default_model

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> LLMResponse:
        options = {"system": system_prompt} if system_prompt else {}
        response = await self.client.messages.create(
            model=model or self._default_model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": user_prompt}],
            **options,
        )

        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(text=text, model=response.model, stop_reason=response.stop_reason)
