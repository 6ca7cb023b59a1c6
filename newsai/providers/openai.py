"""
OpenAI provider, using chat completions in JSON mode.
"""

from openai import AsyncOpenAI

from .base import LLMProvider, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider."""

    name = "openai"
    supports_json_mode = True

    DEFAULT_MODEL = "gpt-4o"

    def __init__(self, api_key: str, model: str | None = None, timeout: float | None = None):
        options = {"timeout": timeout} if timeout is not None else {}
        self.client = AsyncOpenAI(api_key=api_key, **options)
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
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})

        extra = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = await self.client.chat.completions.create(
            model=model or self._default_model,
            messages=messages,
            max_tokens=max_tokens,
            **extra,
        )

        choice = response.choices[0]
        return LLMResponse(
            text=choice.message.content or "",
            model=response.model,
            stop_reason=choice.finish_reason,
        )
