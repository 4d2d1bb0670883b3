"""OpenAI-compatible LLM client implementation."""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from nutrition_planner.config import get_settings
from nutrition_planner.errors import NotConfiguredError, ProviderError
from nutrition_planner.llm.base import LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a nutrition planner. You answer with a single JSON object and nothing else."


class OpenAIClient(LLMClient):
    """OpenAI API client - works with OpenAI or compatible endpoints (e.g. Gemini, LiteLLM)."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.llm_api_key
        self._base_url = base_url or settings.llm_base_url
        self._model = model or settings.llm_model
        self._client: AsyncOpenAI | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> AsyncOpenAI:
        """Lazy-init SDK client."""
        if self._client is None:
            client_kwargs: dict[str, Any] = {"api_key": self._api_key}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def generate(self, prompt: str, *, max_tokens: int = 8192) -> str:
        """Call OpenAI-compatible chat completion."""
        if not self.is_configured:
            raise NotConfiguredError("AI client is not configured (missing LLM_API_KEY).")
        try:
            response = await self._get_client().chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e
        if not response.choices:
            raise ProviderError("Provider returned no choices")
        return response.choices[0].message.content or ""
