"""Generative text provider interface."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Prompt in, free-form text out. Output is untrusted."""

    @property
    def is_configured(self) -> bool:
        return True

    @abstractmethod
    async def generate(self, prompt: str, *, max_tokens: int = 8192) -> str:
        """
        Return the provider's text for a single user prompt.
        Raises ProviderError (or NotConfiguredError) on failure.
        """
        ...
