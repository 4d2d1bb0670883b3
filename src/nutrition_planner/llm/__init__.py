"""LLM abstraction - OpenAI-compatible."""

from nutrition_planner.llm.base import LLMClient
from nutrition_planner.llm.openai_client import OpenAIClient

__all__ = ["LLMClient", "OpenAIClient"]
