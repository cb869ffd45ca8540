from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from comment_intel.config.settings import PipelineSettings


class LLMClient(ABC):
    """Abstract interface for language model providers (chat focus)."""

    @abstractmethod
    def chat(self, messages: List[Dict[str, Any]], **kwargs: Any) -> str:  # noqa: D401
        """Send chat messages and return the assistant reply text.

        Implementations raise :class:`~comment_intel.errors.TransportError`
        (or its timeout subclass) when the provider call itself fails.
        """


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------

def get_client(
    provider: str,
    api_key: str | None = None,
    *,
    base_url: str | None = None,
    model: str | None = None,
) -> "LLMClient":
    """Return an LLMClient for *provider* ('deepseek', 'openai', 'openrouter' or 'groq')."""

    provider = provider.lower().strip()
    if provider == "deepseek":
        from .openai_compat import DeepSeekClient  # local import to avoid heavy deps

        return DeepSeekClient(api_key=api_key, base_url=base_url, default_model=model)
    if provider == "openai":
        from .openai_compat import OpenAIClient

        return OpenAIClient(api_key=api_key, base_url=base_url, default_model=model)
    if provider == "openrouter":
        from .openrouter import OpenRouterClient

        return OpenRouterClient(api_key=api_key, base_url=base_url, default_model=model)
    if provider == "groq":
        from .groq import GroqClient

        return GroqClient(api_key=api_key, base_url=base_url, default_model=model)

    raise ValueError(f"Unknown LLM provider: {provider}")


def client_from_settings(settings: "PipelineSettings") -> "LLMClient":
    """Build the client configured by *settings*."""
    return get_client(
        settings.llm_provider,
        settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.chat_model,
    )
