from .base import LLMClient, client_from_settings, get_client  # noqa: F401
from .groq import GroqClient  # noqa: F401
from .openai_compat import DeepSeekClient, OpenAIClient, OpenAICompatibleClient  # noqa: F401
from .openrouter import OpenRouterClient  # noqa: F401

__all__ = [
    "LLMClient",
    "OpenAICompatibleClient",
    "DeepSeekClient",
    "OpenAIClient",
    "OpenRouterClient",
    "GroqClient",
    "get_client",
    "client_from_settings",
]
