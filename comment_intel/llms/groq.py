from __future__ import annotations

from .openai_compat import OpenAICompatibleClient


class GroqClient(OpenAICompatibleClient):
    """Wrapper for Groq Cloud LLMs via the OpenAI-compatible endpoint."""

    PROVIDER = "groq"
    BASE_URL = "https://api.groq.com/openai/v1"
    DEFAULT_MODEL = "llama-3.3-70b-versatile"
