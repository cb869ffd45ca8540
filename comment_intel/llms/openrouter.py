from __future__ import annotations

from .openai_compat import OpenAICompatibleClient


class OpenRouterClient(OpenAICompatibleClient):
    """Wrapper around the OpenRouter API compatible with the OpenAI SDK."""

    PROVIDER = "openrouter"
    BASE_URL = "https://openrouter.ai/api/v1"
    DEFAULT_MODEL = "deepseek/deepseek-chat"

    def __init__(self, api_key: str | None, *, base_url: str | None = None, default_model: str | None = None):
        super().__init__(
            api_key,
            base_url=base_url,
            default_model=default_model,
            default_headers={
                "HTTP-Referer": "https://github.com/yt-comment-intel/yt-comment-intel",  # project attribution per provider policy
                "X-Title": "YT Comment Intel",
            },
        )
