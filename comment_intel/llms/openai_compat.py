"""Chat clients for providers that speak the OpenAI wire protocol."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, Optional

import openai
from openai import OpenAI

from comment_intel.errors import StageTimeoutError, TransportError

from .base import LLMClient

logger = logging.getLogger(__name__)


class OpenAICompatibleClient(LLMClient):
    """Wrapper around ``openai.OpenAI`` pointed at any compatible endpoint."""

    PROVIDER: ClassVar[str] = "openai"
    BASE_URL: ClassVar[Optional[str]] = None
    DEFAULT_MODEL: ClassVar[str] = "gpt-4o-mini"

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str | None = None,
        default_model: str | None = None,
        default_headers: Dict[str, str] | None = None,
    ):
        if not api_key:
            raise ValueError(f"{self.PROVIDER} API key must be provided.")

        self.default_model = default_model or self.DEFAULT_MODEL
        # Dedicated client instance, no global SDK state.
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url or self.BASE_URL,
            default_headers=default_headers,
            max_retries=0,  # retries are the caller's RetryPolicy
        )

    def chat(self, messages: Any, model: str | None = None, **kwargs: Any) -> str:  # type: ignore[override]
        """Return the assistant reply for *messages* using *model*."""
        model = model or self.default_model
        try:
            completion = self._client.chat.completions.create(  # type: ignore[arg-type]
                model=model,
                messages=messages,
                **kwargs,
            )
        except openai.APITimeoutError as exc:
            raise StageTimeoutError("synthesis", kwargs.get("timeout"), service=self.PROVIDER) from exc
        except openai.APIStatusError as exc:
            raise TransportError(self.PROVIDER, f"{self.PROVIDER} API error: {exc.message}", status=exc.status_code) from exc
        except openai.APIError as exc:
            raise TransportError(self.PROVIDER, f"{self.PROVIDER} request failed: {exc}") from exc

        if not completion.choices:
            logger.warning("%s returned no choices for model %s", self.PROVIDER, model)
            return ""
        return completion.choices[0].message.content or ""


class DeepSeekClient(OpenAICompatibleClient):
    """DeepSeek chat models via their OpenAI-compatible endpoint."""

    PROVIDER = "deepseek"
    BASE_URL = "https://api.deepseek.com/v1"
    DEFAULT_MODEL = "deepseek-chat"


class OpenAIClient(OpenAICompatibleClient):
    """OpenAI itself (SDK default endpoint)."""


__all__ = ["OpenAICompatibleClient", "DeepSeekClient", "OpenAIClient"]
