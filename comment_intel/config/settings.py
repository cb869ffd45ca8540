"""Runtime configuration for the comment intelligence pipeline.

Values come from the process environment (optionally seeded from a ``.env``
file).  Nothing is read at import time: call :func:`load_settings` once at the
edge of the program and pass the resulting :class:`PipelineSettings` into the
components that need it.

Recognised variables:
• YT_API_KEY / YOUTUBE_API_KEY  – YouTube Data API v3 key.
• LLM_PROVIDER                  – deepseek (default), openai, openrouter or groq.
• LLM_API_KEY                   – key for the provider; falls back to the
                                  provider specific variable (DEEPSEEK_API_KEY, ...).
• LLM_BASE_URL / LLM_CHAT_MODEL – endpoint and model overrides.
• LLM_TEMPERATURE / LLM_MAX_TOKENS
• MAX_COMMENTS                  – harvest limit per video.
• REQUEST_TIMEOUT_SEC           – overall deadline for one pipeline run.
• RETRY_ATTEMPTS / RETRY_BASE_DELAY / RETRY_MAX_DELAY
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from dotenv import load_dotenv  # type: ignore

from comment_intel.helpers.retry import RetryPolicy

PROVIDER_KEY_VARS: Dict[str, str] = {
    "deepseek": "DEEPSEEK_API_KEY",
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "groq": "GROQ_API_KEY",
}

DEFAULT_CHAT_MODELS: Dict[str, str] = {
    "deepseek": "deepseek-chat",
    "openai": "gpt-4o-mini",
    "openrouter": "deepseek/deepseek-chat",
    "groq": "llama-3.3-70b-versatile",
}


@dataclass(frozen=True)
class PipelineSettings:
    """Immutable container for runtime parameters."""

    # --- YouTube ------------------------------------------------------------
    youtube_api_key: Optional[str] = None
    max_comments: int = 200

    # --- Language model -----------------------------------------------------
    llm_provider: str = "deepseek"
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    chat_model: str = DEFAULT_CHAT_MODELS["deepseek"]
    temperature: float = 0.3
    max_output_tokens: int = 4000

    # --- Deadline and retries -------------------------------------------------
    request_timeout_sec: Optional[float] = None
    retry_attempts: int = 1
    retry_base_delay: float = 1.0
    retry_max_delay: float = 30.0

    def __post_init__(self):
        if self.max_comments < 1:
            raise ValueError("max_comments must be a positive integer")
        if self.max_output_tokens < 1:
            raise ValueError("max_output_tokens must be a positive integer")
        if self.request_timeout_sec is not None and self.request_timeout_sec <= 0:
            raise ValueError("request_timeout_sec must be positive when set")
        object.__setattr__(self, "llm_provider", self.llm_provider.lower().strip())

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.retry_attempts,
            base_delay=self.retry_base_delay,
            max_delay=self.retry_max_delay,
        )

    def replace(self, **overrides: Any) -> "PipelineSettings":
        """Return a copy with *overrides* applied; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        provider = str(changes.get("llm_provider", self.llm_provider)).lower().strip()
        # Switching provider keeps an explicit model but swaps the default one.
        if (
            provider != self.llm_provider
            and "chat_model" not in changes
            and self.chat_model == DEFAULT_CHAT_MODELS.get(self.llm_provider)
            and provider in DEFAULT_CHAT_MODELS
        ):
            changes["chat_model"] = DEFAULT_CHAT_MODELS[provider]
        return dataclasses.replace(self, **changes)


def _env_value(env: Mapping[str, str], name: str, cast: Callable[[str], Any], default: Any) -> Any:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


def settings_from_env(env: Mapping[str, str]) -> PipelineSettings:
    """Build settings from an explicit mapping (``os.environ`` or a test dict)."""

    provider = (env.get("LLM_PROVIDER") or "deepseek").lower().strip()
    llm_api_key = env.get("LLM_API_KEY") or env.get(PROVIDER_KEY_VARS.get(provider, ""))

    return PipelineSettings(
        youtube_api_key=env.get("YT_API_KEY") or env.get("YOUTUBE_API_KEY"),
        max_comments=_env_value(env, "MAX_COMMENTS", int, 200),
        llm_provider=provider,
        llm_api_key=llm_api_key,
        llm_base_url=env.get("LLM_BASE_URL") or None,
        chat_model=env.get("LLM_CHAT_MODEL") or DEFAULT_CHAT_MODELS.get(provider, DEFAULT_CHAT_MODELS["deepseek"]),
        temperature=_env_value(env, "LLM_TEMPERATURE", float, 0.3),
        max_output_tokens=_env_value(env, "LLM_MAX_TOKENS", int, 4000),
        request_timeout_sec=_env_value(env, "REQUEST_TIMEOUT_SEC", float, None),
        retry_attempts=_env_value(env, "RETRY_ATTEMPTS", int, 1),
        retry_base_delay=_env_value(env, "RETRY_BASE_DELAY", float, 1.0),
        retry_max_delay=_env_value(env, "RETRY_MAX_DELAY", float, 30.0),
    )


def load_settings(*, dotenv: bool = True, **overrides: Any) -> PipelineSettings:
    """Load settings from ``.env`` and the environment, then apply *overrides*."""

    if dotenv:
        load_dotenv()
    env: Dict[str, str] = dict(os.environ)
    provider = overrides.pop("llm_provider", None)
    if provider:
        # The key must come from the chosen provider, never from the default one.
        env["LLM_PROVIDER"] = provider
    return settings_from_env(env).replace(**overrides)


__all__ = [
    "PipelineSettings",
    "PROVIDER_KEY_VARS",
    "DEFAULT_CHAT_MODELS",
    "settings_from_env",
    "load_settings",
]
