"""Tests for the OpenAI-compatible chat clients and the client factory."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from comment_intel.config.settings import PipelineSettings
from comment_intel.errors import StageTimeoutError, TransportError
from comment_intel.llms import (
    DeepSeekClient,
    GroqClient,
    OpenAIClient,
    OpenRouterClient,
    client_from_settings,
    get_client,
)

MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_openai():
    with patch("comment_intel.llms.openai_compat.OpenAI") as mock:
        instance = MagicMock()
        mock.return_value = instance
        yield mock


def test_deepseek_client_targets_deepseek_endpoint(mock_openai):
    DeepSeekClient(api_key="sk-test")

    kwargs = mock_openai.call_args.kwargs
    assert kwargs["api_key"] == "sk-test"
    assert kwargs["base_url"] == "https://api.deepseek.com/v1"
    assert kwargs["max_retries"] == 0


def test_openrouter_client_sends_attribution_headers(mock_openai):
    OpenRouterClient(api_key="or-test")

    kwargs = mock_openai.call_args.kwargs
    assert kwargs["base_url"] == "https://openrouter.ai/api/v1"
    assert "X-Title" in kwargs["default_headers"]


def test_base_url_override(mock_openai):
    GroqClient(api_key="g", base_url="http://localhost:8080/v1")

    assert mock_openai.call_args.kwargs["base_url"] == "http://localhost:8080/v1"


def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError):
        DeepSeekClient(api_key=None)


def test_chat_returns_message_content(mock_openai):
    create = mock_openai.return_value.chat.completions.create
    create.return_value = _completion('{"ok": true}')
    client = DeepSeekClient(api_key="k")

    reply = client.chat(MESSAGES, temperature=0.3, max_tokens=4000, timeout=12.0)

    assert reply == '{"ok": true}'
    create.assert_called_once_with(
        model="deepseek-chat", messages=MESSAGES, temperature=0.3, max_tokens=4000, timeout=12.0
    )


def test_chat_model_override(mock_openai):
    create = mock_openai.return_value.chat.completions.create
    create.return_value = _completion("x")

    DeepSeekClient(api_key="k", default_model="deepseek-reasoner").chat(MESSAGES)
    assert create.call_args.kwargs["model"] == "deepseek-reasoner"

    DeepSeekClient(api_key="k").chat(MESSAGES, model="other")
    assert create.call_args.kwargs["model"] == "other"


@pytest.mark.parametrize("completion", [_completion(None), SimpleNamespace(choices=[])])
def test_missing_content_returns_empty_string(mock_openai, completion):
    mock_openai.return_value.chat.completions.create.return_value = completion

    assert DeepSeekClient(api_key="k").chat(MESSAGES) == ""


def test_timeout_is_translated(mock_openai):
    request = httpx.Request("POST", "https://api.deepseek.com/v1/chat/completions")
    mock_openai.return_value.chat.completions.create.side_effect = openai.APITimeoutError(request=request)

    with pytest.raises(StageTimeoutError) as exc_info:
        DeepSeekClient(api_key="k").chat(MESSAGES, timeout=3.0)
    assert exc_info.value.stage == "synthesis"
    assert exc_info.value.timeout_seconds == 3.0


def test_status_error_is_translated(mock_openai):
    request = httpx.Request("POST", "https://api.deepseek.com/v1/chat/completions")
    response = httpx.Response(429, request=request, json={"error": {"message": "slow down"}})
    error = openai.RateLimitError("slow down", response=response, body=None)
    mock_openai.return_value.chat.completions.create.side_effect = error

    with pytest.raises(TransportError) as exc_info:
        DeepSeekClient(api_key="k").chat(MESSAGES)
    assert exc_info.value.status == 429
    assert exc_info.value.service == "deepseek"
    assert not isinstance(exc_info.value, StageTimeoutError)


def test_connection_error_is_translated(mock_openai):
    request = httpx.Request("POST", "https://api.deepseek.com/v1/chat/completions")
    mock_openai.return_value.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(TransportError):
        DeepSeekClient(api_key="k").chat(MESSAGES)


@pytest.mark.parametrize(
    "provider, cls",
    [("deepseek", DeepSeekClient), ("OpenAI", OpenAIClient), ("openrouter", OpenRouterClient), (" groq ", GroqClient)],
)
def test_get_client(mock_openai, provider, cls):
    assert isinstance(get_client(provider, "k"), cls)


def test_get_client_unknown_provider():
    with pytest.raises(ValueError):
        get_client("gemini", "k")


def test_client_from_settings(mock_openai):
    settings = PipelineSettings(llm_provider="groq", llm_api_key="k", chat_model="llama-x")

    client = client_from_settings(settings)

    assert isinstance(client, GroqClient)
    assert client.default_model == "llama-x"
