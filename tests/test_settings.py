"""Tests for explicit configuration loading."""

import pytest

from comment_intel.config.settings import PipelineSettings, load_settings, settings_from_env


def test_defaults():
    settings = settings_from_env({})

    assert settings.youtube_api_key is None
    assert settings.llm_provider == "deepseek"
    assert settings.chat_model == "deepseek-chat"
    assert settings.temperature == 0.3
    assert settings.max_output_tokens == 4000
    assert settings.max_comments == 200
    assert settings.request_timeout_sec is None
    assert settings.retry_policy.max_attempts == 1


def test_values_from_mapping():
    settings = settings_from_env(
        {
            "YT_API_KEY": "yt",
            "LLM_PROVIDER": "Groq",
            "GROQ_API_KEY": "gsk",
            "MAX_COMMENTS": "75",
            "REQUEST_TIMEOUT_SEC": "90",
            "RETRY_ATTEMPTS": "3",
            "LLM_TEMPERATURE": "0.1",
        }
    )

    assert settings.youtube_api_key == "yt"
    assert settings.llm_provider == "groq"
    assert settings.llm_api_key == "gsk"
    assert settings.chat_model == "llama-3.3-70b-versatile"
    assert settings.max_comments == 75
    assert settings.request_timeout_sec == 90.0
    assert settings.retry_policy.max_attempts == 3
    assert settings.temperature == 0.1


def test_generic_llm_key_wins_over_provider_key():
    settings = settings_from_env({"LLM_API_KEY": "generic", "DEEPSEEK_API_KEY": "specific"})

    assert settings.llm_api_key == "generic"


def test_youtube_api_key_alias():
    assert settings_from_env({"YOUTUBE_API_KEY": "alias"}).youtube_api_key == "alias"


def test_invalid_number_names_the_variable():
    with pytest.raises(ValueError, match="MAX_COMMENTS"):
        settings_from_env({"MAX_COMMENTS": "lots"})


@pytest.mark.parametrize(
    "kwargs",
    [{"max_comments": 0}, {"max_output_tokens": 0}, {"request_timeout_sec": -5}],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        PipelineSettings(**kwargs)


def test_replace_ignores_none_and_swaps_default_model():
    base = PipelineSettings(llm_api_key="k")

    updated = base.replace(max_comments=None, llm_provider="openrouter")

    assert updated.max_comments == base.max_comments
    assert updated.chat_model == "deepseek/deepseek-chat"
    assert base.llm_provider == "deepseek"


def test_replace_keeps_explicit_model():
    base = PipelineSettings(chat_model="my-model")

    assert base.replace(llm_provider="groq").chat_model == "my-model"


def test_load_settings_reads_environment(monkeypatch):
    for name in ("LLM_API_KEY", "LLM_PROVIDER", "MAX_COMMENTS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("YT_API_KEY", "from-env")
    monkeypatch.setenv("OPENROUTER_API_KEY", "or-key")

    settings = load_settings(dotenv=False, llm_provider="openrouter", max_comments=20)

    assert settings.youtube_api_key == "from-env"
    assert settings.llm_provider == "openrouter"
    assert settings.llm_api_key == "or-key"
    assert settings.max_comments == 20


def test_provider_override_never_borrows_another_providers_key(monkeypatch):
    for name in ("LLM_API_KEY", "LLM_PROVIDER", "LLM_CHAT_MODEL", "GROQ_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEEPSEEK_API_KEY", "deepseek-secret")

    settings = load_settings(dotenv=False, llm_provider="groq")

    assert settings.llm_provider == "groq"
    assert settings.llm_api_key is None
    assert settings.chat_model == "llama-3.3-70b-versatile"


def test_provider_override_keeps_explicit_key(monkeypatch):
    for name in ("LLM_API_KEY", "LLM_PROVIDER", "GROQ_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEEPSEEK_API_KEY", "deepseek-secret")

    settings = load_settings(dotenv=False, llm_provider="groq", llm_api_key="groq-cli-key")

    assert settings.llm_api_key == "groq-cli-key"
