"""Tests for LLM summaries and providers."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from articlevault.config import Config
from articlevault.exceptions import LLMError
from articlevault.llm import get_llm_provider
from articlevault.llm.anthropic import AnthropicProvider
from articlevault.llm.openai import OpenAIProvider
from articlevault.summarize import MAX_SUMMARY_INPUT, summarize_content


@pytest.fixture
def claude_config(vault):
    return Config(vault_path=vault, anthropic_api_key="sk-ant-test")


class TestSummarizeContent:
    def test_disabled_without_key(self, config):
        with patch("articlevault.summarize.get_llm_provider") as factory:
            assert summarize_content("text", "Title", config) is None
        factory.assert_not_called()

    def test_returns_collapsed_summary(self, claude_config):
        llm = MagicMock()
        llm.generate.return_value = "  Key point.\n\nWhy it matters.  "
        with patch("articlevault.summarize.get_llm_provider", return_value=llm):
            summary = summarize_content("x" * 10_000, "Title", claude_config)

        assert summary == "Key point. Why it matters."
        prompt = llm.generate.call_args.args[0]
        assert "Title: Title" in prompt
        assert prompt.count("x") <= MAX_SUMMARY_INPUT + 5

    def test_provider_errors_return_none(self, claude_config):
        llm = MagicMock()
        llm.generate.side_effect = LLMError("boom")
        with patch("articlevault.summarize.get_llm_provider", return_value=llm):
            assert summarize_content("text", "Title", claude_config) is None

    def test_empty_reply_returns_none(self, claude_config):
        llm = MagicMock()
        llm.generate.return_value = "   "
        with patch("articlevault.summarize.get_llm_provider", return_value=llm):
            assert summarize_content("text", "Title", claude_config) is None


class TestProviders:
    def test_factory_picks_provider(self, vault):
        with patch("articlevault.llm.anthropic.anthropic.Anthropic"):
            provider = get_llm_provider(Config(vault_path=vault, anthropic_api_key="k"))
        assert isinstance(provider, AnthropicProvider)
        assert provider.model == "claude-haiku-4-5"

        with patch("articlevault.llm.openai.openai.OpenAI"):
            provider = get_llm_provider(
                Config(vault_path=vault, llm_provider="openai", openai_api_key="k", summary_model="gpt-4o-mini")
            )
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"

    def test_anthropic_generate(self):
        with patch("articlevault.llm.anthropic.anthropic.Anthropic") as client_cls:
            client = client_cls.return_value
            client.messages.create.return_value = SimpleNamespace(
                content=[SimpleNamespace(type="text", text="Short summary.")]
            )
            provider = AnthropicProvider(api_key="k")
            assert provider.generate("prompt", max_output_tokens=50) == "Short summary."

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 50
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_openai_generate_uses_completion_tokens_for_new_models(self):
        with patch("articlevault.llm.openai.openai.OpenAI") as client_cls:
            client = client_cls.return_value
            client.chat.completions.create.return_value = SimpleNamespace(
                choices=[SimpleNamespace(message=SimpleNamespace(content="Done."))]
            )
            provider = OpenAIProvider(api_key="k", model="gpt-4.1-nano")
            assert provider.generate("prompt") == "Done."

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["max_completion_tokens"] == 200
        assert "max_tokens" not in kwargs
