"""LLM provider factory."""

from ..config import Config
from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider


def get_llm_provider(config: Config) -> LLMProvider:
    """Create the provider used for article summaries."""
    if config.llm_provider == "claude":
        return AnthropicProvider(
            api_key=config.anthropic_api_key,
            model=config.default_summary_model,
            timeout=config.fetch_timeout,
        )
    return OpenAIProvider(
        api_key=config.openai_api_key,
        model=config.default_summary_model,
        timeout=config.fetch_timeout,
    )
