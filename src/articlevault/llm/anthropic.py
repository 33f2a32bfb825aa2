"""Claude/Anthropic LLM provider."""

import anthropic

from ..exceptions import LLMError
from .base import LLMProvider


class AnthropicProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "claude-haiku-4-5", timeout: float = 30.0):
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    def generate(self, user_prompt: str, max_output_tokens: int = 200) -> str:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=max_output_tokens,
                temperature=0.3,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIError as e:
            raise LLMError(f"Anthropic API error: {e}") from e
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
