"""OpenAI LLM provider."""

import openai

from ..exceptions import LLMError
from .base import LLMProvider


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "gpt-4.1-nano", timeout: float = 30.0):
        self._client = openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        # Newer models (o-series, gpt-4.1, gpt-5) take max_completion_tokens.
        self._use_max_completion_tokens = not self._is_legacy_model(model)

    @property
    def model(self) -> str:
        return self._model

    def generate(self, user_prompt: str, max_output_tokens: int = 200) -> str:
        messages = [{"role": "user", "content": user_prompt}]
        try:
            response = self._call_api(max_output_tokens, messages)
        except openai.APIError as e:
            raise LLMError(f"OpenAI API error: {e}") from e
        return response.choices[0].message.content or ""

    def _call_api(self, tokens: int, messages: list):
        """Call the API, switching max_tokens/max_completion_tokens once if rejected."""
        try:
            return self._create(tokens, messages)
        except openai.BadRequestError as e:
            if "unsupported parameter" not in str(e).lower() and "unsupported_parameter" not in str(e).lower():
                raise
            self._use_max_completion_tokens = not self._use_max_completion_tokens
            return self._create(tokens, messages)

    def _create(self, tokens: int, messages: list):
        token_param = (
            "max_completion_tokens"
            if self._use_max_completion_tokens
            else "max_tokens"
        )
        return self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            **{token_param: tokens},
        )

    @staticmethod
    def _is_legacy_model(model: str) -> bool:
        legacy_prefixes = ("gpt-3.5", "gpt-4o", "gpt-4-turbo", "gpt-4-")
        return any(model.startswith(p) for p in legacy_prefixes)
