"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    @abstractmethod
    def generate(self, user_prompt: str, max_output_tokens: int = 200) -> str:
        """Return the text completion for a single user prompt.

        Raises:
            LLMError: if the provider call fails.
        """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier used for requests."""
