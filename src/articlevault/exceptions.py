"""Custom exceptions for articlevault."""


class ArticleVaultError(Exception):
    """Base exception for articlevault."""


class ConfigError(ArticleVaultError):
    """Raised when configuration is missing or invalid."""


class ValidationError(ArticleVaultError):
    """Raised when a URL is malformed or points at a disallowed target."""


class FetchError(ArticleVaultError):
    """Raised when the network fetch of an article fails."""


class FetchTimeoutError(FetchError):
    """Raised when the fetch does not complete within the configured timeout."""


class LLMError(ArticleVaultError):
    """Raised when LLM API calls fail."""
