"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

ARTICLES_DIR = "Articles"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _default_vault_path() -> Path:
    return Path.home() / "obsidian-vault"


@dataclass
class Config:
    """Application configuration."""

    vault_path: Path = field(default_factory=_default_vault_path)
    firecrawl_api_key: str = ""
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_provider: str = "claude"
    summary_model: str = ""
    summarize: bool = True
    fetch_timeout: float = 30.0
    min_content_length: int = 50
    verbose: bool = False

    @property
    def articles_dir(self) -> Path:
        return self.vault_path / ARTICLES_DIR

    @property
    def default_summary_model(self) -> str:
        if self.summary_model:
            return self.summary_model
        if self.llm_provider == "claude":
            return "claude-haiku-4-5"
        return "gpt-4.1-nano"

    @property
    def llm_api_key(self) -> str:
        if self.llm_provider == "claude":
            return self.anthropic_api_key
        return self.openai_api_key

    @property
    def summaries_enabled(self) -> bool:
        """Summaries run only when switched on and a provider key is set."""
        return self.summarize and bool(self.llm_api_key)

    def validate(self) -> None:
        """Validate configuration values."""
        if self.llm_provider not in ("claude", "openai"):
            raise ConfigError(
                f"Unknown LLM provider: {self.llm_provider}. Use 'claude' or 'openai'."
            )
        if self.fetch_timeout <= 0:
            raise ConfigError("fetch_timeout must be positive.")
        if self.min_content_length < 0:
            raise ConfigError("min_content_length cannot be negative.")
        if self.vault_path.exists() and not self.vault_path.is_dir():
            raise ConfigError(f"Vault path is not a directory: {self.vault_path}")

    def require_firecrawl(self) -> None:
        """Check the fetch credentials; called only when a fetch is about to happen."""
        if not self.firecrawl_api_key:
            raise ConfigError(
                "FIRECRAWL_API_KEY is required. Set it in .env or environment."
            )


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _detect_provider(anthropic_api_key: str, openai_api_key: str) -> str:
    """Pick the provider whose key is set; OpenAI wins when both are."""
    if openai_api_key:
        return "openai"
    return "claude"


def load_config(
    vault_path: Optional[str] = None,
    provider: Optional[str] = None,
    summary_model: Optional[str] = None,
    summarize: Optional[bool] = None,
    verbose: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    if vault_path:
        vault = Path(vault_path).expanduser()
    elif os.getenv("ARTICLEVAULT_VAULT"):
        vault = Path(os.environ["ARTICLEVAULT_VAULT"]).expanduser()
    else:
        vault = _default_vault_path()

    if summarize is None:
        summarize = os.getenv("ARTICLEVAULT_SUMMARIZE", "true").lower() in _TRUE_VALUES

    anthropic_api_key = os.getenv("ANTHROPIC_API_KEY", "")
    openai_api_key = os.getenv("OPENAI_API_KEY", "")
    provider = (
        provider
        or os.getenv("LLM_PROVIDER")
        or _detect_provider(anthropic_api_key, openai_api_key)
    )

    config = Config(
        vault_path=vault.resolve(),
        firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY", ""),
        anthropic_api_key=anthropic_api_key,
        openai_api_key=openai_api_key,
        llm_provider=provider,
        summary_model=summary_model or os.getenv("ARTICLEVAULT_SUMMARY_MODEL", ""),
        summarize=summarize,
        fetch_timeout=_env_float("ARTICLEVAULT_FETCH_TIMEOUT", 30.0),
        verbose=verbose,
    )

    config.validate()
    return config
