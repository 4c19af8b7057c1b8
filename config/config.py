import os
from pathlib import Path

from dotenv import load_dotenv

from orchestrator.routing_types import ModelConfig

DEFAULT_OLLAMA_BASE_URL = "http://127.0.0.1:11434"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Environment-driven settings for classification and web retrieval."""

    def __init__(self):
        """Initialize configuration from environment variables (and .env if present)."""
        env_path = Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Local model endpoint used by the intent classifier
        self.OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", DEFAULT_OLLAMA_BASE_URL).strip()
        self.OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "").strip()
        self.CLASSIFIER_TIMEOUT_SECONDS = _float_env("CLASSIFIER_TIMEOUT_SECONDS", 2.0)

        # Web retrieval
        self.WEB_PAGE_TIMEOUT_SECONDS = _float_env("WEB_PAGE_TIMEOUT_SECONDS", 4.0)
        self.WEB_SEARCH_TIMEOUT_SECONDS = _float_env("WEB_SEARCH_TIMEOUT_SECONDS", 5.0)
        self.WEB_MAX_RESULTS = _int_env("WEB_MAX_RESULTS", 3)
        self.WEB_USER_AGENT = os.getenv("WEB_USER_AGENT", DEFAULT_USER_AGENT).strip()
        self.WEB_ACCEPT_LANGUAGE = os.getenv("WEB_ACCEPT_LANGUAGE", "en-US,en;q=0.9").strip()
        self.RESEARCH_CACHE_TTL_SECONDS = _int_env("RESEARCH_CACHE_TTL_SECONDS", 600)

    def model_config(self) -> ModelConfig | None:
        """
        Build the classifier model configuration.

        Returns:
            ModelConfig, or None when no model is selected (heuristic-only mode)
        """
        if not self.OLLAMA_MODEL or not self.OLLAMA_BASE_URL:
            return None
        return ModelConfig(base_url=self.OLLAMA_BASE_URL, model=self.OLLAMA_MODEL)

    def validate(self) -> list[str]:
        """
        Check settings for values that would make retrieval misbehave.

        Returns:
            List of problems (empty when the configuration is usable)
        """
        problems = []
        if self.WEB_MAX_RESULTS < 1:
            problems.append(f"WEB_MAX_RESULTS must be >= 1 (got {self.WEB_MAX_RESULTS})")
        for name in ("CLASSIFIER_TIMEOUT_SECONDS", "WEB_PAGE_TIMEOUT_SECONDS", "WEB_SEARCH_TIMEOUT_SECONDS"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive")
        if self.OLLAMA_MODEL and not self.OLLAMA_BASE_URL.lower().startswith(("http://", "https://")):
            problems.append(f"OLLAMA_BASE_URL is not an http(s) URL: '{self.OLLAMA_BASE_URL}'")
        return problems

    def get_model_info(self) -> str:
        """
        Describe the active classification mode.

        Returns:
            str: Human-readable description
        """
        if self.model_config() is None:
            return "Heuristic only (no local model configured)"
        return f"Ollama ({self.OLLAMA_MODEL} @ {self.OLLAMA_BASE_URL})"
