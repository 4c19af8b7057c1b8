import httpx
import pytest
from dotenv import load_dotenv

# Load environment variables from .env file for tests
load_dotenv()


@pytest.fixture
def mock_http():
    """Factory for an httpx.AsyncClient whose requests are answered by `handler`."""

    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for testing."""
    env_vars = {
        "OLLAMA_BASE_URL": "http://127.0.0.1:11434",
        "OLLAMA_MODEL": "llama3.2:1b",
        "WEB_MAX_RESULTS": "4",
        "WEB_PAGE_TIMEOUT_SECONDS": "3.5",
        "RESEARCH_CACHE_TTL_SECONDS": "60",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars

