"""Async client for a local Ollama server (/api/generate, /api/tags)."""

from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:11434"
DEFAULT_TIMEOUT_S = 120.0


class OllamaError(Exception):
    """Base error for Ollama requests."""


class OllamaNotConfiguredError(OllamaError):
    """No model selected."""


class OllamaInvalidURLError(OllamaError):
    """Base URL is not a usable http(s) address."""


class OllamaNetworkError(OllamaError):
    """Transport failure or non-2xx status."""


class OllamaResponseFormatError(OllamaError):
    """Response body is not the expected JSON shape."""


class OllamaClient(BaseAIClient):
    """
    Client for a local Ollama instance.

    Every failure is raised as an OllamaError subclass; nothing is cached on the
    class, so concurrent callers never observe each other's errors.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = "",
        client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ):
        """
        Initialize the Ollama client.

        Args:
            base_url: Server root, e.g. http://127.0.0.1:11434 (empty → default)
            model: Model name used by generate()
            client: Optional shared httpx.AsyncClient (connection pool)
            **kwargs: timeout - default request timeout in seconds
        """
        super().__init__(base_url or DEFAULT_BASE_URL, model, **kwargs)
        if not self.base_url:
            self.base_url = DEFAULT_BASE_URL
        self._client = client
        self.timeout = float(kwargs.get("timeout", DEFAULT_TIMEOUT_S))

    def _endpoint(self, path: str) -> str:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise OllamaInvalidURLError(f"Invalid Ollama base URL: '{self.base_url}'")
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _request(self, method: str, url: str, timeout: float, **kwargs) -> Any:
        try:
            if self._client is not None:
                response = await self._client.request(method, url, timeout=timeout, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OllamaNetworkError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.HTTPError as e:
            raise OllamaNetworkError(f"{type(e).__name__}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise OllamaResponseFormatError("Response body is not JSON") from e

    async def generate(
        self, prompt: str, system: Optional[str] = None, timeout: Optional[float] = None
    ) -> str:
        """
        Single-shot, non-streaming generation via /api/generate.

        Args:
            prompt: Prompt text
            system: Optional system prompt
            timeout: Per-request timeout in seconds (defaults to client timeout)

        Returns:
            The model's `response` string

        Raises:
            OllamaNotConfiguredError: No model selected
            OllamaInvalidURLError: Base URL unusable
            OllamaNetworkError: Transport error or non-2xx status
            OllamaResponseFormatError: Body missing a non-empty `response` string
        """
        if not self.model_name:
            raise OllamaNotConfiguredError("No local model selected")

        url = self._endpoint("api/generate")
        body: dict[str, Any] = {"model": self.model_name, "prompt": prompt, "stream": False}
        if system:
            body["system"] = system

        data = await self._request("POST", url, timeout or self.timeout, json=body)

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text:
            raise OllamaResponseFormatError("Ollama response format not recognized")

        logger.debug(f"Ollama generate ok (model={self.model_name}, chars={len(text)})")
        return text

    async def list_models(self) -> list[str]:
        """
        List models installed on the server via /api/tags.

        Returns:
            Model names in server order

        Raises:
            OllamaInvalidURLError, OllamaNetworkError, OllamaResponseFormatError
        """
        url = self._endpoint("api/tags")
        data = await self._request("GET", url, self.timeout)

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise OllamaResponseFormatError("Missing 'models' list in /api/tags response")

        names = []
        for item in models:
            if isinstance(item, dict) and isinstance(item.get("name"), str):
                names.append(item["name"])
        return names
