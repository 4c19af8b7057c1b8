from abc import ABC, abstractmethod
from typing import Optional


class BaseAIClient(ABC):
    """
    Abstract base class for language-model clients.
    Concrete clients talk to one generation endpoint and raise their own
    exception types on failure; callers decide how to degrade.
    """

    def __init__(self, base_url: str, model: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            base_url: Root address of the model server
            model: Model name to request
            **kwargs: Additional client-specific parameters
        """
        self.base_url = (base_url or "").strip()
        self.model_name = (model or "").strip()

    @abstractmethod
    async def generate(
        self, prompt: str, system: Optional[str] = None, timeout: Optional[float] = None
    ) -> str:
        """
        Run one non-streaming generation.

        Args:
            prompt: User prompt text
            system: Optional system prompt
            timeout: Optional per-request timeout in seconds

        Returns:
            The generated text
        """

    @abstractmethod
    async def list_models(self) -> list[str]:
        """
        List the model names the server can serve.

        Returns:
            Model names as reported by the server
        """
