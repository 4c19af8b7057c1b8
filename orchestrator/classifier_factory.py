"""Factory for creating the query classifier from environment configuration."""

from config.config import Config
from orchestrator.query_classifier import QueryClassifier
from utils.logger import get_logger

logger = get_logger(__name__)


def create_classifier_from_env(config: Config | None = None) -> QueryClassifier:
    """
    Create a QueryClassifier from environment variables.

    Environment variables (see config.config.Config):
        OLLAMA_BASE_URL, OLLAMA_MODEL, CLASSIFIER_TIMEOUT_SECONDS

    Returns:
        QueryClassifier; heuristic-only when no model is configured
    """
    config = config or Config()
    logger.info(f"Query classifier mode: {config.get_model_info()}")
    return QueryClassifier(
        model_timeout_s=config.CLASSIFIER_TIMEOUT_SECONDS,
        model_config=config.model_config(),
    )
