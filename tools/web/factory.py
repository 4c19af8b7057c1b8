"""Factory for creating the grounding service from environment configuration."""

from config.config import Config
from utils.logger import get_logger

from .cache import InMemoryTTLCache
from .research_service import ResearchService
from .search_client import WebSearchClient

logger = get_logger(__name__)

# Singleton cache instance (process-shared)
_cache_instance = None


def create_research_service_from_env(config: Config | None = None) -> ResearchService:
    """
    Create a ResearchService from environment variables.

    Environment variables (see config.config.Config):
        WEB_PAGE_TIMEOUT_SECONDS, WEB_SEARCH_TIMEOUT_SECONDS, WEB_MAX_RESULTS,
        WEB_USER_AGENT, WEB_ACCEPT_LANGUAGE, RESEARCH_CACHE_TTL_SECONDS

    Returns:
        Configured ResearchService instance
    """
    global _cache_instance

    config = config or Config()
    for problem in config.validate():
        logger.warning(f"Config problem: {problem}")

    if _cache_instance is None:
        _cache_instance = InMemoryTTLCache(ttl_seconds=config.RESEARCH_CACHE_TTL_SECONDS)

    client = WebSearchClient(
        user_agent=config.WEB_USER_AGENT,
        accept_language=config.WEB_ACCEPT_LANGUAGE,
        page_timeout_s=config.WEB_PAGE_TIMEOUT_SECONDS,
        search_timeout_s=config.WEB_SEARCH_TIMEOUT_SECONDS,
    )

    return ResearchService(
        client=client, cache=_cache_instance, max_sources=max(1, config.WEB_MAX_RESULTS)
    )
