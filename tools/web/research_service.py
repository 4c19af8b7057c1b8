"""Grounding service: turn an AI-path prompt into injected web context."""

import asyncio
from dataclasses import replace

from utils.logger import get_logger

from .cache import InMemoryTTLCache
from .contracts import ResearchContext, RetrievedSource
from .errors import FetchFailedError, NoResultsError
from .intent import extract_urls, should_web_search
from .research_pack import format_sources_as_context
from .search_client import DEFAULT_MAX_RESULTS, WebSearchClient

logger = get_logger(__name__)

MAX_LINKED_URLS = 3


class ResearchService:
    """
    Gathers grounding context before an AI answer.

    Pasted links take priority: when the prompt contains URLs, those pages are
    read and no search runs. Otherwise a search runs only when the prompt looks
    like it needs fresh information.
    """

    def __init__(
        self,
        client: WebSearchClient,
        cache: InMemoryTTLCache | None = None,
        max_sources: int = DEFAULT_MAX_RESULTS,
    ):
        """
        Args:
            client: Web search client
            cache: Optional TTL cache keyed by prompt
            max_sources: Result pages to fetch per search
        """
        self.client = client
        self.cache = cache
        self.max_sources = max_sources

    async def _fetch_links(self, urls: list[str]) -> list[RetrievedSource]:
        fetched = await asyncio.gather(*(self.client.fetch_single_url(url) for url in urls))
        return [source for source in fetched if source is not None]

    async def build(self, prompt: str) -> ResearchContext:
        """
        Build grounding context for a prompt.

        This method NEVER raises for retrieval problems - they are returned in
        ResearchContext.error with used=False.

        Args:
            prompt: User prompt headed for the AI path

        Returns:
            ResearchContext
        """
        if self.cache is not None:
            cached = self.cache.get(prompt)
            if cached is not None:
                logger.info(f"Cache hit for prompt: '{prompt[:50]}'")
                return replace(cached, cache_hit=True)

        urls = extract_urls(prompt)
        if urls:
            sources = await self._fetch_links(urls[:MAX_LINKED_URLS])
            if not sources:
                return ResearchContext(used=False, error="links_unreachable")
            context = ResearchContext(
                used=True, injected_text=format_sources_as_context(sources), sources=sources
            )
        elif should_web_search(prompt):
            try:
                sources = await self.client.search_and_fetch(prompt, self.max_sources)
            except NoResultsError:
                return ResearchContext(used=False, error="no_results", search_query=prompt)
            except FetchFailedError as e:
                return ResearchContext(used=False, error=f"fetch_failed: {e.reason}", search_query=prompt)

            if not sources:
                return ResearchContext(used=False, error="no_sources", search_query=prompt)
            context = ResearchContext(
                used=True,
                injected_text=format_sources_as_context(sources),
                sources=sources,
                search_query=prompt,
            )
        else:
            return ResearchContext(used=False)

        if self.cache is not None:
            self.cache.set(prompt, context)

        logger.info(f"Grounding ready: {len(context.sources)} sources")
        return context
