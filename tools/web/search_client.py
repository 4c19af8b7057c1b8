"""Search-results fetch, concurrent page fetch and content extraction."""

from __future__ import annotations

import asyncio
from urllib.parse import quote_plus, urlparse

import httpx

from utils.logger import get_logger

from .contracts import MAX_CONTENT_CHARS, RawSearchResult, RetrievedSource
from .errors import FetchFailedError, NoResultsError
from .html_text import extract_main_content
from .serp_parser import parse_results_page

logger = get_logger(__name__)

SEARCH_URL_TEMPLATE = "https://www.google.com/search?q={query}&num={count}&hl=en"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"
DEFAULT_MAX_RESULTS = 3
OVERFETCH_MARGIN = 2
PAGE_TIMEOUT_S = 4.0
SEARCH_TIMEOUT_S = 5.0


class WebSearchClient:
    """
    Search-and-fetch over a plain HTML results page.

    Page fetches fan out concurrently and each absorbs its own failure:
    - timeout / non-2xx -> source with the search snippet as content
    - connection failure, or degraded with no snippet -> source omitted
    Only NoResultsError and FetchFailedError cross this boundary.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        page_timeout_s: float = PAGE_TIMEOUT_S,
        search_timeout_s: float = SEARCH_TIMEOUT_S,
        search_url_template: str = SEARCH_URL_TEMPLATE,
    ):
        """
        Args:
            client: Optional shared httpx.AsyncClient; a short-lived one is opened per call otherwise
            user_agent: User-Agent header for every request
            accept_language: Accept-Language header for the results page
            page_timeout_s: Per-page fetch timeout
            search_timeout_s: Results-page fetch timeout
            search_url_template: Results page URL with {query} and {count} fields
        """
        self._client = client
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.page_timeout_s = page_timeout_s
        self.search_timeout_s = search_timeout_s
        self.search_url_template = search_url_template

    async def _get(self, url: str, headers: dict[str, str], timeout: float) -> httpx.Response:
        """GET with `timeout` as a deadline for the whole exchange (asyncio.TimeoutError)."""
        # httpx applies its timeout per phase, so a trickling body never trips it
        return await asyncio.wait_for(self._send(url, headers, timeout), timeout)

    async def _send(self, url: str, headers: dict[str, str], timeout: float) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, headers=headers, timeout=timeout, follow_redirects=True)
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            return await client.get(url, headers=headers)

    # ------------------------------------------------------------------
    # Results page
    # ------------------------------------------------------------------

    async def fetch_search_results(self, query: str, count: int) -> list[RawSearchResult]:
        """
        Fetch and parse the results page.

        Raises:
            FetchFailedError: Results page unreachable, non-2xx or undecodable
        """
        if not query or not query.strip():
            raise FetchFailedError("Invalid query")

        url = self.search_url_template.format(query=quote_plus(query.strip()), count=count)
        headers = {"User-Agent": self.user_agent, "Accept-Language": self.accept_language}

        try:
            response = await self._get(url, headers, self.search_timeout_s)
        except asyncio.TimeoutError as e:
            logger.warning(f"Search results page timed out after {self.search_timeout_s}s")
            raise FetchFailedError(f"Timed out after {self.search_timeout_s}s") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Search results page fetch failed",
                extra={"extra_fields": {"error_type": type(e).__name__, "error": str(e)}},
            )
            raise FetchFailedError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            logger.warning(f"Search results page returned HTTP {response.status_code}")
            raise FetchFailedError(f"HTTP {response.status_code}")

        try:
            html = response.content.decode(response.encoding or "utf-8")
        except (UnicodeDecodeError, LookupError) as e:
            raise FetchFailedError("Could not decode response") from e

        results = parse_results_page(html, count)
        logger.debug(f"Parsed {len(results)} results for '{query[:60]}'")
        return results

    # ------------------------------------------------------------------
    # Per-page fetch
    # ------------------------------------------------------------------

    def _degraded(self, result: RawSearchResult, reason: str, keep_empty: bool = False) -> RetrievedSource | None:
        if not result.snippet and not keep_empty:
            logger.info(f"Dropping {result.url}: {reason}, no snippet to fall back on")
            return None
        logger.info(f"Using snippet for {result.url}: {reason}")
        return RetrievedSource(
            title=result.title, url=result.url, snippet=result.snippet, content=result.snippet
        )

    async def fetch_source_content(
        self, result: RawSearchResult, keep_empty: bool = False
    ) -> RetrievedSource | None:
        """
        Fetch one result page and extract its main text. Never raises.

        Args:
            result: Parsed result to fetch
            keep_empty: Keep a degraded source even when there is no snippet to show

        Returns:
            RetrievedSource (full or snippet-degraded), or None when nothing usable came back
        """
        headers = {"User-Agent": self.user_agent}
        try:
            response = await self._get(result.url, headers, self.page_timeout_s)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return self._degraded(result, "timeout", keep_empty)
        except (httpx.TransportError, httpx.InvalidURL) as e:
            logger.info(f"Dropping {result.url}: {type(e).__name__}")
            return None
        except httpx.HTTPError as e:
            return self._degraded(result, type(e).__name__, keep_empty)

        if not response.is_success:
            return self._degraded(result, f"HTTP {response.status_code}", keep_empty)

        try:
            html = response.text
        except (UnicodeDecodeError, LookupError):
            return self._degraded(result, "undecodable body", keep_empty)

        text = extract_main_content(html)[:MAX_CONTENT_CHARS]
        return RetrievedSource(
            title=result.title,
            url=result.url,
            snippet=result.snippet,
            content=text or result.snippet,
        )

    async def fetch_many(self, results: list[RawSearchResult]) -> list[RetrievedSource]:
        """
        Fetch all pages concurrently and wait for every one to settle.

        Output order is completion-independent but not guaranteed to match input.
        """
        settled = await asyncio.gather(
            *(self.fetch_source_content(result) for result in results), return_exceptions=True
        )
        sources = []
        for result, outcome in zip(results, settled):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"Unexpected error fetching {result.url}: {outcome!r}",
                    exc_info=(type(outcome), outcome, outcome.__traceback__),
                )
                continue
            if outcome is not None:
                sources.append(outcome)
        return sources

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def search_and_fetch(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> list[RetrievedSource]:
        """
        Search, then fetch and extract the top results concurrently.

        Args:
            query: Search query
            max_results: Number of result pages to fetch

        Returns:
            RetrievedSource list (unordered; failed pages degraded or dropped)

        Raises:
            NoResultsError: The results page had no usable results
            FetchFailedError: The results page itself could not be retrieved
        """
        raw_results = await self.fetch_search_results(query, count=max_results + OVERFETCH_MARGIN)
        top_results = raw_results[:max_results]
        if not top_results:
            logger.warning(f"No web results for '{query[:60]}'")
            raise NoResultsError(query)

        sources = await self.fetch_many(top_results)
        logger.info(
            "Web search complete",
            extra={"extra_fields": {"results": len(top_results), "sources": len(sources)}},
        )
        return sources

    async def fetch_single_url(self, url: str) -> RetrievedSource | None:
        """
        Fetch one explicit URL (e.g. a link pasted by the user).

        A timeout or non-2xx answer still yields a source titled by host with
        empty content; only connection, DNS or URL failures give None.

        Returns:
            RetrievedSource, or None on total failure
        """
        host = urlparse(url).hostname if url else None
        if not host:
            return None
        raw = RawSearchResult(title=host, url=url, snippet="")
        return await self.fetch_source_content(raw, keep_empty=True)


_default_client = WebSearchClient()


async def search_and_fetch(query: str, max_results: int = DEFAULT_MAX_RESULTS) -> list[RetrievedSource]:
    return await _default_client.search_and_fetch(query, max_results)


async def fetch_single_url(url: str) -> RetrievedSource | None:
    return await _default_client.fetch_single_url(url)
