"""Web retrieval: search, page fetch, content extraction and context formatting."""

from .contracts import RawSearchResult, ResearchContext, RetrievedSource
from .errors import FetchFailed, FetchFailedError, NoResults, NoResultsError, WebSearchError
from .factory import create_research_service_from_env
from .research_pack import format_sources_as_context
from .search_client import WebSearchClient, fetch_single_url, search_and_fetch

__all__ = [
    "FetchFailed",
    "FetchFailedError",
    "NoResults",
    "NoResultsError",
    "RawSearchResult",
    "ResearchContext",
    "RetrievedSource",
    "WebSearchClient",
    "WebSearchError",
    "create_research_service_from_env",
    "fetch_single_url",
    "format_sources_as_context",
    "search_and_fetch",
]
