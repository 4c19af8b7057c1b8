"""Data contracts for web retrieval."""

from dataclasses import dataclass, field
from urllib.parse import urlparse

MAX_CONTENT_CHARS = 2500


@dataclass(frozen=True)
class RawSearchResult:
    """An organic result parsed from a search results page, before its page is fetched."""

    title: str
    url: str
    snippet: str = ""


@dataclass(frozen=True)
class RetrievedSource:
    """A web page pulled into model context. Content is capped at MAX_CONTENT_CHARS."""

    title: str
    url: str
    snippet: str = ""
    content: str = ""

    def __post_init__(self):
        if len(self.content) > MAX_CONTENT_CHARS:
            object.__setattr__(self, "content", self.content[:MAX_CONTENT_CHARS])
        if not self.title:
            object.__setattr__(self, "title", urlparse(self.url).hostname or self.url)


@dataclass
class ResearchContext:
    """Grounding context to be injected into LLM prompts."""

    used: bool
    injected_text: str = ""
    sources: list[RetrievedSource] = field(default_factory=list)
    error: str | None = None
    cache_hit: bool = False
    search_query: str = ""
