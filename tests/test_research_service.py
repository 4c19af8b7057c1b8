import asyncio

import pytest

from tools.web import factory
from tools.web.cache import InMemoryTTLCache
from tools.web.contracts import RetrievedSource
from tools.web.errors import FetchFailedError, NoResultsError
from tools.web.research_service import ResearchService


class FakeSearchClient:
    def __init__(self, sources=None, error=None, pages=None):
        self.sources = sources or []
        self.error = error
        self.pages = pages or {}
        self.searches = []
        self.fetched = []

    async def search_and_fetch(self, query, max_results=3):
        self.searches.append((query, max_results))
        if self.error is not None:
            raise self.error
        return self.sources

    async def fetch_single_url(self, url):
        self.fetched.append(url)
        return self.pages.get(url)


SOURCE = RetrievedSource(title="Scores", url="https://scores.example.com/", content="Home 3 - 1 Away")


def test_search_prompt_builds_context():
    client = FakeSearchClient(sources=[SOURCE])
    context = asyncio.run(ResearchService(client, max_sources=4).build("latest football scores"))
    assert context.used is True
    assert context.sources == [SOURCE]
    assert "[Source 1: Scores](https://scores.example.com/)" in context.injected_text
    assert context.search_query == "latest football scores"
    assert client.searches == [("latest football scores", 4)]


def test_prompt_without_triggers_skips_search():
    client = FakeSearchClient(sources=[SOURCE])
    context = asyncio.run(ResearchService(client).build("write a limerick about cats"))
    assert context.used is False
    assert context.error is None
    assert client.searches == []


def test_pasted_links_read_instead_of_search():
    page = RetrievedSource(title="a.example.com", url="https://a.example.com/post", content="post body")
    client = FakeSearchClient(pages={"https://a.example.com/post": page})
    prompt = "summarize https://a.example.com/post and https://dead.example.com/ for today's news"
    context = asyncio.run(ResearchService(client).build(prompt))
    assert context.used is True
    assert context.sources == [page]
    assert client.fetched == ["https://a.example.com/post", "https://dead.example.com/"]
    assert client.searches == []


def test_unreachable_links():
    client = FakeSearchClient()
    context = asyncio.run(ResearchService(client).build("read https://dead.example.com/"))
    assert context.used is False
    assert context.error == "links_unreachable"


def test_search_errors_reported_not_raised():
    no_results = asyncio.run(
        ResearchService(FakeSearchClient(error=NoResultsError("q"))).build("latest obscure news")
    )
    assert no_results.used is False
    assert no_results.error == "no_results"

    failed = asyncio.run(
        ResearchService(FakeSearchClient(error=FetchFailedError("HTTP 503"))).build("latest obscure news")
    )
    assert failed.error == "fetch_failed: HTTP 503"

    empty = asyncio.run(ResearchService(FakeSearchClient(sources=[])).build("latest obscure news"))
    assert empty.error == "no_sources"


@pytest.mark.unit
def test_cache_hit_skips_search():
    client = FakeSearchClient(sources=[SOURCE])
    service = ResearchService(client, cache=InMemoryTTLCache(ttl_seconds=60))

    first = asyncio.run(service.build("latest football scores"))
    second = asyncio.run(service.build("Latest  football scores"))
    assert first.cache_hit is False
    assert second.cache_hit is True
    assert second.injected_text == first.injected_text
    assert len(client.searches) == 1


@pytest.mark.integration
def test_factory_reads_environment(mock_env, monkeypatch):
    monkeypatch.setattr(factory, "_cache_instance", None)
    service = factory.create_research_service_from_env()
    assert service.max_sources == 4
    assert service.client.page_timeout_s == 3.5
    assert service.client.search_timeout_s == 5.0
    assert service.cache is factory.create_research_service_from_env().cache
