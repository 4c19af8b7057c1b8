import asyncio
import json
import random
import string
import time

import httpx
import pytest

from orchestrator.classifier_factory import create_classifier_from_env
from orchestrator.classifier_vocab import ClassifierVocabulary
from orchestrator.query_classifier import CLASSIFIER_SYSTEM_PROMPT, QueryClassifier, classify, heuristic
from orchestrator.routing_types import ClassificationInput, ModelConfig, QueryIntent

MODEL = ModelConfig(base_url="http://127.0.0.1:11434", model="llama3.2:1b")


@pytest.mark.parametrize(
    "query, expected",
    [
        ("https://example.com/page", QueryIntent.SEARCH),
        ("www.example.com", QueryIntent.SEARCH),
        ("github.com", QueryIntent.SEARCH),
        ("docs.python.org/3/library", QueryIntent.SEARCH),
        ("YouTube", QueryIntent.SEARCH),
        ("google docs", QueryIntent.SEARCH),
        ("what is rust?", QueryIntent.AI_CHAT),
        ("explain quantum computing", QueryIntent.AI_CHAT),
        ("how do i center a div", QueryIntent.AI_CHAT),
        ("best laptops for programming students under budget in 2025", QueryIntent.AI_CHAT),
        ("what is inflation", QueryIntent.AMBIGUOUS),
        ("why is the sky blue today", QueryIntent.AI_CHAT),
        ("weather in tokyo", QueryIntent.SEARCH),
        ("pizza near me", QueryIntent.SEARCH),
        ("python", QueryIntent.AMBIGUOUS),
        ("black hole", QueryIntent.AMBIGUOUS),
        ("learn rust", QueryIntent.AMBIGUOUS),
        ("cheap flights", QueryIntent.SEARCH),
        ("best hiking trails around denver", QueryIntent.AMBIGUOUS),
        ("history of the roman empire and fall", QueryIntent.AI_CHAT),
    ],
)
def test_heuristic_cascade(query, expected):
    assert heuristic(query) == expected


def test_heuristic_normalizes_case_and_whitespace():
    assert heuristic("  Weather   IN  Tokyo ") == heuristic("weather in tokyo")


def test_heuristic_is_total():
    rng = random.Random(7)
    noise = "".join(rng.choice(string.printable) for _ in range(500))
    for query in ("", "   ", "\n\t", "?", "....", noise, "日本語のクエリ"):
        assert heuristic(query) in set(QueryIntent)
    assert heuristic("") == QueryIntent.SEARCH


def test_custom_vocabulary():
    vocabulary = ClassifierVocabulary(known_sites=frozenset({"intranet"}))
    classifier = QueryClassifier(vocabulary=vocabulary)
    assert classifier.heuristic("intranet") == QueryIntent.SEARCH
    assert classifier.heuristic("youtube") == QueryIntent.SEARCH  # length band, not site rule


def _model_classifier(mock_http, handler):
    return QueryClassifier(http_client=mock_http(handler))


def _reply(text):
    def handler(request):
        return httpx.Response(200, json={"model": "llama3.2:1b", "response": text, "done": True})

    return handler


@pytest.mark.parametrize(
    "reply, expected",
    [
        ("search", QueryIntent.SEARCH),
        ("  Search\n", QueryIntent.SEARCH),
        ("AI", QueryIntent.AI_CHAT),
        ("ai chat", QueryIntent.AI_CHAT),
        ("Ambiguous.", QueryIntent.AMBIGUOUS),
    ],
)
def test_model_verdict_parsed_by_prefix(mock_http, reply, expected):
    classifier = _model_classifier(mock_http, _reply(reply))
    assert asyncio.run(classifier.classify("youtube", MODEL)) == expected


def test_unrecognized_verdict_falls_back(mock_http):
    classifier = _model_classifier(mock_http, _reply("I think this is a search query"))
    assert asyncio.run(classifier.classify("explain quantum computing", MODEL)) == QueryIntent.AI_CHAT


def _raise_connect(request):
    raise httpx.ConnectError("connection refused", request=request)


def _raise_timeout(request):
    raise httpx.ReadTimeout("timed out", request=request)


@pytest.mark.parametrize(
    "handler",
    [
        _raise_connect,
        _raise_timeout,
        lambda request: httpx.Response(500, text="model crashed"),
        lambda request: httpx.Response(200, text="not json at all"),
        lambda request: httpx.Response(200, json={"unexpected": "shape"}),
        lambda request: httpx.Response(200, json={"response": ""}),
    ],
    ids=["connect", "timeout", "http_500", "invalid_json", "missing_field", "empty_response"],
)
def test_model_failures_fall_back_to_heuristic(mock_http, handler):
    classifier = _model_classifier(mock_http, handler)
    for query in ("explain quantum computing", "weather in tokyo", "python"):
        assert asyncio.run(classifier.classify(query, MODEL)) == heuristic(query)


def test_request_shape(mock_http):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"response": "search"})

    classifier = _model_classifier(mock_http, handler)
    asyncio.run(classifier.classify("  nba scores today  ", MODEL))

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/api/generate"
    body = json.loads(request.content)
    assert body == {
        "model": "llama3.2:1b",
        "prompt": "nba scores today",
        "stream": False,
        "system": CLASSIFIER_SYSTEM_PROMPT,
    }
    assert request.extensions["timeout"]["read"] == 2.0


@pytest.mark.parametrize(
    "config",
    [None, ModelConfig(base_url="", model="llama3.2:1b"), ModelConfig(base_url="http://127.0.0.1:11434", model=" ")],
)
def test_missing_model_config_never_calls_network(mock_http, config):
    def handler(request):
        raise AssertionError("no request expected")

    classifier = _model_classifier(mock_http, handler)
    assert asyncio.run(classifier.classify("explain quantum computing", config)) == QueryIntent.AI_CHAT


def test_empty_query_is_search_without_network(mock_http):
    def handler(request):
        raise AssertionError("no request expected")

    classifier = _model_classifier(mock_http, handler)
    assert asyncio.run(classifier.classify("   ", MODEL)) == QueryIntent.SEARCH


def test_invalid_base_url_falls_back():
    config = ModelConfig(base_url="not-a-url", model="llama3.2:1b")
    assert asyncio.run(QueryClassifier().classify("pizza near me", config)) == QueryIntent.SEARCH


def test_module_classify_accepts_classification_input():
    result = asyncio.run(classify(ClassificationInput(query="write me a haiku about rain")))
    assert result == QueryIntent.AI_CHAT
    assert asyncio.run(classify("youtube")) == QueryIntent.SEARCH


def test_trickling_model_response_is_cut_off_at_deadline(mock_http):
    async def trickle():
        for _ in range(20):
            await asyncio.sleep(0.25)
            yield b" "
        yield b'{"response": "search"}'

    def handler(request):
        return httpx.Response(200, headers={"Content-Type": "application/json"}, content=trickle())

    classifier = QueryClassifier(http_client=mock_http(handler), model_timeout_s=0.3)
    started = time.monotonic()
    result = asyncio.run(classifier.classify("explain quantum computing", MODEL))
    assert result == QueryIntent.AI_CHAT
    assert time.monotonic() - started < 2.0


def test_construction_model_config_used_by_default(mock_http):
    classifier = QueryClassifier(http_client=mock_http(_reply("search")), model_config=MODEL)
    assert asyncio.run(classifier.classify("explain quantum computing")) == QueryIntent.SEARCH


def test_classifier_from_env(mock_env, monkeypatch):
    monkeypatch.setenv("CLASSIFIER_TIMEOUT_SECONDS", "1.5")
    classifier = create_classifier_from_env()
    assert classifier.model_timeout_s == 1.5
    assert classifier.model_config == MODEL

    monkeypatch.setenv("OLLAMA_MODEL", "")
    assert create_classifier_from_env().model_config is None
