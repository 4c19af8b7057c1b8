import pytest

from tools.web.intent import correct_url_typos, extract_urls, resolve_as_url, should_web_search


@pytest.mark.parametrize(
    "text, expected",
    [
        ("https://example.com", "https://example.com"),
        ("HTTP://Example.com/Path", "http://example.com/path"),
        ("github.com", "https://github.com"),
        ("gihub.com/user/repo", "https://github.com/user/repo"),
        ("yuotube.com", "https://youtube.com"),
        ("news.ycombinator.com", "https://news.ycombinator.com"),
        ("example.invalidtld", None),
        ("what is github.com", None),
        ("python", None),
        ("", None),
    ],
)
def test_resolve_as_url(text, expected):
    assert resolve_as_url(text) == expected


def test_correct_url_typos_only_touches_first_label():
    assert correct_url_typos("gogle.com") == "google.com"
    assert correct_url_typos("mail.gogle.com") == "mail.gogle.com"
    assert correct_url_typos("example.com") == "example.com"


def test_extract_urls():
    text = (
        "Compare https://a.example.com/post?id=1, and www.b.example.org. "
        "Also (https://a.example.com/post?id=1) again."
    )
    assert extract_urls(text) == ["https://a.example.com/post?id=1", "https://www.b.example.org"]
    assert extract_urls("no links here") == []
    assert extract_urls("") == []


@pytest.mark.parametrize(
    "prompt",
    [
        "latest news on the election",
        "What's the weather in Paris",
        "who won the game last night",
        "best phones of 2025",
        "Bitcoin price",
    ],
)
def test_should_web_search_triggers(prompt):
    assert should_web_search(prompt) is True


@pytest.mark.parametrize(
    "prompt",
    [
        "write a poem about the sea",
        "explain recursion",
        "summarize the newsletter I pasted",
        "",
    ],
)
def test_should_web_search_skips(prompt):
    assert should_web_search(prompt) is False
