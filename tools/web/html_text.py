"""Regex-based HTML to plain-text extraction.

No DOM parser: pages are narrowed with tag-balanced patterns, then stripped.
Trades precision on pathological markup for zero parser dependencies and a
function that never fails on malformed input.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

NON_CONTENT_TAGS = ("script", "style", "nav", "footer", "header", "aside", "noscript", "iframe")
MIN_REGION_CHARS = 200

HTML_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
    "&#x27;": "'",
    "&#x2F;": "/",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "…",
}

_TAG_RE = re.compile(r"<[^>]+>", re.DOTALL)
_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in HTML_ENTITIES), re.IGNORECASE)
_ENTITY_LOOKUP = {entity.lower(): char for entity, char in HTML_ENTITIES.items()}
_NON_CONTENT_RES = [
    re.compile(rf"<{tag}\b[^>]*>.*?</{tag}\s*>", re.IGNORECASE | re.DOTALL) for tag in NON_CONTENT_TAGS
]


def _region_pattern(tag: str) -> re.Pattern:
    return re.compile(rf"<{tag}\b[^>]*>(.*?)</{tag}\s*>", re.IGNORECASE | re.DOTALL)


_ARTICLE_RE = _region_pattern("article")
_MAIN_RE = _region_pattern("main")
_BODY_RE = _region_pattern("body")


def decode_entities(text: str) -> str:
    """Decode the fixed table of common HTML entities in a single pass."""
    return _ENTITY_RE.sub(lambda m: _ENTITY_LOOKUP.get(m.group(0).lower(), m.group(0)), text)


def strip_html(html: str) -> str:
    """Replace every tag with a space, then decode entities."""
    return decode_entities(_TAG_RE.sub(" ", html))


def clean_whitespace(text: str) -> str:
    """Trim every line, drop empty ones, join with single newlines."""
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def remove_non_content(html: str) -> str:
    """Drop script/style/nav/... subtrees, leaving a space to keep words apart."""
    for pattern in _NON_CONTENT_RES:
        html = pattern.sub(" ", html)
    return html


@dataclass(frozen=True)
class RegionStrategy:
    """One step of the content-region fallback chain."""

    name: str
    extract: Callable[[str], str | None]
    min_chars: int = 0


def _region_text(pattern: re.Pattern) -> Callable[[str], str | None]:
    def extract(html: str) -> str | None:
        match = pattern.search(html)
        if match is None:
            return None
        return clean_whitespace(strip_html(match.group(1)))

    return extract


def _document_text(html: str) -> str | None:
    return clean_whitespace(strip_html(html))


DEFAULT_STRATEGIES = (
    RegionStrategy("article", _region_text(_ARTICLE_RE), MIN_REGION_CHARS),
    RegionStrategy("main", _region_text(_MAIN_RE), MIN_REGION_CHARS),
    RegionStrategy("body", _region_text(_BODY_RE)),
    RegionStrategy("document", _document_text),
)


def first_sufficient(html: str, strategies=DEFAULT_STRATEGIES) -> str:
    """Run strategies in order; the first result meeting its min_chars wins."""
    for strategy in strategies:
        text = strategy.extract(html)
        if text is not None and len(text) >= strategy.min_chars:
            return text
    return ""


def extract_main_content(html: str) -> str:
    """
    Extract readable main text from an HTML document.

    Pure and total: malformed or empty input yields "" rather than an error.

    Args:
        html: Raw (already decoded) HTML

    Returns:
        Plain text, one non-empty line per block
    """
    if not html:
        return ""
    return first_sufficient(remove_non_content(html))
