"""Parse organic results out of a search engine's HTML results page.

Two tiers:
1. Outbound-link marker split (precise, tied to the engine's markup).
2. Generic href scan (coarse, used only when tier 1 finds nothing).
"""

import re
from urllib.parse import unquote, urlparse

from .contracts import RawSearchResult
from .html_text import decode_entities, strip_html

RESULT_LINK_MARKER = '<a href="/url?q='
ENGINE_HOST_MARKERS = ("google.",)
AD_REDIRECT_HOSTS = (
    "googleadservices.com",
    "doubleclick.net",
    "googlesyndication.com",
    "adservice.google",
    "youtube.com/redirect",
)
FALLBACK_EXCLUDED_HOST_MARKERS = ("google", "gstatic", "googleapis", "googleusercontent", "ggpht")
AD_REDIRECT_PATHS = ("/aclk", "/pagead/")

MIN_SNIPPET_CHARS = 40
MAX_SNIPPET_CHARS = 300
FALLBACK_MAX_RESULTS = 5

_SPAN_RE = re.compile(r"<span[^>]*>(.*?)</span>", re.DOTALL | re.IGNORECASE)
_HREF_RE = re.compile(r'href="(https?://[^"]+)"', re.IGNORECASE)
_TARGET_RE = re.compile(r'[^&"]+')


def _host(url: str) -> str | None:
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        return None
    return parsed.hostname.lower()


def is_blocked_url(url: str) -> bool:
    """True for links back to the engine itself or to ad/tracking redirects."""
    host = _host(url)
    if host is None:
        return True
    if any(marker in host for marker in ENGINE_HOST_MARKERS):
        return True
    path = urlparse(url).path or ""
    if any(ad in host + path for ad in AD_REDIRECT_HOSTS):
        return True
    return any(path.startswith(prefix) for prefix in AD_REDIRECT_PATHS)


def extract_first_text(html: str, tag: str) -> str | None:
    """Text of the first <tag>...</tag> run in `html`, or None."""
    match = re.search(rf"<{tag}\b[^>]*>(.*?)</{tag}\s*>", html, re.DOTALL | re.IGNORECASE)
    if match is None:
        return None
    text = " ".join(strip_html(match.group(1)).split())
    return text or None


def extract_snippet(chunk: str) -> str:
    """Longest <span> text over MIN_SNIPPET_CHARS, capped at MAX_SNIPPET_CHARS."""
    best = ""
    for match in _SPAN_RE.finditer(chunk):
        text = " ".join(strip_html(match.group(1)).split())
        if len(text) > len(best) and len(text) > MIN_SNIPPET_CHARS:
            best = text
    return best[:MAX_SNIPPET_CHARS]


def parse_results_primary(html: str) -> list[RawSearchResult]:
    results = []
    for chunk in html.split(RESULT_LINK_MARKER)[1:]:
        target = _TARGET_RE.match(chunk)
        if target is None:
            continue
        url = unquote(target.group(0))
        host = _host(url)
        if host is None or is_blocked_url(url):
            continue
        title = extract_first_text(chunk, "h3") or host
        results.append(RawSearchResult(title=title, url=url, snippet=extract_snippet(chunk)))
    return results


def parse_results_fallback(html: str, limit: int = FALLBACK_MAX_RESULTS) -> list[RawSearchResult]:
    results = []
    seen_hosts = set()
    for match in _HREF_RE.finditer(html):
        url = decode_entities(match.group(1))
        host = _host(url)
        if host is None or host in seen_hosts:
            continue
        if any(marker in host for marker in FALLBACK_EXCLUDED_HOST_MARKERS) or is_blocked_url(url):
            continue
        seen_hosts.add(host)
        results.append(RawSearchResult(title=host, url=url, snippet=""))
        if len(results) >= limit:
            break
    return results


def parse_results_page(html: str, count: int) -> list[RawSearchResult]:
    """
    Parse a results page into ranked organic results.

    Args:
        html: Full results page HTML
        count: Maximum number of results wanted (already including any overfetch)

    Returns:
        Up to `count` results in page order; may be empty
    """
    if not html or count <= 0:
        return []
    results = parse_results_primary(html)
    if not results:
        results = parse_results_fallback(html, limit=min(count, FALLBACK_MAX_RESULTS))
    return results[:count]
