"""Lexical helpers deciding how a prompt touches the web before an AI answer."""

import re

from orchestrator.classifier_vocab import TOP_LEVEL_DOMAINS

# Misspelled first domain label -> intended label
URL_TYPO_CORRECTIONS = {
    "yuotube": "youtube", "yotube": "youtube", "youtbe": "youtube",
    "youube": "youtube", "yotuube": "youtube", "youttube": "youtube",
    "gogle": "google", "goggle": "google", "gooogle": "google",
    "googlr": "google", "googel": "google", "googe": "google",
    "twtter": "twitter", "twiter": "twitter", "tiwtter": "twitter",
    "facebok": "facebook", "facbook": "facebook", "fcebook": "facebook",
    "faecbook": "facebook", "faceboo": "facebook",
    "instagra": "instagram", "instagarm": "instagram",
    "instragram": "instagram", "instagrm": "instagram",
    "linkdin": "linkedin", "linkeind": "linkedin", "linkeidn": "linkedin",
    "redit": "reddit", "rediit": "reddit", "reddti": "reddit",
    "amazo": "amazon", "amzon": "amazon", "amaozn": "amazon",
    "netfilx": "netflix", "netfli": "netflix", "netflx": "netflix",
    "spotfiy": "spotify", "sptoify": "spotify", "spotiy": "spotify",
    "wikpedia": "wikipedia", "wikipdia": "wikipedia", "wikipeida": "wikipedia",
    "githu": "github", "gihub": "github", "githb": "github",
    "githbu": "github", "gihtub": "github",
    "stackovreflow": "stackoverflow", "stackoverlfow": "stackoverflow",
    "stakoverflow": "stackoverflow",
    "chatgtp": "chatgpt", "chatgp": "chatgpt",
    "discrod": "discord", "disocrd": "discord",
    "tiktk": "tiktok", "tikto": "tiktok",
    "pinterst": "pinterest", "pintrest": "pinterest",
    "tumbrl": "tumblr",
    "dcos": "docs", "dcso": "docs",
}

WEB_SEARCH_TRIGGERS = [
    "latest",
    "current",
    "recent",
    "today",
    "tonight",
    "yesterday",
    "this week",
    "this month",
    "this year",
    "news",
    "score",
    "scores",
    "price",
    "cost",
    "weather",
    "stock",
    "release date",
    "how much",
    "when does",
    "when did",
    "when is",
    "when will",
    "who won",
    "results",
    "standings",
    "schedule",
    "stats",
    "statistics",
    "reviews",
    "rating",
    "ratings",
    "compare prices",
    "best deals",
    "where to buy",
    "hours",
    "open now",
    "near me",
    "directions",
]

_YEAR_RE = re.compile(r"\b20[2-3]\d\b")
_URL_IN_TEXT_RE = re.compile(r"(?:https?://|www\.)[^\s<>\"'`]+", re.IGNORECASE)
_TRAILING_PUNCT = ".,;:!?)]}'\""


def correct_url_typos(text: str) -> str:
    """
    Fix a misspelled first domain label ("gihub.com" -> "github.com").

    Args:
        text: Host-like text, optionally followed by a path

    Returns:
        Text with the label before the first dot corrected, if known
    """
    label, dot, rest = text.partition(".")
    corrected = URL_TYPO_CORRECTIONS.get(label)
    if corrected is None:
        return text
    return corrected + dot + rest


def resolve_as_url(text: str) -> str | None:
    """
    Interpret typed input as a navigable address.

    Args:
        text: Raw address-bar input

    Returns:
        An absolute http(s) URL, or None when the input is not URL-shaped
    """
    lower = (text or "").strip().lower()
    if not lower:
        return None
    if lower.startswith(("http://", "https://")):
        return lower
    if " " in lower or "." not in lower:
        return None

    tld = lower.rsplit(".", 1)[1].split("/", 1)[0]
    if tld in TOP_LEVEL_DOMAINS:
        return "https://" + correct_url_typos(lower)
    return None


def extract_urls(text: str) -> list[str]:
    """
    Find explicit links inside free text.

    Args:
        text: Prompt text

    Returns:
        Absolute URLs in first-seen order, deduplicated
    """
    urls = []
    for match in _URL_IN_TEXT_RE.finditer(text or ""):
        url = match.group(0).rstrip(_TRAILING_PUNCT)
        if url.lower().startswith("www."):
            url = "https://" + url
        if url not in urls:
            urls.append(url)
    return urls


def should_web_search(prompt: str) -> bool:
    """
    Decide whether an AI-path prompt needs fresh web grounding.

    Freshness and lookup triggers (or a recent year) say yes; everything else,
    including creation/explanation requests, says no.

    Args:
        prompt: User prompt

    Returns:
        True if a web search should run before answering
    """
    prompt_lower = (prompt or "").lower()

    for trigger in WEB_SEARCH_TRIGGERS:
        if re.search(rf"\b{re.escape(trigger)}\b", prompt_lower):
            return True

    if _YEAR_RE.search(prompt_lower):
        return True

    return False
