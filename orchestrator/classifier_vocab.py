"""Curated vocabulary tables for the query intent heuristic.

These are product-tuning data: edit freely, the cascade in
`orchestrator.query_classifier` only depends on their shape.
"""

from dataclasses import dataclass

TOP_LEVEL_DOMAINS = frozenset(
    {
        "com", "org", "net", "edu", "gov", "io", "co", "app", "dev",
        "me", "tv", "ai", "xyz", "info", "biz", "us", "uk", "ca",
        "de", "fr", "jp", "au", "in", "br", "it", "nl", "ru", "ch",
        "es", "se", "no", "pl", "eu", "gg", "so", "ly", "to", "sh",
    }
)

# Whole-query matches only. Two-word entries must match the full query.
KNOWN_SITES = frozenset(
    {
        "google", "gmail", "youtube", "facebook", "instagram", "twitter", "x",
        "tiktok", "reddit", "linkedin", "pinterest", "tumblr", "snapchat",
        "whatsapp", "telegram", "discord", "twitch", "netflix", "hulu",
        "spotify", "amazon", "ebay", "etsy", "walmart", "target", "wikipedia",
        "github", "gitlab", "stackoverflow", "stack overflow", "notion",
        "slack", "zoom", "dropbox", "figma", "trello", "canva", "chatgpt",
        "outlook", "icloud", "yahoo", "bing", "duckduckgo", "imdb", "espn",
        "cnn", "bbc", "nytimes", "paypal", "airbnb", "uber", "booking",
        "google docs", "google drive", "google maps", "google sheets",
        "google calendar", "amazon prime", "prime video", "disney plus",
        "apple music", "youtube music", "hacker news",
    }
)

AI_VERBS = frozenset(
    {
        "explain", "write", "summarize", "summarise", "compare", "help",
        "debug", "create", "make", "describe", "analyze", "analyse",
        "translate", "define", "suggest", "recommend", "generate", "rewrite",
        "simplify", "tell", "draft", "compose", "teach", "fix", "refactor",
        "optimize", "convert", "brainstorm", "plan", "outline", "elaborate",
        "list", "proofread", "paraphrase", "calculate", "solve", "review",
    }
)

CONVERSATIONAL_PHRASES = (
    "how do i",
    "how can i",
    "how should i",
    "how to",
    "help me",
    "what's the difference",
    "what is the difference",
    "difference between",
    "give me ideas",
    "can you",
    "could you",
    "would you",
    "tell me about",
    "what should i",
    "why do i",
    "pros and cons",
    "step by step",
    "i need",
    "i want to",
    "in simple terms",
    "eli5",
)

QUESTION_STARTERS = frozenset(
    {
        "what", "what's", "whats", "why", "how", "who", "whom", "whose",
        "when", "where", "which", "is", "are", "can", "does", "do",
        "should", "will", "would", "could",
    }
)

FACTUAL_LOOKUP_PHRASES = (
    "near me",
    "nearby",
    "open now",
    "price of",
    "cost of",
    "weather in",
    "weather",
    "forecast",
    "hours of",
    "opening hours",
    "directions to",
    "score",
    "scores",
    "stock price",
    "release date",
    "showtimes",
    "tickets",
    "flights to",
    "time in",
    "population of",
    "exchange rate",
    "menu",
    "login",
    "sign in",
    "download",
)

AMBIGUOUS_TOPICS = frozenset(
    {
        "python", "javascript", "typescript", "java", "rust", "golang", "go",
        "swift", "kotlin", "ruby", "php", "haskell", "scala", "c++", "sql",
        "react", "docker", "kubernetes", "linux", "git", "machine learning",
        "ai", "blockchain", "bitcoin", "crypto", "quantum computing",
        "meditation", "yoga", "nutrition", "fasting", "sleep", "anxiety",
        "depression", "keto", "mindfulness", "stoicism", "philosophy",
        "economics", "inflation", "climate change", "photosynthesis",
        "black holes", "evolution", "relativity", "calculus", "statistics",
    }
)


@dataclass(frozen=True)
class ClassifierVocabulary:
    """Bundle of tables consumed by QueryClassifier."""

    tlds: frozenset[str] = TOP_LEVEL_DOMAINS
    known_sites: frozenset[str] = KNOWN_SITES
    ai_verbs: frozenset[str] = AI_VERBS
    conversational_phrases: tuple[str, ...] = CONVERSATIONAL_PHRASES
    question_starters: frozenset[str] = QUESTION_STARTERS
    factual_phrases: tuple[str, ...] = FACTUAL_LOOKUP_PHRASES
    ambiguous_topics: frozenset[str] = AMBIGUOUS_TOPICS
