"""Query intent classification: web search vs. AI chat vs. ambiguous.

Two procedures:
- `QueryClassifier.heuristic` - ordered cascade of lexical rules, no I/O, total.
- `QueryClassifier.classify` - asks a local model for a one-word verdict under a
  short timeout and falls back to the heuristic on any failure.
"""

import asyncio
import re
from typing import Optional

import httpx

from api.ollama_client import OllamaClient
from orchestrator.classifier_vocab import ClassifierVocabulary
from orchestrator.routing_types import ClassificationInput, ModelConfig, QueryIntent
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL_TIMEOUT_S = 2.0

CLASSIFIER_SYSTEM_PROMPT = """\
Classify this query as exactly one word: "search", "ai", or "ambiguous". No explanation. No punctuation.

search - navigational or lookup intent ("youtube", "weather Tokyo", "nba scores today")
ai - conversational, reasoning, writing, or synthesis intent ("explain black holes", "write me a cover letter")
ambiguous - genuinely unclear either way"""

_MODEL_VERDICTS = (
    ("search", QueryIntent.SEARCH),
    ("ai", QueryIntent.AI_CHAT),
    ("ambiguous", QueryIntent.AMBIGUOUS),
)


class QueryClassifier:
    def __init__(
        self,
        vocabulary: ClassifierVocabulary | None = None,
        http_client: Optional[httpx.AsyncClient] = None,
        model_timeout_s: float = DEFAULT_MODEL_TIMEOUT_S,
        model_config: ModelConfig | None = None,
    ):
        """
        Args:
            vocabulary: Word/phrase tables for the heuristic
            http_client: Optional shared httpx.AsyncClient for model calls
            model_timeout_s: Deadline for the whole model call, not per phase
            model_config: Endpoint used when `classify` is called without one
        """
        self.vocabulary = vocabulary or ClassifierVocabulary()
        self.http_client = http_client
        self.model_timeout_s = model_timeout_s
        self.model_config = model_config

    # ------------------------------------------------------------------
    # Heuristic cascade
    # ------------------------------------------------------------------

    def heuristic(self, query: str) -> QueryIntent:
        """
        Classify a query with lexical rules only. First matching rule wins.

        Args:
            query: Raw user text (any string, including empty)

        Returns:
            QueryIntent
        """
        text = " ".join((query or "").lower().split())
        words = text.split(" ") if text else []
        word_count = len(words)
        first = words[0] if words else ""

        if text.startswith(("http://", "https://", "www.")):
            return QueryIntent.SEARCH

        if self._looks_like_domain(text):
            return QueryIntent.SEARCH

        if word_count <= 2 and text in self.vocabulary.known_sites:
            return QueryIntent.SEARCH

        if "?" in text:
            return QueryIntent.AI_CHAT

        if first in self.vocabulary.ai_verbs:
            return QueryIntent.AI_CHAT

        if self._contains_phrase(text, self.vocabulary.conversational_phrases):
            return QueryIntent.AI_CHAT

        if word_count > 8:
            return QueryIntent.AI_CHAT

        if first in self.vocabulary.question_starters and word_count >= 3:
            return QueryIntent.AI_CHAT if word_count >= 5 else QueryIntent.AMBIGUOUS

        if self._contains_phrase(text, self.vocabulary.factual_phrases):
            return QueryIntent.SEARCH

        if 1 <= word_count <= 2 and self._matches_topic(words):
            return QueryIntent.AMBIGUOUS

        if word_count <= 3:
            return QueryIntent.SEARCH
        if word_count <= 6:
            return QueryIntent.AMBIGUOUS
        return QueryIntent.AI_CHAT

    def _looks_like_domain(self, text: str) -> bool:
        if "." not in text or " " in text:
            return False
        tail = text.rsplit(".", 1)[1]
        tld = tail.split("/", 1)[0].split(":", 1)[0]
        return tld in self.vocabulary.tlds

    def _contains_phrase(self, text: str, patterns) -> bool:
        for pattern in patterns:
            escaped = re.escape(pattern)
            if re.search(rf"(?<!\w){escaped}(?!\w)", text):
                return True
        return False

    def _matches_topic(self, words: list[str]) -> bool:
        topics = self.vocabulary.ambiguous_topics
        candidates = {" ".join(words), words[0], words[-1]}
        # crude plural folding: "black hole" / "black holes"
        for candidate in list(candidates):
            if candidate.endswith("s"):
                candidates.add(candidate[:-1])
            else:
                candidates.add(candidate + "s")
        return any(candidate in topics for candidate in candidates)

    # ------------------------------------------------------------------
    # Model-assisted path
    # ------------------------------------------------------------------

    async def classify(self, query: str, model_config: ModelConfig | None = None) -> QueryIntent:
        """
        Classify a query, asking the local model when one is configured.

        Never raises: timeouts, transport errors, malformed bodies, unexpected
        verdicts and missing configuration all fall back to `heuristic`.

        Args:
            query: Raw user text
            model_config: Optional endpoint + model name (defaults to the one given at construction)

        Returns:
            QueryIntent
        """
        trimmed = (query or "").strip()
        if not trimmed:
            return QueryIntent.SEARCH

        model_config = model_config or self.model_config
        if model_config is None or not model_config.is_usable():
            return self.heuristic(trimmed)

        client = OllamaClient(
            base_url=model_config.base_url,
            model=model_config.model,
            client=self.http_client,
            timeout=self.model_timeout_s,
        )

        try:
            # httpx timeouts are per phase; a trickling body would outlive them
            answer = await asyncio.wait_for(
                client.generate(trimmed, system=CLASSIFIER_SYSTEM_PROMPT, timeout=self.model_timeout_s),
                self.model_timeout_s,
            )
        except Exception as e:
            logger.info(
                "Model classification unavailable, using heuristic",
                extra={"extra_fields": {"error_type": type(e).__name__, "error": str(e)}},
            )
            return self.heuristic(trimmed)

        verdict = self._parse_verdict(answer)
        if verdict is None:
            logger.info(
                "Unrecognized model verdict, using heuristic",
                extra={"extra_fields": {"verdict": answer[:40]}},
            )
            return self.heuristic(trimmed)
        return verdict

    def _parse_verdict(self, answer: str) -> QueryIntent | None:
        word = (answer or "").strip().lower()
        for prefix, intent in _MODEL_VERDICTS:
            if word.startswith(prefix):
                return intent
        return None


_default_classifier = QueryClassifier()


def heuristic(query: str) -> QueryIntent:
    """Module-level shortcut for `QueryClassifier().heuristic`."""
    return _default_classifier.heuristic(query)


async def classify(query: str | ClassificationInput, model_config: ModelConfig | None = None) -> QueryIntent:
    """Module-level shortcut for `QueryClassifier().classify`; accepts a ClassificationInput too."""
    if isinstance(query, ClassificationInput):
        return await _default_classifier.classify(query.query, query.model_config)
    return await _default_classifier.classify(query, model_config)
