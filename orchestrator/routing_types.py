from dataclasses import dataclass
from enum import Enum


class QueryIntent(str, Enum):
    SEARCH = "search"
    AI_CHAT = "ai"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class ModelConfig:
    base_url: str
    model: str

    def is_usable(self) -> bool:
        return bool((self.base_url or "").strip()) and bool((self.model or "").strip())


@dataclass(frozen=True)
class ClassificationInput:
    query: str
    model_config: ModelConfig | None = None
