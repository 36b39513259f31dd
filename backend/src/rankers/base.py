from abc import ABC, abstractmethod

from models.chunk import Chunk


class BaseRanker(ABC):
    """Abstract base class for chunk rankers."""

    def __init__(self, top_k: int):
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")
        self.top_k = top_k

    @abstractmethod
    def rank(self, query: str, chunks: list[Chunk], top_k: int | None = None) -> list[Chunk]:
        """Return at most ``top_k`` chunks ordered by relevance to ``query``."""
        pass
