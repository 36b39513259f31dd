import logging

from config import DEFAULT_TOP_K
from models.chunk import Chunk, ScoredChunk
from .base import BaseRanker

logger = logging.getLogger(__name__)


def query_terms(query: str) -> list[str]:
    """Lowercased whitespace-separated terms of a query."""
    return [term for term in query.lower().split() if term]


def count_occurrences(text: str, term: str) -> int:
    """Count occurrences of ``term`` in ``text``, overlapping ones included."""
    count = 0
    position = text.find(term)
    while position != -1:
        count += 1
        position = text.find(term, position + 1)
    return count


class KeywordRanker(BaseRanker):
    """Term-frequency ranker over literal substring matches.

    Chunks that score zero are kept and ordered last, so the result is
    only ever shorter than ``top_k`` when fewer chunks exist.
    """

    def __init__(self, top_k: int = DEFAULT_TOP_K):
        super().__init__(top_k)

    def score(self, query: str, chunks: list[Chunk]) -> list[ScoredChunk]:
        terms = query_terms(query)
        scored = []
        for chunk in chunks:
            lowered = chunk.text.lower()
            total = sum(count_occurrences(lowered, term) for term in terms)
            scored.append(ScoredChunk(chunk=chunk, score=total))
        return scored

    def rank(self, query: str, chunks: list[Chunk], top_k: int | None = None) -> list[Chunk]:
        k = self.top_k if top_k is None else top_k
        if k < 1:
            raise ValueError(f"top_k must be at least 1, got {k}")
        scored = self.score(query, chunks)
        # sorted() is stable, so equal scores keep document order.
        ranked = sorted(scored, key=lambda item: item.score, reverse=True)

        selected = ranked[:k]
        logger.debug(
            f"Ranked {len(chunks)} chunks, selected {len(selected)} "
            f"(top score: {selected[0].score if selected else 0})"
        )
        return [item.chunk for item in selected]
