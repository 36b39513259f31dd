from .base import BaseRanker
from .keyword import KeywordRanker, count_occurrences, query_terms

Ranker = KeywordRanker

__all__ = ["BaseRanker", "KeywordRanker", "Ranker", "count_occurrences", "query_terms"]
