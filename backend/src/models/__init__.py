from .chunk import Chunk, ProcessedDocument, ScoredChunk
from .generation import (
    ChatResult,
    GenerationRequest,
    OperationKind,
    QuestionSet,
    SummaryResult,
    TranslationResult,
)

__all__ = [
    "Chunk",
    "ScoredChunk",
    "ProcessedDocument",
    "OperationKind",
    "GenerationRequest",
    "ChatResult",
    "SummaryResult",
    "TranslationResult",
    "QuestionSet",
]
