"""Data models for generation requests and results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class OperationKind(str, Enum):
    CHAT = "chat"
    SUMMARIZE = "summarize"
    TRANSLATE = "translate"
    GENERATE_QUESTIONS = "generate-questions"


class GenerationRequest(BaseModel):
    """A single call to the generation gateway.

    ``api_key`` and ``model`` are required for every operation. The payload
    fields that must be present depend on ``kind``: ``query`` and ``context``
    for chat, ``content`` for summarize and question generation, ``content``
    and ``target_language`` for translate.
    """

    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    api_key: str
    model: str
    query: Optional[str] = None
    context: Optional[str] = None
    content: Optional[str] = None
    target_language: Optional[str] = None
    question_count: Optional[int] = None

    @field_validator("api_key", "model")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must be a non-empty string")
        return value.strip()

    @model_validator(mode="after")
    def _check_payload(self) -> "GenerationRequest":
        required = {
            OperationKind.CHAT: ("query", "context"),
            OperationKind.SUMMARIZE: ("content",),
            OperationKind.TRANSLATE: ("content", "target_language"),
            OperationKind.GENERATE_QUESTIONS: ("content",),
        }[self.kind]
        missing = [
            name for name in required if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValueError(
                f"missing required fields for {self.kind.value}: {', '.join(missing)}"
            )
        return self


class ChatResult(BaseModel):
    response: str
    relevant_chunks: int


class SummaryResult(BaseModel):
    summary: str
    original_length: int
    summary_length: int


class TranslationResult(BaseModel):
    translation: str
    target_language: str
    original_length: int


class QuestionSet(BaseModel):
    """Parsed questions, truncated to the requested count.

    Attributes:
        questions: Question strings without their numbering.
        total_generated: Number of questions parsed before truncation.
        requested: Number of questions the caller asked for.
        content_length: Length of the source content in characters.
    """

    questions: list[str]
    total_generated: int
    requested: int
    content_length: int
