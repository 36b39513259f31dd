"""Request and response bodies for the HTTP API (camelCase on the wire)."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CredentialsBody(ApiModel):
    api_key: str = ""
    model: str = ""


class ChatRequestBody(CredentialsBody):
    query: str = ""
    chunks: list[str] = Field(default_factory=list)
    stream: bool = False


class ChatResponse(ApiModel):
    response: str
    relevant_chunks: int


class SummarizeRequestBody(CredentialsBody):
    content: str = ""


class SummarizeResponse(ApiModel):
    summary: str
    original_length: int
    summary_length: int


class TranslateRequestBody(CredentialsBody):
    content: str = ""
    target_language: str = ""


class TranslateResponse(ApiModel):
    translation: str
    target_language: str
    original_length: int


class QuestionsRequestBody(CredentialsBody):
    content: str = ""
    question_count: Optional[int] = None


class QuestionsResponse(ApiModel):
    questions: list[str]
    total_generated: int
    requested: int
    content_length: int


class DocumentMetadata(ApiModel):
    pages: int
    info: dict[str, Any] = Field(default_factory=dict)


class ProcessPdfResponse(ApiModel):
    name: str
    size: int
    text: str
    chunks: list[str]
    metadata: DocumentMetadata


class ErrorResponse(ApiModel):
    error: str
    code: str
