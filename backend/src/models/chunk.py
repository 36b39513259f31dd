"""Data models for document chunks."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Represents a text chunk cut from an extracted document.

    Attributes:
        text: The chunk text content, trimmed of surrounding whitespace.
        index: Position of the chunk in document order.
        start: Offset of the source window in the original text.
        end: Offset one past the last character of the source window.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    index: int = 0
    start: int = 0
    end: int = 0

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end


class ScoredChunk(BaseModel):
    """A chunk paired with its keyword relevance score."""

    chunk: Chunk
    score: int = Field(default=0, ge=0)


class ProcessedDocument(BaseModel):
    """Result of extracting and chunking an uploaded PDF.

    Attributes:
        name: Original file name.
        size: Size of the upload in bytes.
        text: Full extracted text.
        chunks: Ordered chunks of ``text``.
        page_count: Number of pages in the PDF.
        metadata: Document information dictionary from the PDF.
    """

    name: str
    size: int
    text: str
    chunks: list[Chunk]
    page_count: int
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def chunk_texts(self) -> list[str]:
        return [chunk.text for chunk in self.chunks]
