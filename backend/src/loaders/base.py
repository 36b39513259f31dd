from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class ExtractedDocument(BaseModel):
    """Text and page information extracted from a document."""

    text: str
    page_count: int
    metadata: dict[str, Any] = Field(default_factory=dict)


class BaseDocumentLoader(ABC):
    """Abstract base class for document loaders."""

    @abstractmethod
    def extract(self, data: bytes) -> ExtractedDocument:
        """Extract text from raw document bytes."""
        pass
