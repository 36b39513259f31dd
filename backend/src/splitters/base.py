from abc import ABC, abstractmethod

from models.chunk import Chunk


class BaseTextSplitter(ABC):
    """Abstract base class for text splitters."""

    @abstractmethod
    def split(self, text: str) -> list[Chunk]:
        """Split raw text into ordered chunks with source offsets."""
        pass

    def split_text(self, text: str) -> list[str]:
        """Split raw text into chunk strings without offsets."""
        return [chunk.text for chunk in self.split(text)]
