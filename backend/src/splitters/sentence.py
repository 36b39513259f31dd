from typing import Optional

from config import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, ProcessingSettings
from errors import ConfigurationError
from models.chunk import Chunk
from .base import BaseTextSplitter

SENTENCE_TERMINATORS = (".", "!", "?")
BOUNDARY_RATIO = 0.7


class SentenceTextSplitter(BaseTextSplitter):
    """Fixed-size character splitter that prefers sentence boundaries.

    Each window holds at most ``chunk_size`` characters. A window that does
    not reach the end of the text is cut just after its last sentence
    terminator when that terminator sits in the final 30% of the window.
    Consecutive windows share ``chunk_overlap`` characters.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ):
        if chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be non-negative and "
                f"smaller than chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @classmethod
    def from_settings(cls, settings: ProcessingSettings) -> "SentenceTextSplitter":
        return cls(chunk_size=settings.chunk_size, chunk_overlap=settings.chunk_overlap)

    def split(self, text: str) -> list[Chunk]:
        length = len(text)
        if length <= self.chunk_size:
            return [Chunk(text=text, index=0, start=0, end=length)]

        chunks: list[Chunk] = []
        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)
            window = text[start:end]

            if end < length:
                cut = self._sentence_cut(window)
                if cut is not None:
                    window = window[:cut]
                    end = start + cut

            piece = window.strip()
            if piece:
                chunks.append(Chunk(text=piece, index=len(chunks), start=start, end=end))

            if end >= length:
                break
            # Always moves forward: end - start > chunk_overlap for every window.
            start = end - self.chunk_overlap

        return chunks

    def _sentence_cut(self, window: str) -> Optional[int]:
        """Return the cut length after the last sentence terminator, if usable."""
        position = max(window.rfind(terminator) for terminator in SENTENCE_TERMINATORS)
        if position < 0 or position < self.chunk_size * BOUNDARY_RATIO:
            return None
        cut = position + 1
        if cut <= self.chunk_overlap:
            return None
        return cut
