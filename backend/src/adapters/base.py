from abc import ABC, abstractmethod
from typing import Any, Iterator


class BaseLLM(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, model: str, **kwargs: Any):
        self.model = model
        self.kwargs = kwargs

    @abstractmethod
    def generate(self, prompt: str, **kwargs: Any) -> str:
        pass

    @abstractmethod
    def generate_stream(self, prompt: str, **kwargs: Any) -> Iterator[str]:
        """Yield text fragments in the order the provider produces them."""
        pass

    @property
    @abstractmethod
    def supports_streaming(self) -> bool:
        pass
