"""Google Gemini adapter using the google-genai SDK."""

from typing import Any, Iterator, Optional

from google import genai
from google.genai import types

from adapters.base import BaseLLM

DEFAULT_MODEL = "gemini-1.5-flash"

GEMINI_MODELS = [
    {
        "id": "gemini-1.5-flash",
        "name": "Gemini 1.5 Flash",
        "description": "Fast and efficient model for most tasks",
    },
    {
        "id": "gemini-1.5-pro",
        "name": "Gemini 1.5 Pro",
        "description": "Most capable model for complex reasoning",
    },
    {
        "id": "gemini-1.0-pro",
        "name": "Gemini 1.0 Pro",
        "description": "Reliable model for general tasks",
    },
]


class GeminiLLM(BaseLLM):
    """Gemini LLM provider.

    The API key always comes from the caller; each user brings their own key.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        if not api_key or not api_key.strip():
            raise ValueError("Gemini API key is required")

        self.client = genai.Client(api_key=api_key)
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def supports_streaming(self) -> bool:
        return True

    def _get_generation_config(self, **kwargs: Any) -> Optional[types.GenerateContentConfig]:
        """Build the optional generation config; None leaves provider defaults."""
        temperature = kwargs.get("temperature", self.temperature)
        max_tokens = kwargs.get("max_tokens", self.max_tokens)
        if temperature is None and max_tokens is None:
            return None
        return types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

    def generate(self, prompt: str, **kwargs: Any) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._get_generation_config(**kwargs),
        )
        return response.text or ""

    def generate_stream(self, prompt: str, **kwargs: Any) -> Iterator[str]:
        stream = self.client.models.generate_content_stream(
            model=self.model,
            contents=prompt,
            config=self._get_generation_config(**kwargs),
        )
        for chunk in stream:
            if chunk.text:
                yield chunk.text
