from typing import Any, Type

from adapters.base import BaseLLM

_LLM_REGISTRY: dict[str, Type[BaseLLM]] = {}


def register_llm(provider: str, cls: Type[BaseLLM]) -> None:
    """Register an LLM provider.

    Args:
        provider: Provider name (e.g., "gemini")
        cls: LLM class to register
    """
    _LLM_REGISTRY[provider] = cls


def create_llm(provider: str, **kwargs: Any) -> BaseLLM:
    """Create an LLM instance based on provider.

    Args:
        provider: Provider name
        **kwargs: Additional provider-specific parameters

    Returns:
        BaseLLM instance

    Raises:
        ValueError: If provider is not registered
    """
    if provider not in _LLM_REGISTRY:
        available = list(_LLM_REGISTRY.keys())
        raise ValueError(f"Unknown LLM provider: {provider}. Available: {available}")
    return _LLM_REGISTRY[provider](**kwargs)


def list_llm_providers() -> list[str]:
    """List all registered LLM providers."""
    return list(_LLM_REGISTRY.keys())


from adapters.gemini import GEMINI_MODELS, GeminiLLM

register_llm("gemini", GeminiLLM)

__all__ = [
    "BaseLLM",
    "GeminiLLM",
    "GEMINI_MODELS",
    "register_llm",
    "create_llm",
    "list_llm_providers",
]
