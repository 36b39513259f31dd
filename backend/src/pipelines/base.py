from typing import Any, Optional

from adapters import BaseLLM, create_llm
from adapters.gemini import DEFAULT_MODEL
from config import get_config_value

DEFAULT_PROVIDER = "gemini"
CONTEXT_SEPARATOR = "\n\n"

CHAT_TEMPLATE = """You are a helpful AI assistant that answers questions about PDF documents.
Answer the user's question using only the context from the PDF below. If the answer cannot be found in the context, say so clearly.

Context from PDF:
{context}

User Question: {question}

Answer based on the context provided:"""

SUMMARY_TEMPLATE = """Write a comprehensive summary of the following PDF content.
Cover the main points, key findings and important information.
Keep the summary clear, concise and well-structured:

{content}

Summary:"""

TRANSLATION_TEMPLATE = """Translate the following text into {language}.
Keep the original meaning, tone and structure as closely as possible.
Technical terms and proper nouns may stay in their original form where appropriate:

{content}

Translation:"""

QUESTIONS_TEMPLATE = """Based on the following PDF content, write {count} thoughtful and relevant questions that help a reader understand and engage with the material.
Mix factual, analytical and critical thinking questions.
Format the response as a numbered list, one question per line, like "1. Question":

{content}

Questions:"""

SUPPORTED_LANGUAGES = [
    {"code": "en", "name": "English"},
    {"code": "es", "name": "Spanish"},
    {"code": "fr", "name": "French"},
    {"code": "de", "name": "German"},
    {"code": "it", "name": "Italian"},
    {"code": "pt", "name": "Portuguese"},
    {"code": "ru", "name": "Russian"},
    {"code": "ja", "name": "Japanese"},
    {"code": "ko", "name": "Korean"},
    {"code": "zh", "name": "Chinese (Simplified)"},
    {"code": "ar", "name": "Arabic"},
    {"code": "hi", "name": "Hindi"},
    {"code": "tr", "name": "Turkish"},
    {"code": "pl", "name": "Polish"},
    {"code": "nl", "name": "Dutch"},
]


def resolve_language(language: str) -> Optional[str]:
    """Return the display name for a language code or name, or None."""
    wanted = language.strip().lower()
    for entry in SUPPORTED_LANGUAGES:
        if wanted in (entry["code"], entry["name"].lower()):
            return entry["name"]
    return None


def get_llm_defaults(config: dict[str, Any]) -> dict[str, str]:
    """Provider, model and API key defaults from the ``[llm]`` section."""
    return {
        "provider": get_config_value(config, "llm.provider", DEFAULT_PROVIDER),
        "model": get_config_value(config, "llm.model", DEFAULT_MODEL),
        "api_key": get_config_value(config, "llm.api_key", "") or "",
    }


def create_llm_for_request(provider: str, model: str, api_key: str) -> BaseLLM:
    """Create an LLM bound to the caller's model and credential."""
    return create_llm(provider, model=model, api_key=api_key)
