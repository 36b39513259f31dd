from .base import (
    CHAT_TEMPLATE,
    CONTEXT_SEPARATOR,
    DEFAULT_PROVIDER,
    QUESTIONS_TEMPLATE,
    SUMMARY_TEMPLATE,
    SUPPORTED_LANGUAGES,
    TRANSLATION_TEMPLATE,
    create_llm_for_request,
    get_llm_defaults,
    resolve_language,
)
from .document import PDF_MAGIC_BYTES, DocumentPipeline
from .generation import GenerationGateway, as_chunks, parse_questions

__all__ = [
    "DocumentPipeline",
    "GenerationGateway",
    "PDF_MAGIC_BYTES",
    "as_chunks",
    "parse_questions",
    "create_llm_for_request",
    "get_llm_defaults",
    "resolve_language",
    "SUPPORTED_LANGUAGES",
    "CHAT_TEMPLATE",
    "SUMMARY_TEMPLATE",
    "TRANSLATION_TEMPLATE",
    "QUESTIONS_TEMPLATE",
    "CONTEXT_SEPARATOR",
    "DEFAULT_PROVIDER",
]
