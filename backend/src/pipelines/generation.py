import logging
import re
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from pydantic import ValidationError

from adapters import BaseLLM
from config import MAX_QUESTION_COUNT, ProcessingSettings, load_settings
from errors import GenerationError, InvalidInputError, to_generation_error
from models import (
    ChatResult,
    Chunk,
    GenerationRequest,
    OperationKind,
    QuestionSet,
    SummaryResult,
    TranslationResult,
)
from rankers import BaseRanker, KeywordRanker
from streaming import StreamEvent, relay
from .base import (
    CHAT_TEMPLATE,
    CONTEXT_SEPARATOR,
    DEFAULT_PROVIDER,
    QUESTIONS_TEMPLATE,
    SUMMARY_TEMPLATE,
    TRANSLATION_TEMPLATE,
    create_llm_for_request,
    resolve_language,
)

logger = logging.getLogger(__name__)

QUESTION_LINE = re.compile(r"^\d+\.")
QUESTION_PREFIX = re.compile(r"^\d+\.\s*")

LLMFactory = Callable[[str, str], BaseLLM]
ChunkInput = Sequence[Union[Chunk, str]]


def parse_questions(text: str) -> list[str]:
    """Extract numbered questions from generated text.

    Only lines starting with ``<digits>.`` are kept, with the number
    removed. Blank and unnumbered lines are dropped.
    """
    questions = []
    for line in text.split("\n"):
        line = line.strip()
        if not QUESTION_LINE.match(line):
            continue
        question = QUESTION_PREFIX.sub("", line).strip()
        if question:
            questions.append(question)
    return questions


def as_chunks(chunks: ChunkInput) -> list[Chunk]:
    """Accept chunk models or plain strings, preserving order."""
    return [
        chunk if isinstance(chunk, Chunk) else Chunk(text=chunk, index=i)
        for i, chunk in enumerate(chunks)
    ]


class GenerationGateway:
    """Builds prompts, calls the LLM provider and normalizes its failures.

    The credential and model travel with every request, so an LLM adapter is
    created per call through ``llm_factory(model, api_key)``. The gateway
    holds no per-request state.
    """

    def __init__(
        self,
        settings: Optional[ProcessingSettings] = None,
        ranker: Optional[BaseRanker] = None,
        llm_factory: Optional[LLMFactory] = None,
        provider: str = DEFAULT_PROVIDER,
    ):
        self.settings = settings or ProcessingSettings()
        self.ranker = ranker or KeywordRanker(top_k=self.settings.top_k)
        self.provider = provider
        self.llm_factory = llm_factory or self._create_llm

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "GenerationGateway":
        """Create a gateway from configuration dictionary."""
        settings = load_settings(config)
        provider = config.get("llm", {}).get("provider", DEFAULT_PROVIDER)
        return cls(settings=settings, provider=provider)

    def _create_llm(self, model: str, api_key: str) -> BaseLLM:
        return create_llm_for_request(self.provider, model, api_key)

    def build_request(self, kind: OperationKind, **fields: Any) -> GenerationRequest:
        """Validate fields into a request, reporting problems as invalid input."""
        try:
            return GenerationRequest(kind=kind, **fields)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidInputError(f"Invalid {kind.value} request: {problems}") from e

    def build_prompt(self, request: GenerationRequest) -> str:
        if request.kind is OperationKind.CHAT:
            return CHAT_TEMPLATE.format(context=request.context, question=request.query)
        if request.kind is OperationKind.SUMMARIZE:
            return SUMMARY_TEMPLATE.format(content=request.content)
        if request.kind is OperationKind.TRANSLATE:
            return TRANSLATION_TEMPLATE.format(
                language=request.target_language, content=request.content
            )
        count = max(
            request.question_count or self.settings.question_count,
            self.settings.question_count,
        )
        return QUESTIONS_TEMPLATE.format(count=count, content=request.content)

    def _classify(self, error: Exception, kind: OperationKind) -> GenerationError:
        classified = to_generation_error(error)
        logger.warning(
            f"{kind.value} failed ({classified.kind.value}): {type(error).__name__}"
        )
        return classified

    def execute(self, request: GenerationRequest) -> str:
        """Run a request to completion and return the generated text."""
        prompt = self.build_prompt(request)
        logger.info(f"Generating {request.kind.value} response with {request.model}")
        try:
            llm = self.llm_factory(request.model, request.api_key)
            return llm.generate(prompt)
        except Exception as e:
            raise self._classify(e, request.kind) from e

    def stream(self, request: GenerationRequest) -> Iterator[str]:
        """Return the provider's fragments for a request, lazily.

        Provider failures surface from iteration as classified
        ``GenerationError`` instances.
        """
        prompt = self.build_prompt(request)

        def fragments() -> Iterator[str]:
            logger.info(f"Streaming {request.kind.value} response with {request.model}")
            try:
                llm = self.llm_factory(request.model, request.api_key)
                yield from llm.generate_stream(prompt)
            except Exception as e:
                raise self._classify(e, request.kind) from e

        return fragments()

    def select_context(
        self, query: str, chunks: ChunkInput, top_k: Optional[int] = None
    ) -> list[Chunk]:
        """Rank chunks for a query; an empty chunk list is invalid input."""
        if not chunks:
            raise InvalidInputError("Chunks must be a non-empty array")
        return self.ranker.rank(query, as_chunks(chunks), top_k)

    def _chat_request(
        self, api_key: str, model: str, query: str, chunks: ChunkInput
    ) -> tuple[GenerationRequest, list[Chunk]]:
        if not query or not query.strip():
            raise InvalidInputError("Missing required field: query")
        relevant = self.select_context(query, chunks)
        context = CONTEXT_SEPARATOR.join(chunk.text for chunk in relevant)
        request = self.build_request(
            OperationKind.CHAT, api_key=api_key, model=model, query=query, context=context
        )
        return request, relevant

    def chat(self, api_key: str, model: str, query: str, chunks: ChunkInput) -> ChatResult:
        request, relevant = self._chat_request(api_key, model, query, chunks)
        response = self.execute(request)
        return ChatResult(response=response, relevant_chunks=len(relevant))

    def stream_chat(
        self, api_key: str, model: str, query: str, chunks: ChunkInput
    ) -> Iterator[StreamEvent]:
        """Validate and rank eagerly, then relay the answer as stream events."""
        request, _ = self._chat_request(api_key, model, query, chunks)
        return relay(self.stream(request))

    def summarize(self, api_key: str, model: str, content: str) -> SummaryResult:
        request = self.build_request(
            OperationKind.SUMMARIZE, api_key=api_key, model=model, content=content
        )
        summary = self.execute(request)
        return SummaryResult(
            summary=summary,
            original_length=len(content),
            summary_length=len(summary),
        )

    def translate(
        self, api_key: str, model: str, content: str, target_language: str
    ) -> TranslationResult:
        language = resolve_language(target_language or "")
        if language is None:
            raise InvalidInputError(f"Unsupported target language: {target_language!r}")
        request = self.build_request(
            OperationKind.TRANSLATE,
            api_key=api_key,
            model=model,
            content=content,
            target_language=language,
        )
        translation = self.execute(request)
        return TranslationResult(
            translation=translation,
            target_language=language,
            original_length=len(content),
        )

    def generate_questions(
        self,
        api_key: str,
        model: str,
        content: str,
        question_count: Optional[int] = None,
    ) -> QuestionSet:
        requested = (
            self.settings.question_count if question_count is None else question_count
        )
        if not 1 <= requested <= MAX_QUESTION_COUNT:
            raise InvalidInputError(
                f"Question count must be a number between 1 and {MAX_QUESTION_COUNT}"
            )
        request = self.build_request(
            OperationKind.GENERATE_QUESTIONS,
            api_key=api_key,
            model=model,
            content=content,
            question_count=requested,
        )
        questions = parse_questions(self.execute(request))
        return QuestionSet(
            questions=questions[:requested],
            total_generated=len(questions),
            requested=requested,
            content_length=len(content),
        )
