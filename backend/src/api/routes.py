import logging
from typing import AsyncIterator, Iterator, Union

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from pipelines import DocumentPipeline, GenerationGateway
from streaming import SSE_HEADERS, SSE_MEDIA_TYPE, StreamEvent, encode_event
from .schemas import (
    ChatRequestBody,
    ChatResponse,
    DocumentMetadata,
    ErrorResponse,
    ProcessPdfResponse,
    QuestionsRequestBody,
    QuestionsResponse,
    SummarizeRequestBody,
    SummarizeResponse,
    TranslateRequestBody,
    TranslateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def get_gateway(request: Request) -> GenerationGateway:
    return request.app.state.gateway


def get_document_pipeline(request: Request) -> DocumentPipeline:
    return request.app.state.document_pipeline


async def sse_body(events: Iterator[StreamEvent]) -> AsyncIterator[str]:
    """Frame relay events for a streaming response, one pull at a time.

    When the response is abandoned the relay is closed, which in turn
    closes the provider stream.
    """
    try:
        while True:
            event = await run_in_threadpool(next, events, None)
            if event is None:
                return
            yield encode_event(event)
    finally:
        events.close()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/process-pdf", response_model=ProcessPdfResponse)
def process_pdf(
    file: UploadFile = File(...),
    pipeline: DocumentPipeline = Depends(get_document_pipeline),
) -> ProcessPdfResponse:
    data = file.file.read()
    document = pipeline.process(data, file.filename or "document.pdf")
    return ProcessPdfResponse(
        name=document.name,
        size=document.size,
        text=document.text,
        chunks=document.chunk_texts,
        metadata=DocumentMetadata(pages=document.page_count, info=document.metadata),
    )


@router.post("/gemini/chat", response_model=None)
def chat(
    body: ChatRequestBody,
    gateway: GenerationGateway = Depends(get_gateway),
) -> Union[ChatResponse, StreamingResponse]:
    if body.stream:
        events = gateway.stream_chat(body.api_key, body.model, body.query, body.chunks)
        return StreamingResponse(
            sse_body(events), media_type=SSE_MEDIA_TYPE, headers=SSE_HEADERS
        )

    result = gateway.chat(body.api_key, body.model, body.query, body.chunks)
    return ChatResponse(response=result.response, relevant_chunks=result.relevant_chunks)


@router.post("/gemini/summarize", response_model=SummarizeResponse)
def summarize(
    body: SummarizeRequestBody,
    gateway: GenerationGateway = Depends(get_gateway),
) -> SummarizeResponse:
    result = gateway.summarize(body.api_key, body.model, body.content)
    return SummarizeResponse(**result.model_dump())


@router.post("/gemini/translate", response_model=TranslateResponse)
def translate(
    body: TranslateRequestBody,
    gateway: GenerationGateway = Depends(get_gateway),
) -> TranslateResponse:
    result = gateway.translate(
        body.api_key, body.model, body.content, body.target_language
    )
    return TranslateResponse(**result.model_dump())


@router.post("/gemini/generate-questions", response_model=QuestionsResponse)
def generate_questions(
    body: QuestionsRequestBody,
    gateway: GenerationGateway = Depends(get_gateway),
) -> QuestionsResponse:
    result = gateway.generate_questions(
        body.api_key, body.model, body.content, body.question_count
    )
    return QuestionsResponse(**result.model_dump())
