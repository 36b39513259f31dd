"""HTTP API exposing document processing and the Gemini operations."""

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import find_config_path, load_config
from errors import AssistantError, ErrorKind
from pipelines import DocumentPipeline, GenerationGateway
from .routes import router

logger = logging.getLogger(__name__)

STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_CREDENTIAL: 401,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INVALID_MODEL: 400,
    ErrorKind.PAYLOAD_TOO_LARGE: 400,
    ErrorKind.INVALID_FILE_FORMAT: 400,
    ErrorKind.PASSWORD_PROTECTED_FILE: 400,
    ErrorKind.PROVIDER_FAILURE: 500,
}


async def handle_assistant_error(request: Request, exc: AssistantError) -> JSONResponse:
    logger.warning(f"{request.url.path} failed: {exc.kind.value}")
    return JSONResponse(status_code=STATUS_CODES[exc.kind], content=exc.to_dict())


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
    message = f"Invalid request fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"error": message, "code": ErrorKind.INVALID_INPUT.value},
    )


def create_app(
    config: Optional[dict[str, Any]] = None,
    config_path: Optional[Path] = None,
    gateway: Optional[GenerationGateway] = None,
    document_pipeline: Optional[DocumentPipeline] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Configuration is read from ``config_path`` (or the default lookup) when
    no ``config`` dictionary is given. Settings are validated here, so a bad
    chunking configuration fails at startup.
    """
    if config is None:
        config = load_config(find_config_path(config_path))

    app = FastAPI(title="PDF Assistant")
    app.state.gateway = gateway or GenerationGateway.from_config(config)
    app.state.document_pipeline = document_pipeline or DocumentPipeline.from_config(config)

    app.add_exception_handler(AssistantError, handle_assistant_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.include_router(router)
    return app


__all__ = ["create_app", "STATUS_CODES"]
