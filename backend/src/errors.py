"""Error taxonomy shared by the document, generation and HTTP layers."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_CREDENTIAL = "invalid_credential"
    RATE_LIMITED = "rate_limited"
    INVALID_MODEL = "invalid_model"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    INVALID_FILE_FORMAT = "invalid_file_format"
    PASSWORD_PROTECTED_FILE = "password_protected_file"
    PROVIDER_FAILURE = "provider_failure"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_INPUT: "The request is missing a required field or contains an invalid value.",
    ErrorKind.INVALID_CREDENTIAL: "Invalid API key. Please check your Gemini API key.",
    ErrorKind.RATE_LIMITED: "API rate limit exceeded. Please try again later.",
    ErrorKind.INVALID_MODEL: "Invalid model specified. Please check the model name.",
    ErrorKind.PAYLOAD_TOO_LARGE: "Content is too long for this operation. Please try with a smaller document.",
    ErrorKind.INVALID_FILE_FORMAT: "Invalid PDF file format.",
    ErrorKind.PASSWORD_PROTECTED_FILE: "Password-protected PDFs are not supported.",
    ErrorKind.PROVIDER_FAILURE: "Failed to generate response. Please try again.",
}

# Structured provider status codes, checked before message inspection.
_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.INVALID_CREDENTIAL,
    403: ErrorKind.INVALID_CREDENTIAL,
    404: ErrorKind.INVALID_MODEL,
    413: ErrorKind.PAYLOAD_TOO_LARGE,
    429: ErrorKind.RATE_LIMITED,
}

# Ordered: the first matching substring wins.
_MESSAGE_KINDS: list[tuple[tuple[str, ...], ErrorKind]] = [
    (("api key",), ErrorKind.INVALID_CREDENTIAL),
    (("quota", "rate limit"), ErrorKind.RATE_LIMITED),
    (("model",), ErrorKind.INVALID_MODEL),
    (("content too long",), ErrorKind.PAYLOAD_TOO_LARGE),
]


class AssistantError(Exception):
    """Base error carrying a taxonomy kind and a user-facing message."""

    kind: ErrorKind = ErrorKind.PROVIDER_FAILURE

    def __init__(self, message: Optional[str] = None, kind: Optional[ErrorKind] = None):
        if kind is not None:
            self.kind = kind
        self.message = message or ERROR_MESSAGES[self.kind]
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.kind.value}


class InvalidInputError(AssistantError):
    kind = ErrorKind.INVALID_INPUT


class DocumentError(AssistantError):
    kind = ErrorKind.INVALID_FILE_FORMAT


class GenerationError(AssistantError):
    kind = ErrorKind.PROVIDER_FAILURE


class ConfigurationError(Exception):
    """Raised at startup when configuration values are inconsistent."""


def classify_provider_error(error: BaseException) -> ErrorKind:
    """Map a provider failure onto the generation error kinds.

    An integer ``code`` attribute (the HTTP status exposed by the Gemini SDK's
    API errors) is consulted first. Otherwise the message is searched for
    known substrings, case-insensitively.
    """
    code = getattr(error, "code", None)
    if isinstance(code, int) and code in _STATUS_KINDS:
        return _STATUS_KINDS[code]

    message = str(error).lower()
    for needles, kind in _MESSAGE_KINDS:
        if any(needle in message for needle in needles):
            return kind
    return ErrorKind.PROVIDER_FAILURE


def to_generation_error(error: BaseException) -> GenerationError:
    """Wrap a provider failure in a classified GenerationError."""
    if isinstance(error, GenerationError):
        return error
    return GenerationError(kind=classify_provider_error(error))
