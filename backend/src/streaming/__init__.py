from .events import (
    DONE_SENTINEL,
    SSE_HEADERS,
    SSE_MEDIA_TYPE,
    DataEvent,
    DoneEvent,
    ErrorEvent,
    StreamEvent,
    encode_event,
    is_terminal,
)
from .relay import relay

__all__ = [
    "DONE_SENTINEL",
    "SSE_HEADERS",
    "SSE_MEDIA_TYPE",
    "DataEvent",
    "DoneEvent",
    "ErrorEvent",
    "StreamEvent",
    "encode_event",
    "is_terminal",
    "relay",
]
