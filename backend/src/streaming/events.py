"""Stream events emitted by the relay and their Server-Sent Events framing."""

import json
from dataclasses import dataclass
from typing import Union

from errors import ErrorKind

DONE_SENTINEL = "[DONE]"
SSE_MEDIA_TYPE = "text/event-stream"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@dataclass(frozen=True)
class DataEvent:
    content: str


@dataclass(frozen=True)
class DoneEvent:
    pass


@dataclass(frozen=True)
class ErrorEvent:
    message: str
    code: str = ErrorKind.PROVIDER_FAILURE.value


StreamEvent = Union[DataEvent, DoneEvent, ErrorEvent]


def is_terminal(event: StreamEvent) -> bool:
    return isinstance(event, (DoneEvent, ErrorEvent))


def encode_event(event: StreamEvent) -> str:
    """Serialize an event as one SSE ``data:`` frame.

    Data and error events carry a JSON object; the error object is told
    apart by its ``error`` field. Done is the literal ``[DONE]`` sentinel.
    """
    if isinstance(event, DataEvent):
        payload = json.dumps({"content": event.content})
    elif isinstance(event, ErrorEvent):
        payload = json.dumps({"error": event.message, "code": event.code})
    elif isinstance(event, DoneEvent):
        payload = DONE_SENTINEL
    else:
        raise TypeError(f"Unknown stream event: {event!r}")
    return f"data: {payload}\n\n"
