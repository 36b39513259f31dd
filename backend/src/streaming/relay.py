import logging
from typing import Iterable, Iterator

from errors import AssistantError
from .events import DataEvent, DoneEvent, ErrorEvent, StreamEvent

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def _error_event(error: Exception) -> ErrorEvent:
    if isinstance(error, AssistantError):
        return ErrorEvent(message=error.message, code=error.kind.value)
    return ErrorEvent(message=str(error) or UNKNOWN_ERROR_MESSAGE)


def relay(fragments: Iterable[str]) -> Iterator[StreamEvent]:
    """Re-emit provider fragments as stream events.

    Every fragment becomes a ``DataEvent`` as soon as it is pulled. The
    sequence ends with exactly one ``DoneEvent`` on exhaustion or one
    ``ErrorEvent`` on failure. If the consumer stops iterating early the
    source iterator is closed so the provider stream is released.
    """
    source = iter(fragments)
    delivered = 0
    terminated = False
    try:
        while True:
            try:
                fragment = next(source)
            except StopIteration:
                break
            except Exception as e:
                terminated = True
                logger.warning(
                    f"Stream failed after {delivered} fragments: {type(e).__name__}"
                )
                yield _error_event(e)
                return

            delivered += 1
            yield DataEvent(content=fragment)

        terminated = True
        logger.info(f"Stream completed with {delivered} fragments")
        yield DoneEvent()
    finally:
        if not terminated:
            logger.info(f"Stream consumer went away after {delivered} fragments")
        close = getattr(source, "close", None)
        if close is not None:
            close()
