"""In-memory event sink."""
from collections import deque
from typing import Iterable
import structlog
from .base import EventSink
from ..event_models import EventRecord

log = structlog.get_logger()


class InMemorySink(EventSink):
    """In-memory sink holding the most recent events."""

    def __init__(self, max_events: int = 1000):
        self._buffer: deque[EventRecord] = deque(maxlen=max_events)

    def add(self, record: EventRecord, session_id: str | None = None) -> None:
        """Append event to the in-memory buffer."""
        self._buffer.append(record)
        log.info(
            "sink.added",
            event_id=record.event_id,
            event_name=record.event_name,
            session_id=session_id,
            sink="memory"
        )

    def list_recent(self, limit: int = 50) -> Iterable[EventRecord]:
        """List recent events from the buffer."""
        return list(reversed(self._buffer))[:limit]

    def health_check(self) -> bool:
        """In-memory sink is always healthy."""
        return True
