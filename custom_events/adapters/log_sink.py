"""Event sink that writes each event payload to the structured log."""
from typing import Iterable
import structlog
from .base import EventSink
from ..event_models import EventRecord

log = structlog.get_logger()


class LogSink(EventSink):
    """Emits events as log entries; nothing is retained."""

    def add(self, record: EventRecord, session_id: str | None = None) -> None:
        payload = record.to_payload(session_id)
        log.info(
            "sink.added",
            event_id=record.event_id,
            type=payload["type"],
            time=payload["time"],
            data=payload["data"],
            sink="log"
        )

    def list_recent(self, limit: int = 50) -> Iterable[EventRecord]:
        return []

    def health_check(self) -> bool:
        return True
