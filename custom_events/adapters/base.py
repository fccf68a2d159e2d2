"""Interface between finished custom events and whatever ingests them."""
from abc import ABC, abstractmethod
from typing import Iterable
from ..event_models import EventRecord


class EventSink(ABC):
    """
    Destination for events handed over by Analytics.add_event().

    Sinks take ownership of delivery; the builder never hears back from
    them. Records are frozen, so a sink may keep references to them.
    """

    @abstractmethod
    def add(self, record: EventRecord, session_id: str | None = None) -> None:
        """
        Accept one finished event.

        Args:
            record: Event produced by EventBuilder.create()
            session_id: Analytics session to stamp into the uploaded payload
        """

    @abstractmethod
    def list_recent(self, limit: int = 50) -> Iterable[EventRecord]:
        """Events this sink still holds, newest first; empty if it keeps none."""

    @abstractmethod
    def health_check(self) -> bool:
        """Whether add() can currently accept events."""
