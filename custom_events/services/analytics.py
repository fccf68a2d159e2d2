"""Analytics service that owns the attribution sources and the event sink."""
from ..adapters.base import EventSink
from ..adapters.memory import InMemorySink
from ..adapters.log_sink import LogSink
from ..attribution import (
    AnalyticsSession,
    AttributionResolver,
    InMemoryAnalyticsSession,
    InMemoryPushDelivery,
    PushDelivery,
)
from ..config import get_settings
from ..event_models import EventRecord
from .. import metrics as metrics_module
from typing import Iterable
import structlog
import uuid

log = structlog.get_logger()


class Analytics:
    """
    Analytics service that delegates finished events to a pluggable sink.

    The sink is selected from the SINK_ADAPTER setting unless one is given.
    """

    def __init__(
        self,
        sink: EventSink | None = None,
        session: AnalyticsSession | None = None,
        push_delivery: PushDelivery | None = None,
        session_id: str | None = None,
    ):
        """
        Initialize the analytics service.

        Args:
            sink: Event sink to use (defaults to configured sink)
            session: Source of the pending conversion send id
            push_delivery: Source of the last received send id
            session_id: Analytics session id (a new one is generated if omitted)
        """
        if sink is None:
            sink = _create_default_sink()
        self._sink = sink
        self._session = session or InMemoryAnalyticsSession()
        self._push_delivery = push_delivery or InMemoryPushDelivery()
        self.session_id = session_id or str(uuid.uuid4())

    @property
    def sink(self) -> EventSink:
        return self._sink

    @property
    def conversion_send_id(self) -> str | None:
        return self._session.pending_conversion_reference()

    @conversion_send_id.setter
    def conversion_send_id(self, send_id: str | None):
        if not isinstance(self._session, InMemoryAnalyticsSession):
            raise TypeError("conversion send id is owned by the configured analytics session")
        self._session.conversion_send_id = send_id

    @property
    def last_received_send_id(self) -> str | None:
        return self._push_delivery.last_received_reference()

    @last_received_send_id.setter
    def last_received_send_id(self, send_id: str | None):
        if not isinstance(self._push_delivery, InMemoryPushDelivery):
            raise TypeError("last received send id is owned by the configured push delivery")
        self._push_delivery.last_received_send_id = send_id

    def resolver(self) -> AttributionResolver:
        return AttributionResolver(self._session, self._push_delivery)

    def add_event(self, record: EventRecord) -> EventRecord:
        """Hand a finished event to the sink."""
        self._sink.add(record, session_id=self.session_id)
        metrics_module.metrics.record_event_added(type(self._sink).__name__)
        log.debug("event.added", event_id=record.event_id, event_name=record.event_name)
        return record

    def list_recent(self, limit: int = 50) -> Iterable[EventRecord]:
        return self._sink.list_recent(limit)

    def health_check(self) -> bool:
        return self._sink.health_check()


def _create_default_sink() -> EventSink:
    """
    Create the default sink based on configuration.

    Returns:
        EventSink instance based on SINK_ADAPTER setting
    """
    settings = get_settings()
    if settings.SINK_ADAPTER == "log":
        log.info("sink.selected", type="log")
        return LogSink()
    log.info("sink.selected", type="memory", max_events=settings.SINK_BUFFER_SIZE)
    return InMemorySink(max_events=settings.SINK_BUFFER_SIZE)


_analytics: Analytics | None = None


def get_analytics() -> Analytics:
    """Shared analytics instance used by builders created without one."""
    global _analytics
    if _analytics is None:
        _analytics = Analytics()
    return _analytics


def set_analytics(analytics: Analytics | None):
    global _analytics
    _analytics = analytics
