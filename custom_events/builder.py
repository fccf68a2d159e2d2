"""
Builder for custom events.

Each setter validates its input when called and leaves the builder
untouched if the input is rejected. Attribution is only resolved in
create(), since the send ids it depends on change over time.
"""
import structlog

from .attribution import AttributionResolver
from .errors import BuilderFinalizedError, EventValidationError, InvalidField
from .event_models import (
    EventRecord,
    InboxMessage,
    MAX_FIELD_LENGTH,
    MCRAP_INTERACTION_TYPE,
    PushMessage,
    field_length,
)
from .event_value import EventValue, normalize_event_value
from . import metrics as metrics_module
from .services.analytics import Analytics, get_analytics

log = structlog.get_logger()


class EventBuilder:
    """
    Accumulates custom event fields and creates an EventRecord.

    Example:
        record = (
            EventBuilder("purchase")
            .set_event_value("19.99")
            .set_transaction_id("order-42")
            .create()
        )
    """

    def __init__(
        self,
        event_name: str,
        analytics: Analytics | None = None,
        resolver: AttributionResolver | None = None,
    ):
        """
        Start a new event.

        Args:
            event_name: Event name, 1 to 255 characters
            analytics: Analytics service for attribution and add_event()
                (defaults to the shared instance)
            resolver: Attribution resolver overriding the one from analytics

        Raises:
            InvalidField: If the name is missing, empty, or too long
        """
        self._validate(self._check_length, "event_name", event_name, True)
        self._event_name = event_name
        self._analytics = analytics
        self._resolver = resolver
        self._event_value: int | None = None
        self._transaction_id: str | None = None
        self._interaction_id: str | None = None
        self._interaction_type: str | None = None
        self._explicit_send_id: str | None = None
        self._finalized = False

    def set_transaction_id(self, transaction_id: str | None) -> "EventBuilder":
        """Set or clear (None) the transaction id, at most 255 characters."""
        self._ensure_open()
        self._validate(self._check_length, "transaction_id", transaction_id)
        self._transaction_id = transaction_id
        return self

    def set_interaction(self, interaction_type: str | None, interaction_id: str | None) -> "EventBuilder":
        """
        Set the interaction the event belongs to.

        Either part may be None; each present part is at most 255 characters.
        """
        self._ensure_open()
        self._validate(self._check_length, "interaction_type", interaction_type)
        self._validate(self._check_length, "interaction_id", interaction_id)
        self._interaction_type = interaction_type
        self._interaction_id = interaction_id
        return self

    def set_interaction_from_message(self, message: InboxMessage) -> "EventBuilder":
        """Set the interaction to an inbox message."""
        return self.set_interaction(MCRAP_INTERACTION_TYPE, message.message_id)

    def set_event_value(self, value: EventValue) -> "EventBuilder":
        """
        Set or clear (None) the event value.

        Accepts int, float, decimal string or Decimal. The value is stored
        as an integer scaled by 10^6 with extra digits truncated.

        Raises:
            NotANumber: If the value is NaN, infinite, or not numeric text
            InvalidField: If the value is outside the 32-bit integer range
        """
        self._ensure_open()
        self._event_value = self._validate(normalize_event_value, value)
        return self

    def set_attribution(self, push_message: PushMessage | None) -> "EventBuilder":
        """
        Attribute the event to a delivered push.

        The push's send id takes precedence over the session's conversion
        send id and the last received send id.
        """
        self._ensure_open()
        self._explicit_send_id = push_message.send_id if push_message is not None else None
        return self

    def create(self) -> EventRecord:
        """
        Resolve attribution and create the event.

        Returns:
            The finished EventRecord

        Raises:
            BuilderFinalizedError: If create() was already called
        """
        self._ensure_open()
        attribution = self._get_resolver().resolve(self._explicit_send_id)
        record = EventRecord(
            event_name=self._event_name,
            event_value=self._event_value,
            transaction_id=self._transaction_id,
            interaction_id=self._interaction_id,
            interaction_type=self._interaction_type,
            conversion_send_id=attribution.conversion_send_id,
            last_received_send_id=attribution.last_received_send_id,
        )
        self._finalized = True

        metrics_module.metrics.record_event_created(record.event_value)
        log.info("event.created", event_id=record.event_id, event_name=record.event_name)
        return record

    def add_event(self) -> EventRecord:
        """Create the event and add it to analytics."""
        record = self.create()
        return self._get_analytics().add_event(record)

    def _get_analytics(self) -> Analytics:
        return self._analytics or get_analytics()

    def _get_resolver(self) -> AttributionResolver:
        return self._resolver or self._get_analytics().resolver()

    def _ensure_open(self):
        if self._finalized:
            raise BuilderFinalizedError("EventBuilder has already created its event")

    @staticmethod
    def _check_length(field: str, value, required: bool = False):
        if value is None:
            if required:
                raise InvalidField(field, value, f"{field} is required")
            return None
        if not isinstance(value, str):
            raise TypeError(f"{field} must be a string, not {type(value).__name__}")
        length = field_length(value)
        if required and length == 0:
            raise InvalidField(field, value, f"{field} must not be empty")
        if length > MAX_FIELD_LENGTH:
            raise InvalidField(
                field,
                value,
                f"{field} must not exceed {MAX_FIELD_LENGTH} characters (got {length})",
            )
        return value

    @staticmethod
    def _validate(check, *args):
        """Run a check, logging and counting rejected input before re-raising."""
        try:
            return check(*args)
        except EventValidationError as e:
            log.warning(
                "event.validation_failed",
                field=e.field,
                error=type(e).__name__,
                message=str(e),
            )
            metrics_module.metrics.record_validation_error(e.field, type(e).__name__)
            raise
