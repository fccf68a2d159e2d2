"""Attribution sources and resolution of the send id credited for an event."""
from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict
import structlog

log = structlog.get_logger()


class AnalyticsSession(ABC):
    """Source of the conversion send id for the current analytics session."""

    @abstractmethod
    def pending_conversion_reference(self) -> str | None:
        """
        Send id of the push that opened the app, while a conversion is pending.

        Returns:
            The send id, or None when no conversion is being tracked
        """
        pass


class PushDelivery(ABC):
    """Source of push delivery history."""

    @abstractmethod
    def last_received_reference(self) -> str | None:
        """
        Send id of the most recently received push.

        Returns:
            The send id, or None when no push has been received
        """
        pass


class InMemoryAnalyticsSession(AnalyticsSession):
    """Analytics session whose conversion send id is set by the host app."""

    def __init__(self, conversion_send_id: str | None = None):
        self.conversion_send_id = conversion_send_id

    def pending_conversion_reference(self) -> str | None:
        return self.conversion_send_id


class InMemoryPushDelivery(PushDelivery):
    """Push delivery history kept in memory."""

    def __init__(self, last_received_send_id: str | None = None):
        self.last_received_send_id = last_received_send_id

    def last_received_reference(self) -> str | None:
        return self.last_received_send_id


class Attribution(BaseModel):
    """Resolved attribution; at most one field is set."""
    model_config = ConfigDict(frozen=True)

    conversion_send_id: str | None = None
    last_received_send_id: str | None = None


class AttributionResolver:
    """
    Resolves which send id an event is attributed to.

    Priority:
    1. Send id supplied explicitly by the caller
    2. Pending conversion send id from the analytics session
    3. Last received send id from push delivery

    Sources are queried on every call and at most once each.
    """

    def __init__(self, session: AnalyticsSession, push_delivery: PushDelivery):
        self._session = session
        self._push_delivery = push_delivery

    def resolve(self, explicit_send_id: str | None = None) -> Attribution:
        if explicit_send_id is not None:
            log.debug("attribution.resolved", source="explicit", send_id=explicit_send_id)
            return Attribution(conversion_send_id=explicit_send_id)

        conversion_send_id = self._session.pending_conversion_reference()
        if conversion_send_id is not None:
            log.debug("attribution.resolved", source="conversion", send_id=conversion_send_id)
            return Attribution(conversion_send_id=conversion_send_id)

        last_received_send_id = self._push_delivery.last_received_reference()
        if last_received_send_id is not None:
            log.debug("attribution.resolved", source="last_received", send_id=last_received_send_id)
            return Attribution(last_received_send_id=last_received_send_id)

        log.debug("attribution.resolved", source=None)
        return Attribution()
