"""Tests for attribution resolution."""
from unittest.mock import Mock

from custom_events.attribution import (
    AnalyticsSession,
    Attribution,
    AttributionResolver,
    InMemoryAnalyticsSession,
    InMemoryPushDelivery,
    PushDelivery,
)


def make_resolver(conversion=None, last_received=None):
    return AttributionResolver(
        InMemoryAnalyticsSession(conversion),
        InMemoryPushDelivery(last_received),
    )


def test_conversion_takes_priority():
    result = make_resolver("send id", "last send id").resolve()

    assert result == Attribution(conversion_send_id="send id")


def test_last_received_fallback():
    result = make_resolver(last_received="last send id").resolve()

    assert result.conversion_send_id is None
    assert result.last_received_send_id == "last send id"


def test_nothing_to_attribute():
    assert make_resolver().resolve() == Attribution()


def test_explicit_send_id_wins():
    result = make_resolver("send id", "last send id").resolve("push send id")

    assert result.conversion_send_id == "push send id"
    assert result.last_received_send_id is None


def test_sources_read_once_per_resolve():
    session = Mock(spec=AnalyticsSession)
    session.pending_conversion_reference.return_value = None
    push_delivery = Mock(spec=PushDelivery)
    push_delivery.last_received_reference.return_value = "last send id"

    resolver = AttributionResolver(session, push_delivery)
    resolver.resolve()

    session.pending_conversion_reference.assert_called_once_with()
    push_delivery.last_received_reference.assert_called_once_with()


def test_last_received_not_read_when_conversion_present():
    session = Mock(spec=AnalyticsSession)
    session.pending_conversion_reference.return_value = "send id"
    push_delivery = Mock(spec=PushDelivery)

    AttributionResolver(session, push_delivery).resolve()

    push_delivery.last_received_reference.assert_not_called()


def test_resolved_fresh_each_call():
    session = InMemoryAnalyticsSession()
    resolver = AttributionResolver(session, InMemoryPushDelivery())

    assert resolver.resolve().conversion_send_id is None

    session.conversion_send_id = "send id"
    assert resolver.resolve().conversion_send_id == "send id"
