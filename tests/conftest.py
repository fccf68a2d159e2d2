"""Shared fixtures for custom event tests."""
import pytest
from unittest.mock import Mock

from custom_events.adapters.memory import InMemorySink
from custom_events.attribution import AnalyticsSession, PushDelivery
from custom_events.metrics import Metrics, set_metrics
from custom_events.services.analytics import Analytics, set_analytics


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Give each test its own metrics registry."""
    m = Metrics()
    set_metrics(m)
    yield m


@pytest.fixture
def session():
    session = Mock(spec=AnalyticsSession)
    session.pending_conversion_reference.return_value = None
    return session


@pytest.fixture
def push_delivery():
    push_delivery = Mock(spec=PushDelivery)
    push_delivery.last_received_reference.return_value = None
    return push_delivery


@pytest.fixture
def sink():
    return InMemorySink()


@pytest.fixture(autouse=True)
def analytics(sink, session, push_delivery):
    """Shared analytics instance backed by mocked attribution sources."""
    analytics = Analytics(sink=sink, session=session, push_delivery=push_delivery, session_id="session-1")
    set_analytics(analytics)
    yield analytics
    set_analytics(None)
