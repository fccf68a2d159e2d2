"""Tests for event metrics."""
from custom_events.builder import EventBuilder
from custom_events.errors import NotANumber
from custom_events.metrics import Metrics
import pytest


def test_event_created_counter():
    """Test created events are counted."""
    m = Metrics()

    m.record_event_created(None)
    m.record_event_created(5000000)

    assert m.registry.get_sample_value("custom_events_created_total") == 2.0
    assert m.registry.get_sample_value("custom_events_value_micros_count") == 1.0


def test_event_value_histogram_uses_magnitude():
    m = Metrics()

    m.record_event_created(-2000000)

    assert m.registry.get_sample_value("custom_events_value_micros_sum") == 2000000.0


def test_event_added_labels():
    m = Metrics()

    m.record_event_added("InMemorySink")
    m.record_event_added("InMemorySink")
    m.record_event_added("LogSink")

    assert m.registry.get_sample_value("custom_events_added_total", {"sink": "InMemorySink"}) == 2.0
    assert m.registry.get_sample_value("custom_events_added_total", {"sink": "LogSink"}) == 1.0


def test_separate_registries():
    """Test metrics instances do not share state."""
    first = Metrics()
    second = Metrics()

    first.record_event_created(None)

    assert second.registry.get_sample_value("custom_events_created_total") == 0.0


def test_builder_records_metrics(fresh_metrics):
    EventBuilder("event name").set_event_value(1).create()
    with pytest.raises(NotANumber):
        EventBuilder("event name").set_event_value("one")

    registry = fresh_metrics.registry
    assert registry.get_sample_value("custom_events_created_total") == 1.0
    assert registry.get_sample_value(
        "custom_events_validation_errors_total",
        {"field": "event_value", "error": "NotANumber"},
    ) == 1.0
