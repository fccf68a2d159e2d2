"""Tests for library bootstrap, configuration, and logging."""
import orjson
import structlog
from unittest.mock import Mock

from custom_events import EventBuilder, get_analytics, init
from custom_events.adapters.memory import InMemorySink
from custom_events.attribution import InMemoryAnalyticsSession, InMemoryPushDelivery
from custom_events.config import Settings
from custom_events.logging import setup_logging


def test_settings_defaults():
    settings = Settings()

    assert settings.SINK_ADAPTER == "memory"
    assert settings.SINK_BUFFER_SIZE == 1000
    assert settings.LOG_JSON is True


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CUSTOM_EVENTS_SINK_BUFFER_SIZE", "10")
    monkeypatch.setenv("CUSTOM_EVENTS_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.SINK_BUFFER_SIZE == 10
    assert settings.LOG_LEVEL == "debug"


def test_init_installs_shared_analytics(monkeypatch):
    setup = Mock()
    monkeypatch.setattr("custom_events.main.setup_logging", setup)
    sink = InMemorySink()
    push_delivery = InMemoryPushDelivery("last send id")

    analytics = init(sink=sink, session=InMemoryAnalyticsSession(), push_delivery=push_delivery)

    assert get_analytics() is analytics
    event = EventBuilder("event name").add_event()
    assert event.last_received_send_id == "last send id"
    assert list(sink.list_recent()) == [event]
    setup.assert_called_once_with(json_output=True, level="info", env="dev")


def test_json_logging_format(capsys):
    """Test JSON log lines carry the standard fields."""
    setup_logging(json_output=True, env="test")
    try:
        structlog.get_logger().info("test.event", key="value")
    finally:
        structlog.reset_defaults()

    line = capsys.readouterr().out.strip().splitlines()[-1]
    entry = orjson.loads(line)

    assert entry["event"] == "test.event"
    assert entry["key"] == "value"
    assert entry["level"] == "info"
    assert entry["service"] == "custom-events"
    assert entry["env"] == "test"
    assert "ts" in entry
    assert entry["function"] == "test_json_logging_format"
