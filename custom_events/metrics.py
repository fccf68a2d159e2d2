"""
Prometheus metrics for custom event construction.
"""
from prometheus_client import Counter, Histogram, CollectorRegistry


class Metrics:
    """
    Centralized metrics for event building and ingestion.
    """

    def __init__(self, registry=None):
        self.registry = registry or CollectorRegistry()

        self.events_created_total = Counter(
            "custom_events_created_total",
            "Total custom events created",
            registry=self.registry,
        )

        self.events_added_total = Counter(
            "custom_events_added_total",
            "Total custom events handed to a sink",
            ["sink"],
            registry=self.registry,
        )

        self.validation_errors_total = Counter(
            "custom_events_validation_errors_total",
            "Total rejected builder inputs",
            ["field", "error"],
            registry=self.registry,
        )

        self.event_value_micros = Histogram(
            "custom_events_value_micros",
            "Absolute normalized event value in micro units",
            buckets=(0, 1e6, 1e7, 1e8, 1e9, 1e10, 1e12, 1e15, float("inf")),
            registry=self.registry,
        )

    def record_event_created(self, event_value: int | None):
        """Record a created event and its value, if any."""
        self.events_created_total.inc()
        if event_value is not None:
            self.event_value_micros.observe(abs(event_value))

    def record_event_added(self, sink: str):
        self.events_added_total.labels(sink=sink).inc()

    def record_validation_error(self, field: str, error: str):
        self.validation_errors_total.labels(field=field, error=error).inc()


metrics = Metrics()


def set_metrics(m: Metrics):
    """Replace the shared metrics instance."""
    global metrics
    metrics = m
