"""
Custom event construction for analytics.

Provides:
- EventBuilder with validating setters
- Fixed-point event value normalization
- Send id attribution resolution
- Event sinks and the analytics service that feeds them
"""

from .builder import EventBuilder
from .event_models import EventRecord, InboxMessage, PushMessage
from .errors import (
    BuilderFinalizedError,
    EventValidationError,
    InvalidField,
    NotANumber,
)
from .attribution import (
    AnalyticsSession,
    PushDelivery,
    AttributionResolver,
    Attribution,
)
from .services.analytics import Analytics, get_analytics, set_analytics
from .main import init

__all__ = [
    "EventBuilder",
    "EventRecord",
    "InboxMessage",
    "PushMessage",
    "BuilderFinalizedError",
    "EventValidationError",
    "InvalidField",
    "NotANumber",
    "AnalyticsSession",
    "PushDelivery",
    "AttributionResolver",
    "Attribution",
    "Analytics",
    "get_analytics",
    "set_analytics",
    "init",
]
