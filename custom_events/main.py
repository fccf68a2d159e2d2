"""
Custom events bootstrap.

Configures structured logging and the shared analytics service from
settings. Host applications call init() once at startup.
"""
from .config import get_settings
from .logging import setup_logging, get_logger
from .adapters.base import EventSink
from .attribution import AnalyticsSession, PushDelivery
from .services.analytics import Analytics, set_analytics

__version__ = "0.1.0"


def init(
    sink: EventSink | None = None,
    session: AnalyticsSession | None = None,
    push_delivery: PushDelivery | None = None,
) -> Analytics:
    """
    Set up logging and install a shared Analytics instance.

    Args:
        sink: Event sink (defaults to the SINK_ADAPTER setting)
        session: Source of the pending conversion send id
        push_delivery: Source of the last received send id

    Returns:
        The installed Analytics instance
    """
    settings = get_settings()
    setup_logging(json_output=settings.LOG_JSON, level=settings.LOG_LEVEL, env=settings.ENV)
    logger = get_logger()

    analytics = Analytics(sink=sink, session=session, push_delivery=push_delivery)
    set_analytics(analytics)

    logger.info(
        "custom_events.initialized",
        version=__version__,
        env=settings.ENV,
        sink=type(analytics.sink).__name__,
        session_id=analytics.session_id,
    )
    return analytics
