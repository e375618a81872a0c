import structlog
from logging import getLevelName


def configure_structlog(log_level="WARNING", json_logs: bool = True):
    """
    Configure structlog for GfycatSDK output, unless the application already configured it.

    Events carry their level and an ISO timestamp; ``json_logs=False`` renders them for the console.
    """
    if structlog.is_configured():
        return
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getLevelName(log_level.upper())),
    )
