"""
Structured logging for the PayU client and the notification receiver.

Events are emitted through structlog and rendered by stdlib handlers, so
library users who never call ``configure_logging`` still get plain stdlib
records. Credentials never reach the renderer: ``redact_secrets`` masks
them before any output processor runs.
"""

import logging
import os
import sys
from typing import Optional

import structlog
from opentelemetry.instrumentation.logging import LoggingInstrumentor

# Event keys whose values must never be written out
SECRET_KEYS = frozenset(
    {
        "access_token",
        "authorization",
        "client_secret",
        "second_key",
        "signature",
    }
)
REDACTED = "***"


def redact_secrets(logger, method_name, event_dict):
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _renderer(environment: str):
    if environment in ("test", "production"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging(level: Optional[str] = None, environment: Optional[str] = None):
    """Set up structlog + OTEL context injection.

    Args:
        level: log level name, defaults to ``LOG_LEVEL`` or INFO
        environment: selects JSON (test/production) or console output,
            defaults to ``ENVIRONMENT``
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    environment = environment or os.getenv("ENVIRONMENT", "development")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            structlog.processors.format_exc_info,
            _renderer(environment),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdout is easier to capture in tests
    stream = sys.stdout if environment == "test" else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    # urllib3 logs every connection at DEBUG, including the token endpoint
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    LoggingInstrumentor().instrument(set_logging_format=False)


class BusinessEvents:
    """Event names shared by client and receiver logs"""

    API_ENTRY = "api.request"
    TOKEN_FETCH = "token.fetch"
    TOKEN_REFRESHED = "token.refreshed"
    TOKEN_FETCH_FAILED = "token.fetch_failed"
    PAYMENT_ATTEMPT = "payment.attempt"
    PAYMENT_SUCCESS = "payment.success"
    PAYMENT_FAILURE = "payment.failure"
    PAYMENT_UNEXPECTED_BODY = "payment.unexpected_body"
    NOTIFICATION_RECEIVED = "notification.received"
    NOTIFICATION_REJECTED = "notification.rejected"
