"""Sentry integration for error tracking."""
from __future__ import annotations

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from shopcart import __version__

logger = logging.getLogger(__name__)


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    enable_logging: bool = True,
    traces_sample_rate: float = 0.0,
) -> bool:
    """Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN; tracking stays off when empty
        environment: Environment name (production, staging, development)
        enable_logging: Turn ERROR log records into Sentry events
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    integrations = []
    if enable_logging:
        integrations.append(LoggingIntegration(level=logging.INFO, event_level=logging.ERROR))

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=integrations,
        traces_sample_rate=traces_sample_rate,
        send_default_pii=False,
        release=f"shopcart@{__version__}",
    )
    logger.info("Sentry initialized for %s environment", environment)
    return True


def capture_exception(error: Exception, **extra: Any) -> None:
    """Capture exception and send to Sentry with additional context."""
    with sentry_sdk.new_scope() as scope:
        for key, value in extra.items():
            scope.set_context(key, value)
        sentry_sdk.capture_exception(error)
