# dutyroster/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Besides exceptions, the service reports roster data-quality problems
(malformed shift times, unknown filter ids) so they reach whoever owns the
upstream data.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from dutyroster.core.config import APP_VERSION, IS_PRODUCTION

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ("cookie", "authorization", "x-api-key")


def init_sentry(production: bool = IS_PRODUCTION) -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                LoggingIntegration(
                    level=logging.INFO,  # Breadcrumbs from INFO and above
                    event_level=logging.ERROR,  # Send errors and above as events
                ),
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", f"dutyroster@{APP_VERSION}"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False

    env = os.getenv("SENTRY_ENVIRONMENT", "production")
    logger.info(f"Sentry initialized successfully (environment: {env})")
    return True


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Returns:
        Modified event or None to drop the event
    """
    request = event.get("request")
    if request and "headers" in request:
        for header in SENSITIVE_HEADERS:
            if header in request["headers"]:
                request["headers"][header] = "[Filtered]"

    # Roster payloads carry doctor names and phone numbers
    if request and "data" in request:
        request["data"] = "[Filtered]"

    return event


def capture_message(message: str, level: str = "info", context: dict | None = None) -> None:
    """
    Send a message to Sentry with optional structured context.

    Without an initialized client the SDK drops the event, so this is safe to
    call in development and tests.
    """
    with sentry_sdk.new_scope() as scope:
        for key, value in (context or {}).items():
            scope.set_context(key, value)
        sentry_sdk.capture_message(message, level=level)
