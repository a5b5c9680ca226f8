"""
Logging setup and Sentry error tracking.

``setup_logging`` configures the root logger once at startup; ``init_sentry``
turns on Sentry only when a DSN is configured.
"""

import logging
import sys
from typing import Dict, Any, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from freelanceflow.core.config import settings

SENSITIVE_FIELDS = [
    'password', 'token', 'secret', 'authorization',
    'api_key', 'access_token', 'apikey',
]

SENSITIVE_HEADERS = [
    'Authorization', 'Cookie', 'X-API-Key', 'X-Auth-Token',
]


def init_sentry() -> bool:
    """
    Initialize Sentry for error tracking.

    Returns:
        True if Sentry was initialized, False when no DSN is configured
    """
    if not settings.SENTRY_DSN:
        logging.info("SENTRY_DSN not configured. Sentry disabled.")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT or settings.MODE,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        before_send=filter_sensitive_data,
        send_default_pii=False,
        attach_stacktrace=True,
    )
    logging.info(f"Sentry initialized for environment: {settings.MODE}")
    return True


def filter_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any] = None) -> Optional[Dict[str, Any]]:
    """
    Scrub credentials from a Sentry event before it leaves the process.

    Args:
        event: Sentry event dictionary
        hint: Sentry hint dictionary

    Returns:
        The event with sensitive request data replaced by '[FILTERED]'
    """
    request = event.get('request') or {}

    data = request.get('data')
    if isinstance(data, dict):
        for field in SENSITIVE_FIELDS:
            if field in data:
                data[field] = '[FILTERED]'

    headers = request.get('headers')
    if isinstance(headers, dict):
        for header in SENSITIVE_HEADERS:
            if header in headers:
                headers[header] = '[FILTERED]'

    return event


def capture_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    user_id: Optional[int] = None,
    tags: Optional[Dict[str, str]] = None
) -> Optional[str]:
    """
    Log an unexpected error and report it to Sentry with context.

    Args:
        error: Exception to capture
        context: Additional context dict to attach
        user_id: Owner of the failing request, if known
        tags: Tags to attach to the event

    Returns:
        Sentry event ID if sent, None otherwise
    """
    logging.getLogger(__name__).error(f"Unhandled error: {error}", exc_info=error)

    with sentry_sdk.new_scope() as scope:
        if user_id is not None:
            scope.set_user({"id": user_id})
        if context:
            for key, value in context.items():
                scope.set_context(key, value)
        if tags:
            for key, value in tags.items():
                scope.set_tag(key, value)
        return sentry_sdk.capture_exception(error)


def setup_logging():
    """
    Configure the root logger with a single stdout handler.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    logging.info(f"Logging configured with level: {settings.LOG_LEVEL}")
