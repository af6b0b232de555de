"""Structlog configuration for the sync bridge.

Events are rendered as JSON unless a TTY or ``FORCE_COLOR`` asks for the
colored console renderer. Request-scoped values (``request_id``) are merged
from contextvars. Credential-bearing fields are masked before rendering.
"""

import logging
import os
import sys
from typing import Any

import structlog

REDACTED = "[redacted]"

# Event keys whose values are never written to the log
SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "credential",
        "credential_secret",
        "password",
        "secret",
        "session_token",
        "token",
    }
)


def redact_sensitive_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask the values of credential-bearing keys."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the bridge.

    Args:
        debug: Emit debug-level events (binding lookups, settings reads)
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_sensitive_values,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        renderers: list[structlog.types.Processor] = [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderers],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
