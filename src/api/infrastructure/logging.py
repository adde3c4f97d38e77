"""Structlog configuration for the webhook service.

Console output with colors when attached to a terminal, JSON lines
otherwise. Every event carries the service name, and values under
credential-like keys are masked before rendering.
"""

import logging
import os
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

SERVICE_NAME = "github-org-access-webhook"

REDACTED = "***"
SENSITIVE_KEYS = frozenset(
    {"authorization", "private_key", "secret", "signature", "token"}
)


def redact_sensitive_values(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask values whose key names a credential."""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(level: str = "INFO", service: str = SERVICE_NAME) -> None:
    """Configure structlog with appropriate processors.

    FORCE_COLOR=1 enables colors outside a TTY (e.g. in containers).

    Args:
        level: Minimum level name to emit (e.g. "INFO", "DEBUG")
        service: Value of the ``service`` field added to every event
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    def add_service(
        logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("service", service)
        return event_dict

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service,
        redact_sensitive_values,
    ]

    if use_colors:
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=True
        )
        processors = [*shared_processors, renderer]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
