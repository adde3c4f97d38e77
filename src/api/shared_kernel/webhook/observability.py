"""Domain probe for webhook signature verification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to verifying inbound deliveries.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WebhookVerifierProbe(Protocol):
    """Domain probe for webhook signature verification."""

    def signature_verified(self, timestamp: str) -> None:
        """Record that a delivery's signature was accepted."""
        ...

    def signature_rejected(self, reason: str) -> None:
        """Record that a delivery's signature was rejected."""
        ...

    def with_context(self, context: ObservationContext) -> WebhookVerifierProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultWebhookVerifierProbe:
    """Default implementation of WebhookVerifierProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultWebhookVerifierProbe:
        """Create a new probe with observation context bound."""
        return DefaultWebhookVerifierProbe(logger=self._logger, context=context)

    def signature_verified(self, timestamp: str) -> None:
        """Record that a delivery's signature was accepted."""
        self._logger.debug(
            "webhook_signature_verified",
            timestamp=timestamp,
            **self._get_context_kwargs(),
        )

    def signature_rejected(self, reason: str) -> None:
        """Record that a delivery's signature was rejected."""
        self._logger.warning(
            "webhook_signature_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
