"""Observation context for domain-oriented observability.

Observation contexts collect request-scoped metadata that probes attach to
every event they record.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Identifier of the webhook delivery being handled.
        request_kind: Kind of webhook request (``pull_update`` or ``apply_update``).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", request_kind="apply_update")
        probe = DefaultMembershipReconcilerProbe().with_context(context)
    """

    request_id: str | None = None
    request_kind: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.request_kind is not None:
            result["request_kind"] = self.request_kind
        result.update(self.extra)
        return result

    def with_request_kind(self, request_kind: str) -> ObservationContext:
        """Create a new context with the request kind set."""
        return ObservationContext(
            request_id=self.request_id,
            request_kind=request_kind,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            request_kind=self.request_kind,
            extra={**self.extra, **kwargs},
        )
