"""Protocol for resource enumeration observability.

Defines the interface for domain probes that capture application-level
events for pull-update (enumeration) requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ResourceEnumeratorProbe(Protocol):
    """Domain probe for resource enumeration."""

    def pull_update_skipped(self, kinds: list[str]) -> None:
        """Record that none of the requested kinds is supported."""
        ...

    def organization_enumerated(self, organization: str, native_id: str) -> None:
        """Record that the organization snapshot was returned."""
        ...

    def organization_read_failed(self, organization: str, error: str) -> None:
        """Record that reading the organization from the directory failed."""
        ...

    def with_context(self, context: ObservationContext) -> ResourceEnumeratorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultResourceEnumeratorProbe:
    """Default implementation of ResourceEnumeratorProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultResourceEnumeratorProbe:
        """Create a new probe with observation context bound."""
        return DefaultResourceEnumeratorProbe(logger=self._logger, context=context)

    def pull_update_skipped(self, kinds: list[str]) -> None:
        """Record that none of the requested kinds is supported."""
        self._logger.info(
            "pull_update_skipped",
            kinds=kinds,
            **self._get_context_kwargs(),
        )

    def organization_enumerated(self, organization: str, native_id: str) -> None:
        """Record that the organization snapshot was returned."""
        self._logger.info(
            "organization_enumerated",
            organization=organization,
            native_id=native_id,
            **self._get_context_kwargs(),
        )

    def organization_read_failed(self, organization: str, error: str) -> None:
        """Record that reading the organization from the directory failed."""
        self._logger.error(
            "organization_read_failed",
            organization=organization,
            error=error,
            **self._get_context_kwargs(),
        )
