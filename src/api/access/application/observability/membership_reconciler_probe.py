"""Protocol for membership reconciliation observability.

Defines the interface for domain probes that capture application-level
events while grant and revoke decisions are applied to the directory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipReconcilerProbe(Protocol):
    """Domain probe for membership reconciliation."""

    def non_access_events_received(self, event_count: int) -> None:
        """Record that a batch contained no grant or revoke event."""
        ...

    def subject_unresolved(self, event: str) -> None:
        """Record that the event's subject has no GitHub id."""
        ...

    def organization_unresolved(self, event: str, subject_id: str) -> None:
        """Record that the event's organization has no slug."""
        ...

    def membership_already_in_role(
        self, subject_id: str, organization: str, role: str
    ) -> None:
        """Record that the subject already holds the desired role."""
        ...

    def membership_updated(
        self,
        subject_id: str,
        organization: str,
        previous_role: str,
        role: str,
    ) -> None:
        """Record that the subject's role was changed."""
        ...

    def membership_update_failed(
        self, subject_id: str, organization: str, error: str
    ) -> None:
        """Record that reading or writing the membership failed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> MembershipReconcilerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMembershipReconcilerProbe:
    """Default implementation of MembershipReconcilerProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipReconcilerProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipReconcilerProbe(logger=self._logger, context=context)

    def non_access_events_received(self, event_count: int) -> None:
        """Record that a batch contained no grant or revoke event."""
        self._logger.info(
            "non_access_events_received",
            event_count=event_count,
            **self._get_context_kwargs(),
        )

    def subject_unresolved(self, event: str) -> None:
        """Record that the event's subject has no GitHub id."""
        self._logger.error(
            "subject_unresolved",
            access_event=event,
            **self._get_context_kwargs(),
        )

    def organization_unresolved(self, event: str, subject_id: str) -> None:
        """Record that the event's organization has no slug."""
        self._logger.error(
            "organization_unresolved",
            access_event=event,
            subject_id=subject_id,
            **self._get_context_kwargs(),
        )

    def membership_already_in_role(
        self, subject_id: str, organization: str, role: str
    ) -> None:
        """Record that the subject already holds the desired role."""
        self._logger.warning(
            "membership_already_in_role",
            subject_id=subject_id,
            organization=organization,
            role=role,
            **self._get_context_kwargs(),
        )

    def membership_updated(
        self,
        subject_id: str,
        organization: str,
        previous_role: str,
        role: str,
    ) -> None:
        """Record that the subject's role was changed."""
        self._logger.info(
            "membership_updated",
            subject_id=subject_id,
            organization=organization,
            previous_role=previous_role,
            role=role,
            **self._get_context_kwargs(),
        )

    def membership_update_failed(
        self, subject_id: str, organization: str, error: str
    ) -> None:
        """Record that reading or writing the membership failed."""
        self._logger.error(
            "membership_update_failed",
            subject_id=subject_id,
            organization=organization,
            error=error,
            **self._get_context_kwargs(),
        )
