"""Membership reconciliation for apply-update requests.

Materializes an upstream grant or revoke decision as an organization role
change. Every outcome, including directory failures, is returned as an
Outcome value; nothing is raised past this service.
"""

from __future__ import annotations

from collections.abc import Sequence

from access.application.observability import (
    DefaultMembershipReconcilerProbe,
    MembershipReconcilerProbe,
)
from access.domain.resolution import (
    desired_role,
    find_access_event,
    resolve_organization,
    resolve_subject_id,
)
from access.domain.status import Outcome, StatusCode
from access.domain.value_objects import Event
from access.ports.directory import IOrganizationDirectory

MISSING_SUBJECT_ERROR = "could not get github user id"
MISSING_ORGANIZATION_ERROR = "could not get github organization id"
# Reported for both grants and revokes.
ALREADY_IN_ROLE_ERROR = "user is already organization admin"


class MembershipReconciler:
    """Application service applying grant and revoke events.

    Compares the subject's current role with the desired one and writes to
    the directory only when they differ. The read and the write are not
    guarded against concurrent requests for the same membership.
    """

    def __init__(
        self,
        directory: IOrganizationDirectory,
        probe: MembershipReconcilerProbe | None = None,
    ):
        """Initialize MembershipReconciler with dependencies.

        Args:
            directory: Organization directory to read and write memberships
            probe: Optional domain probe for observability
        """
        self._directory = directory
        self._probe = probe or DefaultMembershipReconcilerProbe()

    async def apply_update(self, events: Sequence[Event]) -> Outcome:
        """Apply the first grant or revoke event in a batch.

        Args:
            events: Access events in delivery order

        Returns:
            A successful Outcome when nothing needed doing or the role was
            written; FAILED_PRECONDITION when the subject or organization
            cannot be resolved or the role already matches; INTERNAL when
            any directory call fails
        """
        event = find_access_event(events)
        if event is None:
            self._probe.non_access_events_received(event_count=len(events))
            return Outcome.success()

        role = desired_role(event)
        subject_id = resolve_subject_id(event)
        organization = resolve_organization(event)

        if not subject_id:
            self._probe.subject_unresolved(event=event.event)
            return Outcome.failure(
                StatusCode.FAILED_PRECONDITION, MISSING_SUBJECT_ERROR
            )

        if not organization:
            self._probe.organization_unresolved(
                event=event.event, subject_id=subject_id
            )
            return Outcome.failure(
                StatusCode.FAILED_PRECONDITION, MISSING_ORGANIZATION_ERROR
            )

        try:
            current_role = await self._directory.get_membership_role(
                username=subject_id, org=organization
            )

            if current_role == role:
                self._probe.membership_already_in_role(
                    subject_id=subject_id, organization=organization, role=role
                )
                return Outcome.failure(
                    StatusCode.FAILED_PRECONDITION, ALREADY_IN_ROLE_ERROR
                )

            await self._directory.set_membership_role(
                username=subject_id, org=organization, role=role
            )
        except Exception as e:
            self._probe.membership_update_failed(
                subject_id=subject_id, organization=organization, error=str(e)
            )
            return Outcome.failure(StatusCode.INTERNAL, str(e))

        self._probe.membership_updated(
            subject_id=subject_id,
            organization=organization,
            previous_role=current_role,
            role=role,
        )
        return Outcome.success()
