"""Resource enumeration for pull-update requests.

Describes the current state of the supported resource kind (the GitHub
organization) so the governance platform can index it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from access.application.observability import (
    DefaultResourceEnumeratorProbe,
    ResourceEnumeratorProbe,
)
from access.domain.value_objects import ORGANIZATION_KIND, Label, Resource
from access.ports.directory import IOrganizationDirectory
from access.ports.exceptions import DirectoryError


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    return (
        moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class PullUpdateResult:
    """Resources returned by an enumeration.

    ``resources`` is None when no requested kind is supported, which
    serializes to an empty object.
    """

    resources: tuple[Resource, ...] | None = None


class ResourceEnumerator:
    """Application service answering pull-update requests.

    Only the organization kind is supported. Directory failures propagate as
    DirectoryError; the webhook boundary decides how to surface them.
    """

    def __init__(
        self,
        directory: IOrganizationDirectory,
        organization: str,
        probe: ResourceEnumeratorProbe | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize ResourceEnumerator with dependencies.

        Args:
            directory: Organization directory to read from
            organization: Login of the organization to describe
            probe: Optional domain probe for observability
            clock: Source of the snapshot timestamp
        """
        self._directory = directory
        self._organization = organization
        self._probe = probe or DefaultResourceEnumeratorProbe()
        self._clock = clock

    async def pull_update(self, kinds: Sequence[str]) -> PullUpdateResult:
        """Describe the requested resource kinds.

        Args:
            kinds: Resource kinds requested by the caller

        Returns:
            An empty result when the organization kind is not requested,
            otherwise exactly one organization resource

        Raises:
            DirectoryError: If the organization cannot be read
        """
        if ORGANIZATION_KIND not in kinds:
            self._probe.pull_update_skipped(kinds=list(kinds))
            return PullUpdateResult()

        try:
            org = await self._directory.get_organization(self._organization)
        except DirectoryError as e:
            self._probe.organization_read_failed(
                organization=self._organization, error=str(e)
            )
            raise

        native_id = str(org.native_id)
        resource = Resource(
            id=native_id,
            kind=ORGANIZATION_KIND,
            display_name=org.name or "",
            labels={
                Label.GITHUB_ID: native_id,
                Label.GITHUB_COMPANY: org.company or "",
                Label.GITHUB_SLUG: org.name or "",
                Label.GITHUB_DESCRIPTION: org.description or "",
                Label.TIMESTAMP: format_timestamp(self._clock()),
            },
        )

        self._probe.organization_enumerated(
            organization=self._organization, native_id=native_id
        )
        return PullUpdateResult(resources=(resource,))
