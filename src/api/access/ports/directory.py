"""Directory port for the access bounded context.

The directory is the system of record for organization membership. The
application layer only depends on this protocol; the GitHub implementation
lives in infrastructure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from access.domain.value_objects import MembershipRole


@dataclass(frozen=True)
class OrganizationSnapshot:
    """Current attributes of an organization as reported by the directory."""

    native_id: int
    login: str
    name: str | None = None
    company: str | None = None
    description: str | None = None


@runtime_checkable
class IOrganizationDirectory(Protocol):
    """Read and write access to organization membership.

    Every method is a single blocking round trip; implementations do not
    retry.
    """

    async def get_organization(self, org: str) -> OrganizationSnapshot:
        """Read an organization's current attributes.

        Args:
            org: Organization login (slug)

        Raises:
            DirectoryError: If the organization cannot be read
        """
        ...

    async def get_membership_role(self, username: str, org: str) -> str:
        """Read a user's current role in an organization.

        Args:
            username: User handle or id understood by the directory
            org: Organization login (slug)

        Returns:
            The role string reported by the directory

        Raises:
            DirectoryError: If no membership exists or the read fails
        """
        ...

    async def set_membership_role(
        self, username: str, org: str, role: MembershipRole
    ) -> None:
        """Set a user's role in an organization.

        Raises:
            DirectoryError: If the write fails
        """
        ...
