"""Ports (interfaces) for the access bounded context.

Ports define the contract of the organization directory without tying the
application layer to a particular provider.
"""

from access.ports.directory import IOrganizationDirectory, OrganizationSnapshot
from access.ports.exceptions import (
    DirectoryError,
    DirectoryRequestFailed,
    DirectoryUnavailable,
)

__all__ = [
    "DirectoryError",
    "DirectoryRequestFailed",
    "DirectoryUnavailable",
    "IOrganizationDirectory",
    "OrganizationSnapshot",
]
