"""Application services for the access bounded context."""

from access.application.services.membership_reconciler import MembershipReconciler
from access.application.services.resource_enumerator import (
    PullUpdateResult,
    ResourceEnumerator,
)

__all__ = [
    "MembershipReconciler",
    "PullUpdateResult",
    "ResourceEnumerator",
]
