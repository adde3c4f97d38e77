"""Domain-Oriented Observability for the access application layer.

Probes for enumeration and reconciliation following Domain-Oriented
Observability patterns.
"""

from access.application.observability.membership_reconciler_probe import (
    DefaultMembershipReconcilerProbe,
    MembershipReconcilerProbe,
)
from access.application.observability.resource_enumerator_probe import (
    DefaultResourceEnumeratorProbe,
    ResourceEnumeratorProbe,
)

__all__ = [
    "DefaultMembershipReconcilerProbe",
    "DefaultResourceEnumeratorProbe",
    "MembershipReconcilerProbe",
    "ResourceEnumeratorProbe",
]
