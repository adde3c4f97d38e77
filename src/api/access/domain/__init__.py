"""Domain layer for the access bounded context.

Holds the status taxonomy, the access record value objects and the pure
rules for interpreting grant and revoke events.
"""

from access.domain.status import Outcome, StatusCode
from access.domain.value_objects import (
    ACCESS_GRANT,
    ORGANIZATION_KIND,
    Event,
    Label,
    MembershipRole,
    Resource,
)

__all__ = [
    "ACCESS_GRANT",
    "ORGANIZATION_KIND",
    "Event",
    "Label",
    "MembershipRole",
    "Outcome",
    "Resource",
    "StatusCode",
]
