"""Value objects for the access bounded context.

Resources and events are snapshots received from (or sent to) the access
governance platform. They are immutable and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

ORGANIZATION_KIND = "github.v1.Organization"

ACCESS_GRANT = "access/grant"


class Label(StrEnum):
    """Label keys carried on GitHub resources."""

    GITHUB_ID = "github/id"
    GITHUB_COMPANY = "github/company"
    GITHUB_SLUG = "github/slug"
    GITHUB_DESCRIPTION = "github/description"
    TIMESTAMP = "timestamp"


class MembershipRole(StrEnum):
    """Organization membership roles."""

    ADMIN = "admin"
    MEMBER = "member"


@dataclass(frozen=True)
class Resource:
    """Snapshot of one directory entity.

    Attributes:
        id: The directory's native identifier, as a string
        kind: Resource kind tag (e.g. ``github.v1.Organization``)
        display_name: Human readable name
        labels: Provider specific attributes
    """

    id: str = ""
    kind: str = ""
    display_name: str = ""
    labels: dict[str, str] = field(default_factory=dict)

    def label(self, key: str) -> str | None:
        """Return a label value, or None when the label is absent."""
        return self.labels.get(key)

    def kind_contains(self, fragment: str) -> bool:
        """Case-insensitive substring match against the kind tag."""
        return bool(self.kind) and fragment.lower() in self.kind.lower()


@dataclass(frozen=True)
class Event:
    """An upstream access decision record.

    Attributes:
        event: Dotted action name (e.g. ``access/grant``)
        actor: Subject that triggered the event, if known
        resources: Resources the event refers to, in order
    """

    event: str
    actor: Resource | None = None
    resources: tuple[Resource, ...] = ()
