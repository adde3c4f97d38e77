"""Interpretation of access events.

Pure functions that pick the actionable event out of a batch and resolve the
subject, target organization and desired role it describes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from access.domain.value_objects import (
    ACCESS_GRANT,
    ORGANIZATION_KIND,
    Event,
    Label,
    MembershipRole,
    Resource,
)

ACCESS_EVENT_PATTERN = re.compile(r"grant|revoke")

USER_KIND_FRAGMENT = "user"


def is_access_event(event: Event) -> bool:
    """Whether an event is a grant or revoke decision."""
    return ACCESS_EVENT_PATTERN.search(event.event) is not None


def find_access_event(events: Iterable[Event]) -> Event | None:
    """Return the first grant or revoke event, or None."""
    return next((e for e in events if is_access_event(e)), None)


def desired_role(event: Event) -> MembershipRole:
    """Role the subject should end up with after the event is applied."""
    if event.event == ACCESS_GRANT:
        return MembershipRole.ADMIN
    return MembershipRole.MEMBER


def _first_label(resources: Sequence[Resource], kind: str, key: str) -> str | None:
    for resource in resources:
        if resource.kind_contains(kind):
            return resource.label(key)
    return None


def resolve_subject_id(event: Event) -> str | None:
    """GitHub id of the user the event targets.

    Uses the first user-kind resource; falls back to the actor's label when
    that resource is missing or carries no id.
    """
    subject = _first_label(event.resources, USER_KIND_FRAGMENT, Label.GITHUB_ID)
    if subject is None and event.actor is not None:
        subject = event.actor.label(Label.GITHUB_ID)
    return subject


def resolve_organization(event: Event) -> str | None:
    """Slug of the organization the event targets."""
    return _first_label(event.resources, ORGANIZATION_KIND, Label.GITHUB_SLUG)
