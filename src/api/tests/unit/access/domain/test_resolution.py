"""Unit tests for access event interpretation."""

import pytest

from access.domain.resolution import (
    desired_role,
    find_access_event,
    is_access_event,
    resolve_organization,
    resolve_subject_id,
)
from access.domain.value_objects import (
    ORGANIZATION_KIND,
    Event,
    MembershipRole,
    Resource,
)


def _user(github_id: str | None = "octocat", kind: str = "github.v1.User") -> Resource:
    labels = {} if github_id is None else {"github/id": github_id}
    return Resource(id="u1", kind=kind, labels=labels)


def _org(slug: str | None = "acme", kind: str = ORGANIZATION_KIND) -> Resource:
    labels = {} if slug is None else {"github/slug": slug}
    return Resource(id="42", kind=kind, labels=labels)


class TestIsAccessEvent:
    """Tests for grant/revoke matching."""

    @pytest.mark.parametrize(
        "name",
        ["access/grant", "access/revoke", "access/grant.approved", "revoke"],
    )
    def test_matches_grant_or_revoke_anywhere(self, name: str):
        """Any event name containing grant or revoke is actionable."""
        assert is_access_event(Event(event=name)) is True

    @pytest.mark.parametrize("name", ["access/request", "access/approve", ""])
    def test_rejects_other_events(self, name: str):
        """Events without grant or revoke are not actionable."""
        assert is_access_event(Event(event=name)) is False


class TestFindAccessEvent:
    """Tests for selecting the actionable event from a batch."""

    def test_returns_first_matching_event(self):
        """The first grant/revoke event in order wins."""
        first = Event(event="access/revoke")
        second = Event(event="access/grant")

        found = find_access_event([Event(event="access/request"), first, second])

        assert found is first

    def test_returns_none_when_nothing_matches(self):
        """No actionable event yields None."""
        assert find_access_event([Event(event="access/request")]) is None

    def test_returns_none_for_empty_batch(self):
        """An empty batch yields None."""
        assert find_access_event([]) is None


class TestDesiredRole:
    """Tests for mapping events to roles."""

    def test_grant_maps_to_admin(self):
        """access/grant should promote to admin."""
        assert desired_role(Event(event="access/grant")) == MembershipRole.ADMIN

    def test_revoke_maps_to_member(self):
        """access/revoke should demote to member."""
        assert desired_role(Event(event="access/revoke")) == MembershipRole.MEMBER

    def test_other_grant_variants_map_to_member(self):
        """Only the exact access/grant action promotes."""
        assert desired_role(Event(event="access/grant.expired")) == MembershipRole.MEMBER


class TestResolveSubjectId:
    """Tests for subject identity resolution."""

    def test_reads_user_resource_label(self):
        """The first user-kind resource supplies the GitHub id."""
        event = Event(event="access/grant", resources=(_org(), _user("octocat")))

        assert resolve_subject_id(event) == "octocat"

    def test_user_kind_match_is_case_insensitive(self):
        """Kind matching ignores case."""
        event = Event(event="access/grant", resources=(_user("hubot", kind="GITHUB.V1.USER"),))

        assert resolve_subject_id(event) == "hubot"

    def test_first_user_resource_wins(self):
        """Later user resources are ignored."""
        event = Event(
            event="access/grant",
            resources=(_user("first"), _user("second")),
        )

        assert resolve_subject_id(event) == "first"

    def test_falls_back_to_actor_label(self):
        """Without a user resource, the actor's GitHub id is used."""
        event = Event(
            event="access/grant",
            actor=Resource(kind="email.v1.Email", labels={"github/id": "actor"}),
            resources=(_org(),),
        )

        assert resolve_subject_id(event) == "actor"

    def test_falls_back_to_actor_when_user_has_no_label(self):
        """A user resource without a GitHub id defers to the actor."""
        event = Event(
            event="access/grant",
            actor=Resource(labels={"github/id": "actor"}),
            resources=(_user(None),),
        )

        assert resolve_subject_id(event) == "actor"

    def test_returns_none_when_unresolvable(self):
        """No user resource and no actor label yields None."""
        event = Event(event="access/grant", actor=Resource(), resources=(_org(),))

        assert resolve_subject_id(event) is None

    def test_returns_none_without_actor(self):
        """A missing actor is tolerated."""
        assert resolve_subject_id(Event(event="access/grant")) is None


class TestResolveOrganization:
    """Tests for organization resolution."""

    def test_reads_slug_from_organization_resource(self):
        """The organization resource supplies the slug."""
        event = Event(event="access/grant", resources=(_user(), _org("acme")))

        assert resolve_organization(event) == "acme"

    def test_kind_match_is_case_insensitive(self):
        """Kind matching ignores case."""
        event = Event(
            event="access/grant",
            resources=(_org("acme", kind="github.v1.organization"),),
        )

        assert resolve_organization(event) == "acme"

    def test_returns_none_without_organization(self):
        """No organization resource yields None."""
        event = Event(event="access/grant", resources=(_user(),))

        assert resolve_organization(event) is None

    def test_returns_none_when_slug_missing(self):
        """An organization resource without a slug yields None."""
        event = Event(event="access/grant", resources=(_org(None),))

        assert resolve_organization(event) is None
