"""Unit tests for MembershipReconciler."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from access.application.observability.membership_reconciler_probe import (
    MembershipReconcilerProbe,
)
from access.application.services.membership_reconciler import MembershipReconciler
from access.domain.status import StatusCode
from access.domain.value_objects import (
    ORGANIZATION_KIND,
    Event,
    MembershipRole,
    Resource,
)
from access.ports.directory import IOrganizationDirectory
from access.ports.exceptions import DirectoryRequestFailed, DirectoryUnavailable


@pytest.fixture
def mock_directory():
    """Create mock organization directory."""
    directory = create_autospec(IOrganizationDirectory, instance=True)
    directory.get_membership_role = AsyncMock(return_value="member")
    directory.set_membership_role = AsyncMock(return_value=None)
    return directory


@pytest.fixture
def mock_probe():
    """Create mock reconciler probe."""
    return create_autospec(MembershipReconcilerProbe, instance=True)


@pytest.fixture
def reconciler(mock_directory, mock_probe) -> MembershipReconciler:
    """Create MembershipReconciler with mock dependencies."""
    return MembershipReconciler(directory=mock_directory, probe=mock_probe)


def _event(
    name: str = "access/grant",
    user_id: str | None = "octocat",
    org: str | None = "acme",
    actor: Resource | None = None,
) -> Event:
    resources = []
    if user_id is not None:
        resources.append(
            Resource(id="u1", kind="github.v1.User", labels={"github/id": user_id})
        )
    if org is not None:
        resources.append(
            Resource(id="42", kind=ORGANIZATION_KIND, labels={"github/slug": org})
        )
    return Event(event=name, actor=actor, resources=tuple(resources))


class TestMembershipReconcilerInit:
    """Tests for MembershipReconciler initialization."""

    def test_uses_default_probe_when_not_provided(self, mock_directory):
        """Service should create default probe when not provided."""
        service = MembershipReconciler(directory=mock_directory)
        assert service._probe is not None


class TestNonAccessEvents:
    """Tests for batches without grant or revoke events."""

    @pytest.mark.asyncio
    async def test_returns_success_without_code(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """A batch with no grant/revoke event is a no-op success."""
        outcome = await reconciler.apply_update(
            [Event(event="access/request"), Event(event="access/approve")]
        )

        assert outcome.code is None
        assert outcome.error_data is None
        mock_directory.get_membership_role.assert_not_called()
        mock_directory.set_membership_role.assert_not_called()
        mock_probe.non_access_events_received.assert_called_once_with(event_count=2)

    @pytest.mark.asyncio
    async def test_empty_batch_is_success(self, reconciler: MembershipReconciler):
        """An empty batch is a no-op success."""
        outcome = await reconciler.apply_update([])

        assert outcome.is_success


class TestPreconditions:
    """Tests for unresolvable subjects and organizations."""

    @pytest.mark.asyncio
    async def test_missing_subject_fails_precondition(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """A grant without a resolvable user id fails."""
        outcome = await reconciler.apply_update([_event(user_id=None)])

        assert outcome.code == StatusCode.FAILED_PRECONDITION
        assert outcome.error_data == "could not get github user id"
        mock_directory.get_membership_role.assert_not_called()
        mock_probe.subject_unresolved.assert_called_once_with(event="access/grant")

    @pytest.mark.asyncio
    async def test_empty_subject_id_fails_precondition(
        self, reconciler: MembershipReconciler
    ):
        """An empty GitHub id label counts as unresolved."""
        outcome = await reconciler.apply_update([_event(user_id="")])

        assert outcome.code == StatusCode.FAILED_PRECONDITION
        assert outcome.error_data == "could not get github user id"

    @pytest.mark.asyncio
    async def test_missing_organization_fails_precondition(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """A resolvable subject without an organization fails."""
        outcome = await reconciler.apply_update([_event(org=None)])

        assert outcome.code == StatusCode.FAILED_PRECONDITION
        assert outcome.error_data == "could not get github organization id"
        mock_directory.get_membership_role.assert_not_called()
        mock_probe.organization_unresolved.assert_called_once_with(
            event="access/grant", subject_id="octocat"
        )

    @pytest.mark.asyncio
    async def test_subject_checked_before_organization(
        self, reconciler: MembershipReconciler
    ):
        """With neither resolvable, the subject error is reported."""
        outcome = await reconciler.apply_update([_event(user_id=None, org=None)])

        assert outcome.error_data == "could not get github user id"

    @pytest.mark.asyncio
    async def test_actor_supplies_subject(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """The actor's GitHub id is used when no user resource exists."""
        actor = Resource(kind="github.v1.User", labels={"github/id": "actor-login"})

        outcome = await reconciler.apply_update([_event(user_id=None, actor=actor)])

        assert outcome.is_success
        mock_directory.get_membership_role.assert_awaited_once_with(
            username="actor-login", org="acme"
        )


class TestAlreadyInRole:
    """Tests for the idempotency guard.

    An already-satisfied request is reported as FAILED_PRECONDITION rather
    than success. This is the existing, documented contract; the message
    mentions admin even for revokes.
    """

    @pytest.mark.asyncio
    async def test_grant_for_existing_admin_fails_precondition(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """Granting admin to an admin does not write."""
        mock_directory.get_membership_role.return_value = "admin"

        outcome = await reconciler.apply_update([_event("access/grant")])

        assert outcome.code == StatusCode.FAILED_PRECONDITION
        assert outcome.error_data == "user is already organization admin"
        mock_directory.set_membership_role.assert_not_called()
        mock_probe.membership_already_in_role.assert_called_once_with(
            subject_id="octocat", organization="acme", role=MembershipRole.ADMIN
        )

    @pytest.mark.asyncio
    async def test_revoke_for_existing_member_fails_precondition(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """Revoking from a plain member does not write either."""
        mock_directory.get_membership_role.return_value = "member"

        outcome = await reconciler.apply_update([_event("access/revoke")])

        assert outcome.code == StatusCode.FAILED_PRECONDITION
        assert outcome.error_data == "user is already organization admin"
        mock_directory.set_membership_role.assert_not_called()


class TestRoleChange:
    """Tests for successful role writes."""

    @pytest.mark.asyncio
    async def test_grant_promotes_member_to_admin(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """A grant for a member writes the admin role."""
        mock_directory.get_membership_role.return_value = "member"

        outcome = await reconciler.apply_update([_event("access/grant")])

        assert outcome.code is None
        assert outcome.is_success
        mock_directory.get_membership_role.assert_awaited_once_with(
            username="octocat", org="acme"
        )
        mock_directory.set_membership_role.assert_awaited_once_with(
            username="octocat", org="acme", role=MembershipRole.ADMIN
        )
        mock_probe.membership_updated.assert_called_once_with(
            subject_id="octocat",
            organization="acme",
            previous_role="member",
            role=MembershipRole.ADMIN,
        )

    @pytest.mark.asyncio
    async def test_revoke_demotes_admin_to_member(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """A revoke for an admin writes the member role."""
        mock_directory.get_membership_role.return_value = "admin"

        outcome = await reconciler.apply_update([_event("access/revoke")])

        assert outcome.is_success
        mock_directory.set_membership_role.assert_awaited_once_with(
            username="octocat", org="acme", role=MembershipRole.MEMBER
        )

    @pytest.mark.asyncio
    async def test_only_first_access_event_is_applied(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """Later grant/revoke events in the batch are ignored."""
        mock_directory.get_membership_role.return_value = "member"

        await reconciler.apply_update(
            [
                Event(event="access/request"),
                _event("access/grant", user_id="first"),
                _event("access/revoke", user_id="second"),
            ]
        )

        mock_directory.get_membership_role.assert_awaited_once_with(
            username="first", org="acme"
        )
        assert mock_directory.set_membership_role.await_count == 1


class TestDirectoryFailures:
    """Tests for directory errors being reported as INTERNAL outcomes."""

    @pytest.mark.asyncio
    async def test_write_failure_returns_internal(
        self, reconciler: MembershipReconciler, mock_directory, mock_probe
    ):
        """A failed write is reported with the stringified error."""
        error = DirectoryRequestFailed(status_code=403, message="Forbidden")
        mock_directory.set_membership_role.side_effect = error

        outcome = await reconciler.apply_update([_event("access/grant")])

        assert outcome.code == StatusCode.INTERNAL
        assert outcome.error_data == str(error)
        mock_probe.membership_update_failed.assert_called_once_with(
            subject_id="octocat", organization="acme", error=str(error)
        )
        mock_probe.membership_updated.assert_not_called()

    @pytest.mark.asyncio
    async def test_read_failure_returns_internal(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """A failed membership read is reported without attempting a write."""
        error = DirectoryRequestFailed(status_code=404, message="Not Found")
        mock_directory.get_membership_role.side_effect = error

        outcome = await reconciler.apply_update([_event("access/grant")])

        assert outcome.code == StatusCode.INTERNAL
        assert outcome.error_data == str(error)
        mock_directory.set_membership_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_never_escapes(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """Any exception from the directory becomes an INTERNAL outcome."""
        mock_directory.set_membership_role.side_effect = RuntimeError("kaput")

        outcome = await reconciler.apply_update([_event("access/grant")])

        assert outcome.code == StatusCode.INTERNAL
        assert outcome.error_data == "kaput"

    @pytest.mark.asyncio
    async def test_unreachable_directory_returns_internal(
        self, reconciler: MembershipReconciler, mock_directory
    ):
        """Transport failures are reported the same way."""
        mock_directory.get_membership_role.side_effect = DirectoryUnavailable(
            "GitHub request failed: timed out"
        )

        outcome = await reconciler.apply_update([_event("access/revoke")])

        assert outcome.code == StatusCode.INTERNAL
        assert outcome.error_data == "GitHub request failed: timed out"
