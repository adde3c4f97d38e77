"""GitHub implementation of the organization directory port.

Talks to the GitHub REST API as a GitHub App installation. Every call is a
single round trip; errors are translated into directory exceptions.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from access.domain.value_objects import MembershipRole
from access.infrastructure.github_app_auth import (
    GithubAppTokenProvider,
    github_error_message,
    github_headers,
)
from access.infrastructure.observability import (
    DefaultGithubDirectoryProbe,
    GithubDirectoryProbe,
)
from access.ports.directory import IOrganizationDirectory, OrganizationSnapshot
from access.ports.exceptions import DirectoryRequestFailed, DirectoryUnavailable


class GithubOrganizationDirectory(IOrganizationDirectory):
    """Organization directory backed by the GitHub REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_provider: GithubAppTokenProvider,
        probe: GithubDirectoryProbe | None = None,
    ):
        """Initialize the directory.

        Args:
            client: HTTP client with ``base_url`` set to the GitHub API
            token_provider: Source of installation access tokens
            probe: Optional domain probe for observability
        """
        self._client = client
        self._token_provider = token_provider
        self._probe = probe or DefaultGithubDirectoryProbe()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        token = await self._token_provider.get_token()

        try:
            response = await self._client.request(
                method, path, headers=github_headers(token), json=json
            )
        except httpx.HTTPError as e:
            self._probe.directory_unreachable(method=method, path=path, error=repr(e))
            raise DirectoryUnavailable(f"GitHub request failed: {e}") from e

        if not response.is_success:
            message = github_error_message(response)
            self._probe.directory_request_failed(
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise DirectoryRequestFailed(
                status_code=response.status_code, message=message, url=path
            )

        self._probe.directory_request_completed(
            method=method, path=path, status_code=response.status_code
        )
        if not response.content:
            return {}
        return response.json()

    async def get_organization(self, org: str) -> OrganizationSnapshot:
        """Read an organization via ``GET /orgs/{org}``."""
        data = await self._request("GET", f"/orgs/{quote(org, safe='')}")
        return OrganizationSnapshot(
            native_id=data["id"],
            login=data.get("login") or org,
            name=data.get("name"),
            company=data.get("company"),
            description=data.get("description"),
        )

    async def get_membership_role(self, username: str, org: str) -> str:
        """Read a role via ``GET /orgs/{org}/memberships/{username}``."""
        data = await self._request("GET", _membership_path(username, org))
        return data["role"]

    async def set_membership_role(
        self, username: str, org: str, role: MembershipRole
    ) -> None:
        """Write a role via ``PUT /orgs/{org}/memberships/{username}``."""
        await self._request(
            "PUT", _membership_path(username, org), json={"role": str(role)}
        )


def _membership_path(username: str, org: str) -> str:
    return f"/orgs/{quote(org, safe='')}/memberships/{quote(username, safe='')}"
