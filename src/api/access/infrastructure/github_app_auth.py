"""GitHub App authentication.

Signs a short-lived app JWT with the app's private key and exchanges it for
an installation access token scoped to the managed organization.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import httpx
from jose import jwt
from jose.exceptions import JOSEError

from access.infrastructure.observability import (
    DefaultGithubDirectoryProbe,
    GithubDirectoryProbe,
)
from access.ports.exceptions import DirectoryRequestFailed, DirectoryUnavailable

GITHUB_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "github-org-access-webhook"

# GitHub rejects app JWTs valid for more than ten minutes.
_JWT_BACKDATE = timedelta(seconds=60)
_JWT_LIFETIME = timedelta(minutes=9)


def github_headers(token: str | None = None) -> dict[str, str]:
    """Standard GitHub REST headers, with a bearer token when given."""
    headers = {
        "Accept": GITHUB_MEDIA_TYPE,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": USER_AGENT,
    }
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class GithubAppTokenProvider:
    """Issues installation access tokens for a GitHub App.

    A token is requested on first use and reused while it is valid, for the
    lifetime of this provider instance.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        app_id: str,
        private_key: str,
        installation_id: int,
        probe: GithubDirectoryProbe | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self._client = client
        self._app_id = app_id
        self._private_key = private_key
        self._installation_id = installation_id
        self._probe = probe or DefaultGithubDirectoryProbe()
        self._clock = clock

        self._token: str | None = None
        self._expires_at: datetime | None = None

    def create_app_jwt(self) -> str:
        """Sign an RS256 JWT identifying the app itself.

        Raises:
            DirectoryUnavailable: If the private key cannot sign the token
        """
        now = self._clock()
        claims = {
            "iat": int((now - _JWT_BACKDATE).timestamp()),
            "exp": int((now + _JWT_LIFETIME).timestamp()),
            "iss": self._app_id,
        }
        try:
            return jwt.encode(claims, self._private_key, algorithm="RS256")
        except JOSEError as e:
            raise DirectoryUnavailable(f"Could not sign GitHub App JWT: {e}") from e

    def _token_is_valid(self) -> bool:
        if self._token is None or self._expires_at is None:
            return False
        return self._clock() + _JWT_BACKDATE < self._expires_at

    async def get_token(self) -> str:
        """Return an installation token, requesting one when needed.

        Raises:
            DirectoryRequestFailed: If GitHub refuses the exchange
            DirectoryUnavailable: If GitHub cannot be reached
        """
        if self._token_is_valid():
            return self._token  # type: ignore[return-value]

        path = f"/app/installations/{self._installation_id}/access_tokens"
        try:
            response = await self._client.post(
                path, headers=github_headers(self.create_app_jwt())
            )
        except httpx.HTTPError as e:
            self._probe.directory_unreachable(method="POST", path=path, error=repr(e))
            raise DirectoryUnavailable(f"GitHub request failed: {e}") from e

        if response.status_code != httpx.codes.CREATED:
            message = github_error_message(response)
            self._probe.directory_request_failed(
                method="POST",
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise DirectoryRequestFailed(
                status_code=response.status_code, message=message, url=path
            )

        payload = response.json()
        self._token = payload["token"]
        self._expires_at = datetime.fromisoformat(
            payload["expires_at"].replace("Z", "+00:00")
        )
        self._probe.installation_token_issued(
            installation_id=self._installation_id,
            expires_at=self._expires_at.isoformat(),
        )
        return self._token


def github_error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase
