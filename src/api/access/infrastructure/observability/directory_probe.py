"""Domain probe for GitHub directory observability.

Captures calls to the GitHub REST API without exposing logging details
to the directory implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GithubDirectoryProbe(Protocol):
    """Domain probe for GitHub directory operations."""

    def installation_token_issued(
        self, installation_id: int, expires_at: str
    ) -> None:
        """Record that an installation access token was obtained."""
        ...

    def directory_request_completed(
        self, method: str, path: str, status_code: int
    ) -> None:
        """Record that a directory call succeeded."""
        ...

    def directory_request_failed(
        self, method: str, path: str, status_code: int, message: str
    ) -> None:
        """Record that GitHub answered with an error status."""
        ...

    def directory_unreachable(self, method: str, path: str, error: str) -> None:
        """Record that GitHub could not be reached."""
        ...

    def with_context(self, context: ObservationContext) -> GithubDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGithubDirectoryProbe:
    """Default implementation of GithubDirectoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultGithubDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGithubDirectoryProbe(logger=self._logger, context=context)

    def installation_token_issued(
        self, installation_id: int, expires_at: str
    ) -> None:
        """Record that an installation access token was obtained."""
        self._logger.debug(
            "installation_token_issued",
            installation_id=installation_id,
            expires_at=expires_at,
            **self._get_context_kwargs(),
        )

    def directory_request_completed(
        self, method: str, path: str, status_code: int
    ) -> None:
        """Record that a directory call succeeded."""
        self._logger.debug(
            "directory_request_completed",
            method=method,
            path=path,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def directory_request_failed(
        self, method: str, path: str, status_code: int, message: str
    ) -> None:
        """Record that GitHub answered with an error status."""
        self._logger.warning(
            "directory_request_failed",
            method=method,
            path=path,
            status_code=status_code,
            message=message,
            **self._get_context_kwargs(),
        )

    def directory_unreachable(self, method: str, path: str, error: str) -> None:
        """Record that GitHub could not be reached."""
        self._logger.error(
            "directory_unreachable",
            method=method,
            path=path,
            error=error,
            **self._get_context_kwargs(),
        )
