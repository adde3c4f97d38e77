"""FastAPI dependency providers for the access bounded context.

Every request gets its own GitHub client, token provider and services; no
state is shared between requests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated
from uuid import uuid4

import httpx
from fastapi import Depends, Request
from starlette.datastructures import Headers

from access.application.observability import (
    DefaultMembershipReconcilerProbe,
    DefaultResourceEnumeratorProbe,
    MembershipReconcilerProbe,
    ResourceEnumeratorProbe,
)
from access.application.services import MembershipReconciler, ResourceEnumerator
from access.infrastructure.github_app_auth import GithubAppTokenProvider
from access.infrastructure.github_directory import GithubOrganizationDirectory
from access.infrastructure.observability import (
    DefaultGithubDirectoryProbe,
    GithubDirectoryProbe,
)
from access.ports.directory import IOrganizationDirectory
from infrastructure.settings import (
    GithubAppSettings,
    WebhookSettings,
    get_github_app_settings,
    get_webhook_settings,
)
from shared_kernel.observability_context import ObservationContext
from shared_kernel.webhook import DefaultWebhookVerifierProbe, WebhookVerifier

REQUEST_ID_HEADER = "x-request-id"


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context for the current delivery.

    Uses the caller's request id header when present.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    return ObservationContext(request_id=request_id)


def get_webhook_verifier(
    settings: Annotated[WebhookSettings, Depends(get_webhook_settings)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> WebhookVerifier:
    """Get WebhookVerifier configured from webhook settings."""
    return WebhookVerifier(
        secret=settings.secret.get_secret_value(),
        probe=DefaultWebhookVerifierProbe().with_context(context),
        tolerance_seconds=settings.timestamp_tolerance_seconds,
    )


def get_github_directory_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GithubDirectoryProbe:
    """Get GithubDirectoryProbe bound to the request context."""
    return DefaultGithubDirectoryProbe().with_context(context)


async def get_organization_directory(
    settings: Annotated[GithubAppSettings, Depends(get_github_app_settings)],
    probe: Annotated[GithubDirectoryProbe, Depends(get_github_directory_probe)],
) -> AsyncIterator[IOrganizationDirectory]:
    """Yield a GitHub-backed directory for the duration of one request.

    The underlying HTTP client is closed once the response has been sent.
    """
    async with httpx.AsyncClient(
        base_url=settings.api_url,
        timeout=settings.timeout_seconds,
    ) as client:
        token_provider = GithubAppTokenProvider(
            client=client,
            app_id=settings.app_id,
            private_key=settings.app_private_key.get_secret_value(),
            installation_id=settings.app_install_id,
            probe=probe,
        )
        yield GithubOrganizationDirectory(
            client=client, token_provider=token_provider, probe=probe
        )


def get_resource_enumerator_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ResourceEnumeratorProbe:
    """Get ResourceEnumeratorProbe bound to the request context."""
    return DefaultResourceEnumeratorProbe().with_context(
        context.with_request_kind("pull_update")
    )


def get_membership_reconciler_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MembershipReconcilerProbe:
    """Get MembershipReconcilerProbe bound to the request context."""
    return DefaultMembershipReconcilerProbe().with_context(
        context.with_request_kind("apply_update")
    )


def get_resource_enumerator(
    directory: Annotated[IOrganizationDirectory, Depends(get_organization_directory)],
    settings: Annotated[GithubAppSettings, Depends(get_github_app_settings)],
    probe: Annotated[ResourceEnumeratorProbe, Depends(get_resource_enumerator_probe)],
) -> ResourceEnumerator:
    """Get ResourceEnumerator scoped to the configured organization."""
    return ResourceEnumerator(
        directory=directory,
        organization=settings.org,
        probe=probe,
    )


def get_membership_reconciler(
    directory: Annotated[IOrganizationDirectory, Depends(get_organization_directory)],
    probe: Annotated[
        MembershipReconcilerProbe, Depends(get_membership_reconciler_probe)
    ],
) -> MembershipReconciler:
    """Get MembershipReconciler for the current request."""
    return MembershipReconciler(directory=directory, probe=probe)


def normalize_headers(headers: Headers) -> dict[str, str | list[str]]:
    """Collapse request headers into a dict, keeping repeated values as lists."""
    normalized: dict[str, str | list[str]] = {}
    for key, value in headers.items():
        existing = normalized.get(key)
        if existing is None:
            normalized[key] = value
        elif isinstance(existing, str):
            normalized[key] = [existing, value]
        else:
            existing.append(value)
    return normalized


async def verify_delivery(
    request: Request,
    verifier: Annotated[WebhookVerifier, Depends(get_webhook_verifier)],
) -> None:
    """Reject unsigned or mis-signed deliveries.

    Used as a route-level dependency so it is resolved before the services,
    which open a GitHub client.

    Raises:
        InvalidSignatureError: If the delivery fails verification
    """
    body = (await request.body()).decode("utf-8", errors="replace")
    verifier.verify(normalize_headers(request.headers), body)
