"""HTTP route for the access governance webhook.

The delivery signature is checked by a route dependency that runs before
any service is built; the route then dispatches on the envelope: ``kinds``
goes to the resource enumerator, ``events`` to the membership reconciler.
"""

from __future__ import annotations

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from access.application.services import MembershipReconciler, ResourceEnumerator
from access.dependencies import (
    get_membership_reconciler,
    get_resource_enumerator,
    verify_delivery,
)
from access.ports.exceptions import DirectoryError
from access.presentation.models import (
    ApplyUpdateResponse,
    PullUpdateResponse,
    WebhookRequest,
)
from shared_kernel.webhook import InvalidSignatureError

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

INVALID_AUTH = "invalid auth"
MALFORMED_REQUEST = "malformed request"
UNKNOWN_REQUEST = "unknown request"
ORGANIZATION_READ_FAILED = "failed to read organization"

router = APIRouter(tags=["webhook"])


def _error(detail: str) -> PlainTextResponse:
    return PlainTextResponse(detail, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def invalid_signature_handler(
    request: Request, exc: InvalidSignatureError
) -> PlainTextResponse:
    """Answer rejected deliveries with the plain-text auth error."""
    return _error(INVALID_AUTH)


@router.post(
    "/",
    summary="Handle webhook delivery",
    description="Enumerate the organization or apply grant/revoke events",
    dependencies=[Depends(verify_delivery)],
    responses={
        200: {"description": "Request handled"},
        500: {"description": "Invalid signature, malformed request or failed update"},
    },
)
async def handle_webhook(
    request: Request,
    enumerator: Annotated[ResourceEnumerator, Depends(get_resource_enumerator)],
    reconciler: Annotated[MembershipReconciler, Depends(get_membership_reconciler)],
) -> Response:
    """Handle a signed pull-update or apply-update delivery.

    Returns:
        200 with the enumeration result, 200/500 with the apply-update status
        depending on its code, or a plain-text 500 for transport failures
    """
    body = await request.body()

    try:
        envelope = WebhookRequest.model_validate(json.loads(body))
    except (ValueError, ValidationError):
        return _error(MALFORMED_REQUEST)

    if envelope.kinds is not None:
        try:
            result = await enumerator.pull_update(envelope.kinds)
        except DirectoryError:
            return _error(ORGANIZATION_READ_FAILED)

        return JSONResponse(
            content=PullUpdateResponse.from_domain(result).model_dump(
                by_alias=True, exclude_none=True
            ),
            media_type=JSON_MEDIA_TYPE,
        )

    if envelope.events is not None:
        outcome = await reconciler.apply_update(
            [event.to_domain() for event in envelope.events]
        )
        return JSONResponse(
            content=ApplyUpdateResponse.from_domain(outcome).model_dump(
                by_alias=True, exclude_none=True
            ),
            status_code=(
                status.HTTP_200_OK
                if outcome.is_success
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            media_type=JSON_MEDIA_TYPE,
        )

    return _error(UNKNOWN_REQUEST)
