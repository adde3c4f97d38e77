"""Webhook signature verification.

Deliveries are signed with HMAC-SHA256 over ``v0:{timestamp}:{body}`` using a
shared secret. The hex digest travels in ``X-Indent-Signature`` and the
timestamp in ``X-Indent-Timestamp``.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from shared_kernel.webhook.observability import WebhookVerifierProbe

SIGNATURE_HEADER = "x-indent-signature"
TIMESTAMP_HEADER = "x-indent-timestamp"
SIGNATURE_VERSION = "v0"

HeaderValue = str | Sequence[str]


class InvalidSignatureError(Exception):
    """Raised when a webhook delivery fails signature verification."""

    pass


def sign_payload(secret: str, timestamp: str, body: str) -> str:
    """Compute the hex signature for a delivery."""
    message = f"{SIGNATURE_VERSION}:{timestamp}:{body}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def _header(headers: Mapping[str, HeaderValue], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() != name:
            continue
        if isinstance(value, str):
            return value
        return value[0] if value else None
    return None


class WebhookVerifier:
    """Verifies signed webhook deliveries against a shared secret."""

    def __init__(
        self,
        secret: str,
        probe: WebhookVerifierProbe,
        tolerance_seconds: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the verifier.

        Args:
            secret: Shared signing secret.
            probe: Observability probe for logging events.
            tolerance_seconds: Maximum delivery age; None disables the check.
            clock: Source of the current UNIX time.
        """
        self._secret = secret
        self._probe = probe
        self._tolerance_seconds = tolerance_seconds
        self._clock = clock

    def verify(self, headers: Mapping[str, HeaderValue], body: str) -> None:
        """Verify a delivery's signature.

        Args:
            headers: Request headers; repeated headers may be given as lists,
                in which case the first value is used.
            body: Raw request body, exactly as received.

        Raises:
            InvalidSignatureError: If the secret is unset, a header is
                missing, the timestamp is stale or the signature differs.
        """
        if not self._secret:
            self._reject("Webhook secret is not configured")

        timestamp = _header(headers, TIMESTAMP_HEADER)
        if not timestamp:
            self._reject(f"Missing header {TIMESTAMP_HEADER}")

        signature = _header(headers, SIGNATURE_HEADER)
        if not signature:
            self._reject(f"Missing header {SIGNATURE_HEADER}")

        if self._tolerance_seconds is not None:
            self._check_freshness(timestamp)

        expected = sign_payload(self._secret, timestamp, body)
        if not hmac.compare_digest(expected.encode(), signature.encode()):
            self._reject("Signature mismatch")

        self._probe.signature_verified(timestamp=timestamp)

    def _check_freshness(self, timestamp: str) -> None:
        sent_at = _parse_timestamp(timestamp)
        if sent_at is None:
            self._reject(f"Malformed timestamp: {timestamp}")

        age = abs(self._clock() - sent_at)
        if self._tolerance_seconds is not None and age > self._tolerance_seconds:
            self._reject(f"Timestamp outside tolerance ({int(age)}s)")

    def _reject(self, reason: str) -> NoReturn:
        self._probe.signature_rejected(reason=reason)
        raise InvalidSignatureError(reason)


def _parse_timestamp(timestamp: str) -> float | None:
    """Parse a UNIX (seconds or milliseconds) or ISO-8601 timestamp."""
    try:
        value = float(timestamp)
    except ValueError:
        try:
            return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).timestamp()
        except ValueError:
            return None
    return value / 1000 if value > 1e12 else value
