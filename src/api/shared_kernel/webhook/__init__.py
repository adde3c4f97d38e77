"""Signed webhook delivery verification shared across bounded contexts."""

from shared_kernel.webhook.observability import (
    DefaultWebhookVerifierProbe,
    WebhookVerifierProbe,
)
from shared_kernel.webhook.verifier import (
    InvalidSignatureError,
    WebhookVerifier,
    sign_payload,
)

__all__ = [
    "DefaultWebhookVerifierProbe",
    "InvalidSignatureError",
    "WebhookVerifier",
    "WebhookVerifierProbe",
    "sign_payload",
]
