"""Webhook Crypto Pay: assinatura, parsing seguro e expiração."""

from ..signature import SIGNATURE_HEADER, compute_signature, verify_signature
from .receive import (
    ExpiredUpdateError,
    InvalidPayloadError,
    InvalidSignatureError,
    WebhookRequestError,
    ensure_not_expired,
    ensure_valid_signature,
    parse_update,
)

__all__ = [
    "SIGNATURE_HEADER",
    "ExpiredUpdateError",
    "InvalidPayloadError",
    "InvalidSignatureError",
    "WebhookRequestError",
    "compute_signature",
    "ensure_not_expired",
    "ensure_valid_signature",
    "parse_update",
    "verify_signature",
]
