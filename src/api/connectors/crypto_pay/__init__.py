"""Connector Crypto Pay: transporte HTTP, modelos, assinatura e webhook.

A fachada fica em `api.connectors.crypto_pay.client` (não reexportada aqui,
pois depende dos builders, que dependem destes modelos).
"""

from api.connectors.crypto_pay.errors import ApiError, NoResultError, TransportError
from api.connectors.crypto_pay.models import (
    AppInfo,
    AppStats,
    Balance,
    Check,
    Currency,
    ExchangeRate,
    Invoice,
    Transfer,
    Update,
)
from api.connectors.crypto_pay.signature import SIGNATURE_HEADER, verify_signature

__all__ = [
    "SIGNATURE_HEADER",
    "ApiError",
    "AppInfo",
    "AppStats",
    "Balance",
    "Check",
    "Currency",
    "ExchangeRate",
    "Invoice",
    "NoResultError",
    "Transfer",
    "TransportError",
    "Update",
    "verify_signature",
]
