"""Constantes e enums de domínio da aplicação."""

from app.constants.crypto_pay import (
    HTTP_VERBS,
    ApiMethod,
    CheckStatus,
    CryptoAsset,
    CurrencyType,
    FiatCurrency,
    InvoiceStatus,
    PayButtonName,
    TransferStatus,
    UpdateType,
)

__all__ = [
    "HTTP_VERBS",
    "ApiMethod",
    "CheckStatus",
    "CryptoAsset",
    "CurrencyType",
    "FiatCurrency",
    "InvoiceStatus",
    "PayButtonName",
    "TransferStatus",
    "UpdateType",
]
