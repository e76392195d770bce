"""Limites da API Crypto Pay."""

from __future__ import annotations

from decimal import Decimal

from app.constants.crypto_pay import CryptoAsset, FiatCurrency

# Textos de invoice
MAX_DESCRIPTION_LENGTH = 1024
MAX_HIDDEN_MESSAGE_LENGTH = 2048
MAX_PAYLOAD_LENGTH = 4096

# Transferências
MAX_SPEND_ID_LENGTH = 64
MAX_COMMENT_LENGTH = 1024

# Listagens (getInvoices, getChecks, getTransfers)
MIN_COUNT = 1
MAX_COUNT = 1000

# Expiração de invoice em segundos (até 31 dias)
MIN_EXPIRES_IN = 1
MAX_EXPIRES_IN = 2678400

# Valor equivalente em USD aceito para invoices, checks e transferências
MIN_USD_AMOUNT = Decimal("1")
MAX_USD_AMOUNT = Decimal("25000")

PAID_BUTTON_URL_SCHEMES = ("http://", "https://")

# Casas decimais por ativo
ASSET_DECIMALS: dict[CryptoAsset, int] = {
    CryptoAsset.USDT: 6,
    CryptoAsset.USDC: 6,
    CryptoAsset.TON: 9,
    CryptoAsset.BTC: 8,
    CryptoAsset.ETH: 18,
    CryptoAsset.LTC: 8,
    CryptoAsset.BNB: 18,
    CryptoAsset.TRX: 6,
    CryptoAsset.DOGE: 8,
    CryptoAsset.SEND: 9,
    CryptoAsset.JET: 9,
}

FIAT_DECIMALS: dict[FiatCurrency, int] = {fiat: 2 for fiat in FiatCurrency}


def decimals_for(currency: CryptoAsset | FiatCurrency) -> int:
    """Retorna o limite de casas decimais da moeda."""
    if isinstance(currency, CryptoAsset):
        return ASSET_DECIMALS[currency]
    return FIAT_DECIMALS[currency]
