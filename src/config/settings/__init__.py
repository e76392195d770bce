"""Agregador de settings do crypto_pay.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Crypto Pay settings
from config.settings.crypto_pay import (
    MAINNET_API_BASE_URL,
    TESTNET_API_BASE_URL,
    CryptoPaySettings,
    get_crypto_pay_settings,
)

__all__ = [
    # Constants
    "MAINNET_API_BASE_URL",
    "TESTNET_API_BASE_URL",
    # Base
    "BaseSettings",
    # Crypto Pay
    "CryptoPaySettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    "get_base_settings",
    "get_crypto_pay_settings",
    "get_dedupe_settings",
]
