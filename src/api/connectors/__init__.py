"""Connectors: adapters de borda para APIs externas.

Estrutura:
- crypto_pay/: API Crypto Pay (CryptoBot)
"""

__all__: list[str] = []
