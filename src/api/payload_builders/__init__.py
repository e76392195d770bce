"""Payload builders: construção de requests para APIs externas.

Estrutura:
- crypto_pay/: builders em estágios por operação da API Crypto Pay

Cada operação tem seu próprio builder, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
