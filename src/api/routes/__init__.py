"""Rotas HTTP da API.

Responsabilidades:
- Receber o webhook do CryptoBot
- Delegar ao pipeline e traduzir o resultado em status HTTP

Estrutura:
- crypto_pay/: endpoint do webhook
- router.py: agrega os routers sob os prefixos da aplicação
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
