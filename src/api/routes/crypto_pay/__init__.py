"""Rotas HTTP do Crypto Pay."""

from api.routes.crypto_pay.webhook import create_webhook_router

__all__ = ["create_webhook_router"]
