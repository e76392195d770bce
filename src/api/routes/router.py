"""Agregador de rotas.

Uso:
    from api.routes import create_api_router
    from app.bootstrap import get_webhook_pipeline

    app = FastAPI()
    app.include_router(create_api_router(get_webhook_pipeline))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

from api.routes.crypto_pay.webhook import create_webhook_router

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.use_cases.crypto_pay import WebhookPipeline

WEBHOOK_PREFIX = "/webhook/crypto-pay"


def create_api_router(pipeline_getter: Callable[[], WebhookPipeline]) -> APIRouter:
    """Cria router principal com o webhook do Crypto Pay.

    Args:
        pipeline_getter: Função que devolve o pipeline configurado.

    Returns:
        APIRouter com o webhook em WEBHOOK_PREFIX.
    """
    api_router = APIRouter()
    api_router.include_router(
        create_webhook_router(pipeline_getter),
        prefix=WEBHOOK_PREFIX,
        tags=["crypto_pay"],
    )
    return api_router
