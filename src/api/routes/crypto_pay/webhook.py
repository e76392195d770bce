"""Endpoint de webhook do Crypto Pay.

Endpoint:
- POST /: recebe updates do CryptoBot (`invoice_paid`)

Fluxo:
1. Lê o corpo bruto e o header `crypto-pay-api-signature`
2. Delega ao WebhookPipeline (assinatura, parse, dedupe, handlers)
3. Responde `{"ok": bool}` com o status sugerido pelo pipeline

Status:
- 200: dispatch concluído ou update duplicado
- 400: payload inválido ou update expirado
- 401: assinatura inválida
- 500: handler falhou (política stop_on_first_error)
- 503: store de dedupe indisponível (CryptoBot reentrega)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.crypto_pay.signature import SIGNATURE_HEADER
from app.observability import correlation_scope
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.use_cases.crypto_pay import WebhookPipeline

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "x-correlation-id"


def create_webhook_router(pipeline_getter: Callable[[], WebhookPipeline]) -> APIRouter:
    """Cria router do webhook.

    Args:
        pipeline_getter: Função que devolve o pipeline já com handlers
            registrados (ex.: app.bootstrap.get_webhook_pipeline)

    Returns:
        APIRouter com `POST /`; quem integra define o prefixo.
    """
    router = APIRouter()

    @router.post("/", response_model=None)
    async def receive_webhook(request: Request) -> JSONResponse:
        """Recebimento de updates do CryptoBot."""
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            raw_body = await request.body()
            pipeline = pipeline_getter()
            try:
                result = await pipeline.process(
                    request.headers.get(SIGNATURE_HEADER),
                    raw_body,
                )
            except InfrastructureError:
                logger.exception(
                    "webhook_infrastructure_error",
                    extra={"correlation_id": correlation_id},
                )
                return JSONResponse(
                    content={"ok": False},
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                )

            logger.info(
                "webhook_received",
                extra={
                    "correlation_id": correlation_id,
                    "outcome": result.outcome.value,
                    "update_id": result.update_id,
                    "payload_size": len(raw_body),
                },
            )
            return JSONResponse(content={"ok": result.ok}, status_code=result.status_code)

    return router
