"""Registro de métricas via structured logging.

As métricas são emitidas como logs estruturados e agregadas depois pelo
sistema de logs (CloudWatch Insights, BigQuery, Loki etc).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Webhook: contador de resultados do pipeline (dispatch, duplicado, rejeição)
- API: contador de chamadas à API Crypto Pay por método e resultado

Uso:
    from app.observability.metrics import record_latency

    start = time.perf_counter()
    # ... operação ...
    record_latency("crypto_pay_http", "createInvoice", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def _resolve_correlation_id(correlation_id: str | None) -> str | None:
    return correlation_id or get_correlation_id() or None


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "crypto_pay_http", "webhook_pipeline")
        operation: Nome da operação (ex: "createInvoice", "process")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (padrão: o do contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": _resolve_correlation_id(correlation_id),
        },
    )


def record_webhook_outcome(
    outcome: str,
    update_id: int | None,
    status_code: int,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado de uma entrega de webhook.

    Args:
        outcome: Resultado do pipeline (ex: "dispatched", "duplicate")
        update_id: ID do update (None quando rejeitado antes do parse)
        status_code: Status HTTP devolvido ao CryptoBot
        correlation_id: ID de correlação (padrão: o do contexto atual)
    """
    logger.info(
        "metric_webhook_outcome",
        extra={
            "metric_type": "webhook_outcome",
            "component": "webhook_pipeline",
            "outcome": outcome,
            "update_id": update_id,
            "status_code": status_code,
            "correlation_id": _resolve_correlation_id(correlation_id),
        },
    )


def record_api_call(
    method: str,
    success: bool,
    error_name: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra uma chamada à API Crypto Pay.

    Args:
        method: Método da API (ex: "createInvoice")
        success: True se a API respondeu ok
        error_name: Nome do erro da API ou do transporte
        correlation_id: ID de correlação (padrão: o do contexto atual)
    """
    logger.info(
        "metric_api_call",
        extra={
            "metric_type": "api_call",
            "component": "crypto_pay_http",
            "operation": method,
            "success": success,
            "error_name": error_name,
            "correlation_id": _resolve_correlation_id(correlation_id),
        },
    )
