"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import correlation_scope, get_correlation_id
    from app.observability import record_latency, record_webhook_outcome
"""

from app.observability.correlation import (
    correlation_scope,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_api_call,
    record_latency,
    record_webhook_outcome,
)

__all__ = [
    "correlation_scope",
    "get_correlation_id",
    "record_api_call",
    "record_latency",
    "record_webhook_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
