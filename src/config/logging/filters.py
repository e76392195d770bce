"""Filters de logging: contexto e redação de segredos.

- CorrelationIdFilter injeta correlation_id e service em cada record.
- SecretRedactionFilter mascara token do app e assinaturas passados
  por engano em `extra`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[REDACTED]"

# Atributos de record que nunca podem sair em claro
SENSITIVE_FIELDS = frozenset(
    {
        "api_token",
        "token",
        "secret",
        "webhook_secret",
        "signature",
        "crypto_pay_api_token",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id já veio via `extra`, o valor é preservado.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    """Substitui valores de campos sensíveis por REDACTED."""

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields:
            if getattr(record, name, None):
                setattr(record, name, REDACTED)
        return True
