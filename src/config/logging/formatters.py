"""Formatter JSON dos logs do cliente Crypto Pay.

Todo log sai com: asctime, level, logger, message, correlation_id, service.
Campos de `extra` (update_id, method, outcome...) são anexados ao JSON.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,120",
            "level": "INFO",
            "logger": "app.use_cases.crypto_pay.process_update",
            "message": "webhook_dispatched",
            "correlation_id": "abc-123",
            "service": "crypto_pay",
            "update_id": 42
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
