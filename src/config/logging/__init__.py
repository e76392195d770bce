"""Configuração de logging estruturado (JSON via python-json-logger).

Uso:
    from config.logging import configure_logging

    configure_logging(level="INFO", service_name="crypto_pay")

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Nunca logar token do app, assinatura ou corpo bruto do webhook.
"""

from config.logging.config import DEFAULT_SERVICE_NAME, configure_logging
from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
]
