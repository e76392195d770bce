"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging

    # Na inicialização (app/bootstrap/)
    configure_logging(level="INFO", service_name="crypto_pay")

    # Em qualquer módulo
    logger = logging.getLogger(__name__)
    logger.info("crypto_pay_request_ok", extra={"method": "getMe"})
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "crypto_pay"

# Loggers de bibliotecas que logam URL/headers em DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização. Substitui os handlers do
    root logger para evitar duplicação.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Nome do serviço nos logs
        correlation_id_getter: Função que retorna o correlation_id atual
        stream: Destino do handler (padrão: stderr)

    Returns:
        Handler instalado no root logger.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(stream)
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SecretRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    # httpx loga a URL completa em INFO; mantém só avisos
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
