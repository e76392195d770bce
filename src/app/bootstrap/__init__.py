"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_webhook_pipeline

    initialize_app()
    pipeline = get_webhook_pipeline()
    pipeline.register(mark_order_paid)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_crypto_pay_settings,
    get_dedupe_settings,
)

if TYPE_CHECKING:
    from api.connectors.crypto_pay.client import CryptoPayClient
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.use_cases.crypto_pay import WebhookPipeline

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    default_level = "DEBUG" if base.debug else DEFAULT_LOG_LEVEL
    configure_logging(
        level=os.getenv("LOG_LEVEL", default_level).upper(),
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa logging em DEBUG para testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"crypto_pay: {error}" for error in get_crypto_pay_settings().validate())
    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate(base))

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


@lru_cache(maxsize=1)
def get_dedupe_store() -> AsyncDedupeProtocol:
    """Obtém store de dedupe (singleton)."""
    from app.bootstrap.dependencies import create_dedupe_store

    return create_dedupe_store()


@lru_cache(maxsize=1)
def get_crypto_pay_client() -> CryptoPayClient:
    """Obtém a fachada da API Crypto Pay (singleton)."""
    from app.bootstrap.dependencies import create_crypto_pay_client

    return create_crypto_pay_client()


@lru_cache(maxsize=1)
def get_webhook_pipeline() -> WebhookPipeline:
    """Obtém o pipeline do webhook (singleton).

    Handlers devem ser registrados antes da primeira entrega.
    """
    from app.bootstrap.dependencies import create_webhook_pipeline

    return create_webhook_pipeline(get_dedupe_store())
