"""Factories de stores, cliente e pipeline baseadas nas settings.

Referência de env:
- DEDUPE_BACKEND / DEDUPE_TTL_SECONDS / DEDUPE_MAX_ENTRIES
- CRYPTO_PAY_* (token, rede, política de falha, expiração)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.crypto_pay.client import CryptoPayClient
from app.bootstrap.clients import create_async_redis_client
from app.infra.stores import MemoryDedupeStore, RedisDedupeStore
from app.use_cases.crypto_pay import HandlerFailurePolicy, WebhookPipeline
from config.settings import (
    get_base_settings,
    get_crypto_pay_settings,
    get_dedupe_settings,
)

if TYPE_CHECKING:
    from app.protocols.dedupe import AsyncDedupeProtocol
    from config.settings import CryptoPaySettings, DedupeSettings

logger = logging.getLogger(__name__)


def create_dedupe_store(settings: DedupeSettings | None = None) -> AsyncDedupeProtocol:
    """Cria store de dedupe baseado na configuração.

    Backends:
    - "memory": MemoryDedupeStore (processo único, dev/test)
    - "redis": RedisDedupeStore (várias instâncias atrás do webhook)
    """
    dedupe = settings or get_dedupe_settings()

    if dedupe.backend == "redis":
        store: AsyncDedupeProtocol = RedisDedupeStore(create_async_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    if dedupe.backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_dedupe_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryDedupeStore(max_entries=dedupe.max_entries)
        logger.info("dedupe_store_created", extra={"backend": "memory"})
        return store

    msg = f"DEDUPE_BACKEND inválido: {dedupe.backend}"
    raise ValueError(msg)


def create_crypto_pay_client(settings: CryptoPaySettings | None = None) -> CryptoPayClient:
    """Cria a fachada da API com transporte httpx."""
    client = CryptoPayClient.from_settings(settings or get_crypto_pay_settings())
    logger.info("crypto_pay_client_created")
    return client


def create_webhook_pipeline(
    dedupe: AsyncDedupeProtocol,
    settings: CryptoPaySettings | None = None,
    dedupe_settings: DedupeSettings | None = None,
) -> WebhookPipeline:
    """Cria o pipeline do webhook (sem handlers registrados).

    Raises:
        ValueError: Sem segredo de assinatura configurado
    """
    crypto_pay = settings or get_crypto_pay_settings()
    dedupe_config = dedupe_settings or get_dedupe_settings()
    pipeline = WebhookPipeline(
        secret=crypto_pay.signing_secret,
        dedupe=dedupe,
        policy=HandlerFailurePolicy(crypto_pay.handler_failure_policy),
        dedupe_ttl_seconds=dedupe_config.ttl_seconds,
        expiration_seconds=crypto_pay.webhook_expiration_seconds or None,
    )
    logger.info(
        "webhook_pipeline_created",
        extra={
            "policy": pipeline.policy.value,
            "expiration_seconds": crypto_pay.webhook_expiration_seconds,
        },
    )
    return pipeline
