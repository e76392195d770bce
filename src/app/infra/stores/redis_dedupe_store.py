"""Redis Dedupe Store: deduplicação de updates compartilhada entre processos.

Usa SET NX (set if not exists) para check-and-set atômico.

Contrato de Keys:
    As keys são IDs opacos (ex.: `update:<update_id>`) e aparecem inteiras
    nos logs DEBUG. Nunca passar dados de pagamento ou de usuário como key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de dedupe
DEDUPE_PREFIX = "dedupe:crypto_pay:"


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando Redis assíncrono.

    Args:
        async_redis_client: Cliente Redis assíncrono
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes] | None) -> None:
        self._async_redis = async_redis_client

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{DEDUPE_PREFIX}{key}"

    def _client(self) -> AsyncRedis[bytes]:
        if self._async_redis is None:
            msg = "Async Redis client não configurado"
            raise RuntimeError(msg)
        return self._async_redis

    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca chave atomicamente.

        Usa SET NX EX:
        - Se chave não existe: cria com TTL e retorna False (novo)
        - Se chave existe: retorna True (duplicado)

        Raises:
            RedisConnectionError: Falha ao acessar o Redis
        """
        client = self._client()
        try:
            was_set = await client.set(self._key(key), "1", nx=True, ex=ttl)
        except Exception as exc:
            raise RedisConnectionError("Falha ao marcar dedupe no Redis") from exc
        is_duplicate = not was_set
        if is_duplicate:
            logger.debug("dedupe_duplicate_detected", extra={"key": key})
        return is_duplicate

    async def is_duplicate(self, key: str) -> bool:
        """Verifica se chave já foi vista (sem marcar)."""
        client = self._client()
        try:
            exists = await client.exists(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc
        return bool(exists)

    async def record(self, key: str, ttl: int) -> None:
        """Marca chave incondicionalmente com TTL."""
        client = self._client()
        try:
            await client.setex(self._key(key), ttl, "1")
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar dedupe no Redis") from exc
        logger.debug("dedupe_recorded", extra={"key": key, "ttl": ttl})
