"""Settings de dedupe de updates do webhook.

A retenção deve cobrir a janela de reentrega do CryptoBot para que
reentregas de um mesmo update não disparem handlers de novo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

DedupeBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe/idempotência.

    Attributes:
        backend: Backend para dedupe (memory|redis)
        ttl_seconds: TTL para entradas de dedupe
        max_entries: Limite de chaves do store em memória
    """

    backend: DedupeBackend = "memory"
    ttl_seconds: int = 86400  # 24h
    max_entries: int = 100_000

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de dedupe.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in {"memory", "redis"}:
            errors.append(f"DEDUPE_BACKEND inválido: {self.backend}")

        if self.backend == "redis" and not base.redis_url:
            errors.append("DEDUPE_BACKEND=redis requer REDIS_URL configurado")

        if self.ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")

        if self.max_entries <= 0:
            errors.append("DEDUPE_MAX_ENTRIES deve ser > 0")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    backend_str = os.getenv("DEDUPE_BACKEND", "memory").lower()
    backend: DedupeBackend = "redis" if backend_str == "redis" else "memory"
    return DedupeSettings(
        backend=backend,
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "86400")),
        max_entries=int(os.getenv("DEDUPE_MAX_ENTRIES", "100000")),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
