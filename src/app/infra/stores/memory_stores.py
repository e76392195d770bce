"""Stores em memória: para processo único, desenvolvimento e testes.

ATENÇÃO: Sem persistência entre reinícios e sem compartilhamento entre
processos. Em deploys com várias réplicas use RedisDedupeStore.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória com TTL e limite de tamanho.

    A seção crítica é protegida por `threading.Lock` e não contém
    `await`, então `seen` é atômico entre coroutines e entre threads.
    Ao exceder `max_entries`, as chaves mais antigas são descartadas.

    As chaves ficam em ordem de gravação; com TTL constante essa é também
    a ordem de expiração, e a limpeza só percorre a frente do mapa.
    Entradas expiradas ainda não removidas (TTLs mistos) são ignoradas
    na consulta.
    """

    def __init__(
        self,
        max_entries: int = 100_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: OrderedDict[str, float] = OrderedDict()  # key -> expires_at
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for expires_at in self._store.values() if expires_at > now)

    def _cleanup_expired(self, now: float) -> None:
        """Remove expiradas a partir da entrada mais antiga (com lock)."""
        while self._store:
            key, expires_at = next(iter(self._store.items()))
            if expires_at > now:
                break
            del self._store[key]

    def _is_live(self, key: str, now: float) -> bool:
        expires_at = self._store.get(key)
        return expires_at is not None and expires_at > now

    def _evict_overflow(self) -> None:
        """Descarta as chaves mais antigas acima do limite (com lock)."""
        while len(self._store) > self._max_entries:
            self._store.popitem(last=False)

    def _set(self, key: str, ttl: int, now: float) -> None:
        self._store[key] = now + ttl
        self._store.move_to_end(key)
        self._evict_overflow()

    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca chave atomicamente."""
        with self._lock:
            now = self._clock()
            self._cleanup_expired(now)
            if self._is_live(key, now):
                return True  # Duplicado
            self._set(key, ttl, now)
            return False  # Novo

    async def is_duplicate(self, key: str) -> bool:
        """Verifica se chave já foi vista."""
        with self._lock:
            return self._is_live(key, self._clock())

    async def record(self, key: str, ttl: int) -> None:
        """Marca chave incondicionalmente."""
        with self._lock:
            self._set(key, ttl, self._clock())
