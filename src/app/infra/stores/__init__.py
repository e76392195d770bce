"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: Store de dedupe em memória (processo único, dev/test)
    - redis_dedupe_store: Store de dedupe usando Redis (multi-processo)
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryDedupeStore
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    # Memory
    "MemoryDedupeStore",
    # Redis
    "RedisDedupeStore",
]
