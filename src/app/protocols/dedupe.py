"""Protocolos de domínio para stores de dedupe.

Interfaces leves (ABCs) dependidas por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato assíncrono para stores de deduplicação de updates.

    Método canônico:
    - seen(key: str, ttl: int) -> bool
      Check-and-set atômico: retorna True se a chave já foi vista
      (duplicado). Se não vista, marca-a com TTL e retorna False.

    O TTL deve cobrir pelo menos a janela de reentrega do serviço remoto.
    """

    @abstractmethod
    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca a chave de forma atômica.

        Dois chamadores concorrentes com a mesma chave nunca recebem
        ambos False.

        Args:
            key: Chave única (ex.: update_id)
            ttl: TTL em segundos

        Returns:
            True se já foi vista (duplicado); False se foi marcada agora (novo).
        """

    @abstractmethod
    async def is_duplicate(self, key: str) -> bool:
        """Consulta se a chave já foi vista, sem marcar.

        Não usar em conjunto com `record` para deduplicar: a sequência
        consulta-depois-grava não é atômica.
        """

    @abstractmethod
    async def record(self, key: str, ttl: int) -> None:
        """Marca a chave incondicionalmente com TTL."""
