"""Protocolo de handlers de updates do webhook."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from api.connectors.crypto_pay.models import Update


@runtime_checkable
class UpdateHandlerProtocol(Protocol):
    """Recebe um Update e executa um efeito colateral.

    Falhas são sinalizadas levantando exceção; o pipeline aplica a
    política de falha configurada.
    """

    async def handle(self, update: Update) -> None: ...
