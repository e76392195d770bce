"""Protocolo de transporte para a API Crypto Pay.

Evita dependência direta do app na implementação HTTP (httpx).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.constants.crypto_pay import ApiMethod


class TransportProtocol(Protocol):
    """Contrato mínimo: envia um método com parâmetros e devolve o `result`.

    Implementações não guardam estado por request, então uma instância
    pode ser compartilhada entre tasks concorrentes.
    """

    async def call(
        self,
        method: ApiMethod,
        params: dict[str, Any] | None = None,
    ) -> Any: ...
