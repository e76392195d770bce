"""correlation_id por entrega de webhook e por chamada à API.

O CryptoBot não envia identificador de requisição; o endpoint aceita
`x-correlation-id` quando há proxy na frente e gera um UUID caso
contrário. O valor vive em um ContextVar, então cada task do event loop
enxerga o seu, e chega aos logs via CorrelationIdFilter e às métricas
via `record_*`.

Uso:
    from app.observability import correlation_scope

    with correlation_scope(request.headers.get("x-correlation-id")):
        result = await pipeline.process(signature, raw_body)
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("crypto_pay_correlation_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual ("" fora de uma entrega)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; sem valor, gera um UUID v4.

    Returns:
        Token para reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o valor anterior a set_correlation_id()."""
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Mantém um correlation_id durante o bloco e restaura o anterior ao sair.

    Args:
        correlation_id: Valor recebido (ex.: header). Se vazio, gera um UUID.

    Yields:
        correlation_id em uso no bloco
    """
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
