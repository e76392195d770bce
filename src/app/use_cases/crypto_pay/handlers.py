"""Registro ordenado de handlers de updates.

O registro é finito e anterior ao processamento: após `close()` (chamado
pelo pipeline no primeiro dispatch) novas inscrições são rejeitadas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from app.protocols.update_handler import UpdateHandlerProtocol
from app.use_cases.crypto_pay.errors import (
    HandlerError,
    HandlerFailure,
    RegistrationClosedError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from api.connectors.crypto_pay.models import Update

    HandlerCallable = Callable[[Update], Awaitable[object]]

logger = logging.getLogger(__name__)


class HandlerFailurePolicy(StrEnum):
    """Política aplicada quando um handler falha."""

    STOP_ON_FIRST_ERROR = "stop_on_first_error"
    COLLECT_ALL = "collect_all"


class CallableHandler:
    """Adapta uma função assíncrona ao UpdateHandlerProtocol."""

    def __init__(self, func: HandlerCallable) -> None:
        self._func = func

    async def handle(self, update: Update) -> None:
        await self._func(update)


@dataclass(frozen=True, slots=True)
class RegisteredHandler:
    """Handler com identificador para diagnóstico."""

    name: str
    handler: UpdateHandlerProtocol


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Resultado do dispatch de um update."""

    succeeded: tuple[int, ...]
    error: HandlerError | None = None


def _handler_name(handler: object) -> str:
    name = getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None)
    return name or type(handler).__name__


class HandlerRegistry:
    """Lista ordenada de handlers, imutável após o fechamento."""

    def __init__(self) -> None:
        self._handlers: list[RegisteredHandler] = []
        self._closed = False

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def closed(self) -> bool:
        """True após o início do processamento."""
        return self._closed

    @property
    def names(self) -> list[str]:
        """Nomes na ordem de registro."""
        return [entry.name for entry in self._handlers]

    def register(
        self,
        handler: UpdateHandlerProtocol | HandlerCallable,
        name: str | None = None,
    ) -> None:
        """Registra um handler ao final da lista.

        Aceita objetos com `async handle(update)` ou funções assíncronas.

        Raises:
            RegistrationClosedError: Registro já fechado
            TypeError: Handler sem a capacidade esperada
        """
        if self._closed:
            raise RegistrationClosedError(
                "handlers devem ser registrados antes do primeiro update"
            )
        if isinstance(handler, UpdateHandlerProtocol):
            wrapped: UpdateHandlerProtocol = handler
        elif callable(handler):
            wrapped = CallableHandler(handler)
        else:
            raise TypeError(f"handler inválido: {type(handler).__name__}")

        self._handlers.append(RegisteredHandler(name or _handler_name(handler), wrapped))

    def close(self) -> None:
        """Fecha o registro para novas inscrições."""
        self._closed = True

    async def dispatch(self, update: Update, policy: HandlerFailurePolicy) -> DispatchReport:
        """Executa os handlers em ordem de registro com o mesmo Update.

        Args:
            update: Update já verificado e deduplicado
            policy: Política de falha

        Returns:
            DispatchReport com índices bem-sucedidos e HandlerError (se houver)
        """
        self.close()
        succeeded: list[int] = []
        failures: list[HandlerFailure] = []

        for index, entry in enumerate(self._handlers):
            try:
                await entry.handler.handle(update)
            except Exception as exc:
                logger.warning(
                    "webhook_handler_failed",
                    extra={
                        "update_id": update.update_id,
                        "handler_index": index,
                        "handler": entry.name,
                        "error_type": type(exc).__name__,
                    },
                )
                failures.append(HandlerFailure(index, entry.name, exc))
                if policy is HandlerFailurePolicy.STOP_ON_FIRST_ERROR:
                    break
                continue
            succeeded.append(index)

        error = HandlerError(update.update_id, failures, succeeded) if failures else None
        return DispatchReport(tuple(succeeded), error)
