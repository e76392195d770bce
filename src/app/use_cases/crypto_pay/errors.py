"""Erros do pipeline de webhook."""

from __future__ import annotations

from dataclasses import dataclass


class RegistrationClosedError(RuntimeError):
    """Handler registrado após o início do processamento."""


@dataclass(frozen=True, slots=True)
class HandlerFailure:
    """Falha de um handler específico.

    Attributes:
        index: Posição do handler na ordem de registro
        name: Identificador do handler
        error: Exceção levantada
    """

    index: int
    name: str
    error: BaseException


class HandlerError(Exception):
    """Um ou mais handlers falharam ao processar um update.

    Em `stop_on_first_error` contém apenas a primeira falha; em
    `collect_all`, todas as falhas, junto com os handlers que tiveram
    sucesso.
    """

    def __init__(
        self,
        update_id: int,
        failures: list[HandlerFailure],
        succeeded: list[int] | None = None,
    ) -> None:
        self.update_id = update_id
        self.failures = list(failures)
        self.succeeded = list(succeeded or [])
        summary = ", ".join(
            f"#{f.index} {f.name}: {type(f.error).__name__}" for f in self.failures
        )
        super().__init__(
            f"{len(self.failures)} handler(s) falharam no update {update_id}: {summary}"
        )

    @property
    def indices(self) -> list[int]:
        """Índices dos handlers que falharam."""
        return [failure.index for failure in self.failures]

    @property
    def first(self) -> HandlerFailure:
        """Primeira falha (ordem de registro)."""
        return self.failures[0]
