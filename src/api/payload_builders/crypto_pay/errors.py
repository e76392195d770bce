"""Erros de uso dos builders (erros de programação, não de dados)."""

from __future__ import annotations

from api.validators.crypto_pay.errors import ValidationError, ValidationErrorKind


class BuilderStateError(RuntimeError):
    """Operação chamada fora do estágio permitido do builder."""


class UnknownFieldError(BuilderStateError):
    """Campo inexistente para a operação."""

    def __init__(self, operation: str, field: str) -> None:
        super().__init__(f"{operation} não possui o campo {field!r}")
        self.field = field


class FieldAlreadySetError(BuilderStateError):
    """Campo (ou slot obrigatório) já preenchido; builders não retrocedem."""

    def __init__(self, field: str) -> None:
        super().__init__(f"campo {field!r} já foi definido")
        self.field = field


class BuilderConsumedError(BuilderStateError):
    """Handle de builder já consumido por with_field/finalize."""


class BuilderNotReadyError(BuilderStateError, ValidationError):
    """finalize() chamado antes de todos os campos obrigatórios."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        ValidationError.__init__(
            self,
            ValidationErrorKind.MISSING,
            f"campos obrigatórios ausentes: {', '.join(self.missing)}",
            self.missing[0] if self.missing else None,
        )
