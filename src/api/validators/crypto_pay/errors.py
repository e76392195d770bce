"""Erros de validação de requests Crypto Pay."""

from __future__ import annotations

from enum import StrEnum


class ValidationErrorKind(StrEnum):
    """Categoria da violação encontrada."""

    FORMAT = "format"
    RANGE = "range"
    CURRENCY = "currency"
    MISSING = "missing"
    INVALID = "invalid"


class ValidationError(ValueError):
    """Violação de restrição em um campo de request.

    Erro do chamador: corrigível e nunca retentado automaticamente.

    Attributes:
        kind: Categoria da violação
        message: Descrição curta (sem valores sensíveis)
        field: Nome do campo que falhou
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        field: str | None = None,
    ) -> None:
        super().__init__(f"{field}: {message}" if field else message)
        self.kind = kind
        self.message = message
        self.field = field


class AggregateValidationError(ValidationError):
    """Conjunto de violações encontradas na finalização de um builder."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        fields = ", ".join(err.field or "?" for err in self.errors)
        super().__init__(
            ValidationErrorKind.INVALID,
            f"{len(self.errors)} erro(s) de validação: {fields}",
        )

    @property
    def fields(self) -> list[str | None]:
        """Campos com violação, na ordem em que foram encontrados."""
        return [err.field for err in self.errors]
