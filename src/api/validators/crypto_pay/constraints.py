"""Restrições de campo único e o ponto de entrada `validate`.

Funções puras, sem IO: ficam no caminho quente de construção de requests.

Uso:
    from api.validators.crypto_pay import Length, validate

    validate("description", text, Length(1024))
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

from api.validators.crypto_pay.errors import ValidationError, ValidationErrorKind

if TYPE_CHECKING:
    from collections.abc import Collection


class Constraint(Protocol):
    """Restrição aplicável a um único campo."""

    def check(self, field: str, value: Any) -> None:
        """Levanta ValidationError se `value` violar a restrição."""


def validate(field: str, value: Any, constraint: Constraint) -> None:
    """Valida um valor de campo contra uma restrição.

    Args:
        field: Nome do campo (usado no erro)
        value: Valor já normalizado
        constraint: Restrição a aplicar

    Raises:
        ValidationError: Se a restrição for violada
    """
    constraint.check(field, value)


@dataclass(frozen=True, slots=True)
class Range:
    """Valor numérico dentro de um intervalo.

    O limite inferior pode ser exclusivo (ex.: amount > 0).
    """

    minimum: int | Decimal | None = None
    maximum: int | Decimal | None = None
    min_exclusive: bool = False

    def check(self, field: str, value: Any) -> None:
        if self.minimum is not None:
            too_low = value <= self.minimum if self.min_exclusive else value < self.minimum
            if too_low:
                op = ">" if self.min_exclusive else ">="
                raise ValidationError(
                    ValidationErrorKind.RANGE,
                    f"deve ser {op} {self.minimum}",
                    field,
                )
        if self.maximum is not None and value > self.maximum:
            raise ValidationError(
                ValidationErrorKind.RANGE,
                f"deve ser <= {self.maximum}",
                field,
            )


def decimal_places(value: Decimal) -> int:
    """Casas decimais significativas (zeros à direita não contam).

    Contagem feita sobre os dígitos, sem a precisão do contexto decimal.
    """
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or not any(digits):
        return 0
    end = len(digits)
    while exponent < 0 and digits[end - 1] == 0:
        end -= 1
        exponent += 1
    return max(-exponent, 0)


@dataclass(frozen=True, slots=True)
class Precision:
    """Decimal com no máximo `decimals` casas."""

    decimals: int
    currency: str = ""

    def check(self, field: str, value: Any) -> None:
        if decimal_places(Decimal(value)) > self.decimals:
            suffix = f" para {self.currency}" if self.currency else ""
            raise ValidationError(
                ValidationErrorKind.CURRENCY,
                f"precisão máxima é {self.decimals} casas decimais{suffix}",
                field,
            )


@dataclass(frozen=True, slots=True)
class Length:
    """String não vazia com limite de caracteres e, opcionalmente, de bytes UTF-8."""

    max_chars: int
    max_bytes: int | None = None
    allow_empty: bool = False

    def check(self, field: str, value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(ValidationErrorKind.FORMAT, "deve ser string", field)
        if not value.strip() and not self.allow_empty:
            raise ValidationError(ValidationErrorKind.MISSING, "não pode ser vazio", field)
        if len(value) > self.max_chars:
            raise ValidationError(
                ValidationErrorKind.RANGE,
                f"excede {self.max_chars} caracteres",
                field,
            )
        if self.max_bytes is not None and len(value.encode("utf-8")) > self.max_bytes:
            raise ValidationError(
                ValidationErrorKind.RANGE,
                f"excede {self.max_bytes} bytes UTF-8",
                field,
            )


@dataclass(frozen=True, slots=True)
class OneOf:
    """Pertinência a um conjunto declarado de valores."""

    values: Collection[str]
    kind: ValidationErrorKind = ValidationErrorKind.INVALID

    def check(self, field: str, value: Any) -> None:
        if value not in self.values:
            raise ValidationError(self.kind, f"valor não suportado: {value!r}", field)


@dataclass(frozen=True, slots=True)
class UrlScheme:
    """URL iniciando por um dos esquemas permitidos."""

    schemes: tuple[str, ...] = ("http://", "https://")

    def check(self, field: str, value: Any) -> None:
        if not isinstance(value, str) or not value.startswith(self.schemes):
            raise ValidationError(
                ValidationErrorKind.FORMAT,
                f"deve iniciar com {' ou '.join(self.schemes)}",
                field,
            )
