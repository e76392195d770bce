"""Normalização de valores de entrada antes da validação.

Cada normalizer recebe (field, value) e devolve o valor canônico
ou levanta ValidationError(FORMAT) quando o valor não é interpretável.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from api.validators.crypto_pay.constraints import OneOf, validate
from api.validators.crypto_pay.errors import ValidationError, ValidationErrorKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from enum import StrEnum


def to_decimal(field: str, value: Any) -> Decimal:
    """Converte um valor monetário para Decimal de ponto fixo.

    Aceita int, string decimal, Decimal e float (via repr, que é a
    representação mais curta que faz round-trip). Nunca devolve float.

    Raises:
        ValidationError: bool, NaN/Infinity ou literal inválido
    """
    if isinstance(value, bool):
        raise ValidationError(ValidationErrorKind.FORMAT, "bool não é valor monetário", field)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = _parse_decimal(field, repr(value))
    elif isinstance(value, str):
        amount = _parse_decimal(field, value.strip())
    else:
        raise ValidationError(
            ValidationErrorKind.FORMAT,
            f"tipo não suportado: {type(value).__name__}",
            field,
        )

    if not amount.is_finite():
        raise ValidationError(ValidationErrorKind.FORMAT, "valor deve ser finito", field)
    return amount


def _parse_decimal(field: str, literal: str) -> Decimal:
    try:
        return Decimal(literal)
    except InvalidOperation as exc:
        raise ValidationError(
            ValidationErrorKind.FORMAT,
            "literal decimal inválido",
            field,
        ) from exc


def to_int(field: str, value: Any) -> int:
    """Aceita apenas inteiros (bool não conta)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(ValidationErrorKind.FORMAT, "deve ser inteiro", field)
    return value


def to_bool(field: str, value: Any) -> bool:
    """Aceita apenas bool."""
    if not isinstance(value, bool):
        raise ValidationError(ValidationErrorKind.FORMAT, "deve ser bool", field)
    return value


def to_str(field: str, value: Any) -> str:
    """Aceita apenas string."""
    if not isinstance(value, str):
        raise ValidationError(ValidationErrorKind.FORMAT, "deve ser string", field)
    return value


def to_enum(
    enum_cls: type[StrEnum],
    kind: ValidationErrorKind = ValidationErrorKind.INVALID,
) -> Callable[[str, Any], StrEnum]:
    """Cria normalizer que converte string para membro de `enum_cls`.

    Códigos de moeda são comparados sem diferenciar caixa.
    """
    allowed = {member.value for member in enum_cls}

    def normalize(field: str, value: Any) -> StrEnum:
        if isinstance(value, enum_cls):
            return value
        raw = to_str(field, value)
        if kind is ValidationErrorKind.CURRENCY:
            raw = raw.upper()
        validate(field, raw, OneOf(allowed, kind))
        return enum_cls(raw)

    return normalize


def to_enum_list(
    enum_cls: type[StrEnum],
    kind: ValidationErrorKind = ValidationErrorKind.INVALID,
) -> Callable[[str, Any], tuple[StrEnum, ...]]:
    """Cria normalizer para lista não vazia de membros de `enum_cls`."""
    item = to_enum(enum_cls, kind)

    def normalize(field: str, value: Any) -> tuple[StrEnum, ...]:
        items = [value] if isinstance(value, str) else list(value)
        if not items:
            raise ValidationError(ValidationErrorKind.MISSING, "lista vazia", field)
        return tuple(dict.fromkeys(item(field, raw) for raw in items))

    return normalize


def to_id_list(field: str, value: Any) -> tuple[int, ...]:
    """Normaliza lista não vazia de IDs positivos."""
    items = [value] if isinstance(value, int) else list(value)
    if not items:
        raise ValidationError(ValidationErrorKind.MISSING, "lista vazia", field)
    ids = tuple(to_int(field, raw) for raw in items)
    if any(item <= 0 for item in ids):
        raise ValidationError(ValidationErrorKind.RANGE, "IDs devem ser > 0", field)
    return ids


def to_datetime(field: str, value: Any) -> datetime:
    """Aceita datetime ou string ISO-8601; datas sem fuso são tratadas como UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ValidationError(
                ValidationErrorKind.FORMAT,
                "data ISO-8601 inválida",
                field,
            ) from exc
    else:
        raise ValidationError(ValidationErrorKind.FORMAT, "deve ser datetime", field)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
