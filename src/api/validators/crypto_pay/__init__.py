"""Validação de campos para requests da API Crypto Pay.

Funções puras e síncronas, usadas pelos builders de payload:
- constraints: restrições de campo único e `validate`
- normalizers: conversão de entrada (Decimal, enums, datas)
- cross_field: regras entre campos avaliadas na finalização

Uso:
    from api.validators.crypto_pay import Range, ValidationError, validate

    validate("count", 50, Range(1, 1000))
"""

from api.validators.crypto_pay.constraints import (
    Constraint,
    Length,
    OneOf,
    Precision,
    Range,
    UrlScheme,
    validate,
)
from api.validators.crypto_pay.errors import (
    AggregateValidationError,
    ValidationError,
    ValidationErrorKind,
)
from api.validators.crypto_pay.normalizers import to_decimal

__all__ = [
    "AggregateValidationError",
    "Constraint",
    "Length",
    "OneOf",
    "Precision",
    "Range",
    "UrlScheme",
    "ValidationError",
    "ValidationErrorKind",
    "to_decimal",
    "validate",
]
