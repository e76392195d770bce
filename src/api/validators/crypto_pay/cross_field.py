"""Regras entre campos, avaliadas na finalização do builder.

Cada regra recebe o mapeamento de campos preenchidos e devolve a lista
de violações (vazia = OK). Nenhuma regra para na primeira falha.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from api.validators.crypto_pay.constraints import Precision, Range, validate
from api.validators.crypto_pay.errors import ValidationError, ValidationErrorKind
from api.validators.crypto_pay.limits import MAX_USD_AMOUNT, MIN_USD_AMOUNT, decimals_for
from app.constants.crypto_pay import CryptoAsset, FiatCurrency

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from decimal import Decimal

    CrossFieldRule = Callable[[Mapping[str, Any]], list[ValidationError]]


class ExchangeRateLike(Protocol):
    """Cotação mínima usada na checagem de valor em USD."""

    source: str
    target: str
    rate: Decimal


def requires_together(first: str, second: str) -> CrossFieldRule:
    """Os dois campos devem ser informados juntos (ou nenhum deles)."""

    def rule(values: Mapping[str, Any]) -> list[ValidationError]:
        has_first = values.get(first) is not None
        has_second = values.get(second) is not None
        if has_first and not has_second:
            return [
                ValidationError(
                    ValidationErrorKind.MISSING,
                    f"obrigatório quando {first} é informado",
                    second,
                )
            ]
        if has_second and not has_first:
            return [
                ValidationError(
                    ValidationErrorKind.MISSING,
                    f"obrigatório quando {second} é informado",
                    first,
                )
            ]
        return []

    return rule


def mutually_exclusive(first: str, second: str) -> CrossFieldRule:
    """No máximo um dos dois campos pode ser informado."""

    def rule(values: Mapping[str, Any]) -> list[ValidationError]:
        if values.get(first) is not None and values.get(second) is not None:
            return [
                ValidationError(
                    ValidationErrorKind.INVALID,
                    f"não pode ser combinado com {first}",
                    second,
                )
            ]
        return []

    return rule


def only_with(field: str, companion: str) -> CrossFieldRule:
    """`field` só é aceito quando `companion` também está preenchido."""

    def rule(values: Mapping[str, Any]) -> list[ValidationError]:
        if values.get(field) is not None and values.get(companion) is None:
            return [
                ValidationError(
                    ValidationErrorKind.INVALID,
                    f"permitido apenas com {companion}",
                    field,
                )
            ]
        return []

    return rule


def amount_precision(amount_field: str, *currency_fields: str) -> CrossFieldRule:
    """A precisão do valor não pode exceder a da moeda selecionada."""

    def rule(values: Mapping[str, Any]) -> list[ValidationError]:
        amount = values.get(amount_field)
        if amount is None:
            return []
        for name in currency_fields:
            currency = values.get(name)
            if isinstance(currency, CryptoAsset | FiatCurrency):
                try:
                    validate(
                        amount_field,
                        amount,
                        Precision(decimals_for(currency), currency.value),
                    )
                except ValidationError as exc:
                    return [exc]
        return []

    return rule


def date_order(start_field: str, end_field: str) -> CrossFieldRule:
    """`start_field` não pode estar no futuro e `end_field` >= `start_field`."""

    def rule(values: Mapping[str, Any]) -> list[ValidationError]:
        errors: list[ValidationError] = []
        start: datetime | None = values.get(start_field)
        end: datetime | None = values.get(end_field)
        if start is not None and start > datetime.now(UTC):
            errors.append(
                ValidationError(ValidationErrorKind.RANGE, "não pode estar no futuro", start_field)
            )
        if start is not None and end is not None and end < start:
            errors.append(
                ValidationError(
                    ValidationErrorKind.RANGE,
                    f"deve ser >= {start_field}",
                    end_field,
                )
            )
        return errors

    return rule


def usd_amount_range(
    amount: Decimal,
    asset: CryptoAsset,
    exchange_rates: Iterable[ExchangeRateLike],
    field: str = "amount",
) -> list[ValidationError]:
    """Checa o valor equivalente em USD (1..25000) usando cotações do chamador."""
    rate = next(
        (
            item.rate
            for item in exchange_rates
            if item.source == asset and item.target == FiatCurrency.USD
        ),
        None,
    )
    if rate is None:
        return [
            ValidationError(
                ValidationErrorKind.MISSING,
                f"cotação {asset.value}/USD não encontrada",
                "exchange_rates",
            )
        ]
    try:
        validate(field, amount * rate, Range(MIN_USD_AMOUNT, MAX_USD_AMOUNT))
    except ValidationError:
        return [
            ValidationError(
                ValidationErrorKind.RANGE,
                f"valor deve estar entre {MIN_USD_AMOUNT} e {MAX_USD_AMOUNT} USD",
                field,
            )
        ]
    return []
