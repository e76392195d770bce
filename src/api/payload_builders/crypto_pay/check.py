"""Builders de check: createCheck, getChecks, deleteCheck."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.crypto_pay.base import PAGINATION_FIELDS, FieldSpec, RequestBuilder
from api.payload_builders.crypto_pay.requests import (
    CreateCheckRequest,
    DeleteCheckRequest,
    GetChecksRequest,
)
from api.validators.crypto_pay.constraints import Length, Range
from api.validators.crypto_pay.cross_field import (
    amount_precision,
    mutually_exclusive,
    usd_amount_range,
)
from api.validators.crypto_pay.errors import ValidationErrorKind
from api.validators.crypto_pay.normalizers import to_decimal, to_enum, to_id_list, to_int, to_str
from app.constants.crypto_pay import CheckStatus, CryptoAsset

if TYPE_CHECKING:
    from api.validators.crypto_pay.cross_field import ExchangeRateLike
    from api.validators.crypto_pay.errors import ValidationError

# Usernames do Telegram têm no máximo 32 caracteres
MAX_USERNAME_LENGTH = 32


class CreateCheckBuilder(RequestBuilder[CreateCheckRequest]):
    """Builder de createCheck.

    Obrigatórios: `asset` e `amount`. O check pode ser fixado a um
    usuário por ID ou por username, nunca pelos dois.
    """

    request_model = CreateCheckRequest
    fields = (
        FieldSpec("asset", to_enum(CryptoAsset, ValidationErrorKind.CURRENCY), slot="asset"),
        FieldSpec("amount", to_decimal, (Range(0, min_exclusive=True),), slot="amount"),
        FieldSpec("pin_to_user_id", to_int, (Range(0, min_exclusive=True),)),
        FieldSpec("pin_to_username", to_str, (Length(MAX_USERNAME_LENGTH),)),
    )
    rules = (
        amount_precision("amount", "asset"),
        mutually_exclusive("pin_to_user_id", "pin_to_username"),
    )

    def asset(self, value: CryptoAsset | str) -> CreateCheckBuilder:
        return self.with_field("asset", value)

    def amount(self, value: Any) -> CreateCheckBuilder:
        return self.with_field("amount", value)

    def pin_to_user_id(self, value: int) -> CreateCheckBuilder:
        return self.with_field("pin_to_user_id", value)

    def pin_to_username(self, value: str) -> CreateCheckBuilder:
        return self.with_field("pin_to_username", value)

    def _needs_exchange_rates(self) -> bool:
        return True

    def _check_exchange_rates(
        self,
        exchange_rates: list[ExchangeRateLike],
    ) -> list[ValidationError]:
        return usd_amount_range(self._values["amount"], self._values["asset"], exchange_rates)


class GetChecksBuilder(RequestBuilder[GetChecksRequest]):
    """Builder de getChecks (todos os filtros opcionais)."""

    request_model = GetChecksRequest
    fields = (
        FieldSpec("asset", to_enum(CryptoAsset, ValidationErrorKind.CURRENCY)),
        FieldSpec("check_ids", to_id_list),
        FieldSpec("status", to_enum(CheckStatus)),
        *PAGINATION_FIELDS,
    )

    def asset(self, value: CryptoAsset | str) -> GetChecksBuilder:
        return self.with_field("asset", value)

    def check_ids(self, value: Any) -> GetChecksBuilder:
        return self.with_field("check_ids", value)

    def status(self, value: CheckStatus | str) -> GetChecksBuilder:
        return self.with_field("status", value)

    def offset(self, value: int) -> GetChecksBuilder:
        return self.with_field("offset", value)

    def count(self, value: int) -> GetChecksBuilder:
        return self.with_field("count", value)


class DeleteCheckBuilder(RequestBuilder[DeleteCheckRequest]):
    """Builder de deleteCheck."""

    request_model = DeleteCheckRequest
    fields = (
        FieldSpec("check_id", to_int, (Range(0, min_exclusive=True),), slot="check_id"),
    )

    def check_id(self, value: int) -> DeleteCheckBuilder:
        return self.with_field("check_id", value)
