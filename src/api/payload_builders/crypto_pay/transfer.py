"""Builders de transferência: transfer, getTransfers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.crypto_pay.base import PAGINATION_FIELDS, FieldSpec, RequestBuilder
from api.payload_builders.crypto_pay.requests import GetTransfersRequest, TransferRequest
from api.validators.crypto_pay.constraints import Length, Range
from api.validators.crypto_pay.cross_field import amount_precision, usd_amount_range
from api.validators.crypto_pay.errors import ValidationErrorKind
from api.validators.crypto_pay.limits import MAX_COMMENT_LENGTH, MAX_SPEND_ID_LENGTH
from api.validators.crypto_pay.normalizers import (
    to_bool,
    to_decimal,
    to_enum,
    to_id_list,
    to_int,
    to_str,
)
from app.constants.crypto_pay import CryptoAsset

if TYPE_CHECKING:
    from api.validators.crypto_pay.cross_field import ExchangeRateLike
    from api.validators.crypto_pay.errors import ValidationError


class TransferBuilder(RequestBuilder[TransferRequest]):
    """Builder de transfer.

    Obrigatórios: `user_id`, `asset`, `amount` e `spend_id` (chave de
    idempotência da transferência no lado remoto).
    """

    request_model = TransferRequest
    fields = (
        FieldSpec("user_id", to_int, (Range(0, min_exclusive=True),), slot="user_id"),
        FieldSpec("asset", to_enum(CryptoAsset, ValidationErrorKind.CURRENCY), slot="asset"),
        FieldSpec("amount", to_decimal, (Range(0, min_exclusive=True),), slot="amount"),
        FieldSpec("spend_id", to_str, (Length(MAX_SPEND_ID_LENGTH),), slot="spend_id"),
        FieldSpec("comment", to_str, (Length(MAX_COMMENT_LENGTH),)),
        FieldSpec("disable_send_notification", to_bool),
    )
    rules = (amount_precision("amount", "asset"),)

    def user_id(self, value: int) -> TransferBuilder:
        return self.with_field("user_id", value)

    def asset(self, value: CryptoAsset | str) -> TransferBuilder:
        return self.with_field("asset", value)

    def amount(self, value: Any) -> TransferBuilder:
        return self.with_field("amount", value)

    def spend_id(self, value: str) -> TransferBuilder:
        return self.with_field("spend_id", value)

    def comment(self, value: str) -> TransferBuilder:
        return self.with_field("comment", value)

    def disable_send_notification(self, value: bool = True) -> TransferBuilder:
        return self.with_field("disable_send_notification", value)

    def _needs_exchange_rates(self) -> bool:
        return True

    def _check_exchange_rates(
        self,
        exchange_rates: list[ExchangeRateLike],
    ) -> list[ValidationError]:
        return usd_amount_range(self._values["amount"], self._values["asset"], exchange_rates)


class GetTransfersBuilder(RequestBuilder[GetTransfersRequest]):
    """Builder de getTransfers (todos os filtros opcionais)."""

    request_model = GetTransfersRequest
    fields = (
        FieldSpec("asset", to_enum(CryptoAsset, ValidationErrorKind.CURRENCY)),
        FieldSpec("transfer_ids", to_id_list),
        FieldSpec("spend_id", to_str, (Length(MAX_SPEND_ID_LENGTH),)),
        *PAGINATION_FIELDS,
    )

    def asset(self, value: CryptoAsset | str) -> GetTransfersBuilder:
        return self.with_field("asset", value)

    def transfer_ids(self, value: Any) -> GetTransfersBuilder:
        return self.with_field("transfer_ids", value)

    def spend_id(self, value: str) -> GetTransfersBuilder:
        return self.with_field("spend_id", value)

    def offset(self, value: int) -> GetTransfersBuilder:
        return self.with_field("offset", value)

    def count(self, value: int) -> GetTransfersBuilder:
        return self.with_field("count", value)
