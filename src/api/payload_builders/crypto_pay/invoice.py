"""Builders de invoice: createInvoice, getInvoices, deleteInvoice."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.crypto_pay.base import PAGINATION_FIELDS, FieldSpec, RequestBuilder
from api.payload_builders.crypto_pay.requests import (
    CreateInvoiceRequest,
    DeleteInvoiceRequest,
    GetInvoicesRequest,
)
from api.validators.crypto_pay.constraints import Length, Range, UrlScheme
from api.validators.crypto_pay.cross_field import (
    amount_precision,
    only_with,
    requires_together,
    usd_amount_range,
)
from api.validators.crypto_pay.errors import ValidationErrorKind
from api.validators.crypto_pay.limits import (
    MAX_DESCRIPTION_LENGTH,
    MAX_EXPIRES_IN,
    MAX_HIDDEN_MESSAGE_LENGTH,
    MAX_PAYLOAD_LENGTH,
    MIN_EXPIRES_IN,
    PAID_BUTTON_URL_SCHEMES,
)
from api.validators.crypto_pay.normalizers import (
    to_bool,
    to_decimal,
    to_enum,
    to_enum_list,
    to_id_list,
    to_int,
    to_str,
)
from app.constants.crypto_pay import (
    CryptoAsset,
    FiatCurrency,
    InvoiceStatus,
    PayButtonName,
)

if TYPE_CHECKING:
    from api.validators.crypto_pay.cross_field import ExchangeRateLike
    from api.validators.crypto_pay.errors import ValidationError

_CURRENCY = ValidationErrorKind.CURRENCY


class CreateInvoiceBuilder(RequestBuilder[CreateInvoiceRequest]):
    """Builder de createInvoice.

    Obrigatórios: `amount` e uma moeda (`asset` OU `fiat`).
    """

    request_model = CreateInvoiceRequest
    fields = (
        FieldSpec("amount", to_decimal, (Range(0, min_exclusive=True),), slot="amount"),
        FieldSpec("asset", to_enum(CryptoAsset, _CURRENCY), slot="currency"),
        FieldSpec("fiat", to_enum(FiatCurrency, _CURRENCY), slot="currency"),
        FieldSpec("accepted_assets", to_enum_list(CryptoAsset, _CURRENCY)),
        FieldSpec("description", to_str, (Length(MAX_DESCRIPTION_LENGTH),)),
        FieldSpec("hidden_message", to_str, (Length(MAX_HIDDEN_MESSAGE_LENGTH),)),
        FieldSpec("paid_btn_name", to_enum(PayButtonName)),
        FieldSpec("paid_btn_url", to_str, (UrlScheme(PAID_BUTTON_URL_SCHEMES),)),
        FieldSpec("payload", to_str, (Length(MAX_PAYLOAD_LENGTH),)),
        FieldSpec("allow_comments", to_bool),
        FieldSpec("allow_anonymous", to_bool),
        FieldSpec("expires_in", to_int, (Range(MIN_EXPIRES_IN, MAX_EXPIRES_IN),)),
    )
    rules = (
        requires_together("paid_btn_name", "paid_btn_url"),
        only_with("accepted_assets", "fiat"),
        amount_precision("amount", "asset", "fiat"),
    )

    def amount(self, value: Any) -> CreateInvoiceBuilder:
        return self.with_field("amount", value)

    def asset(self, value: CryptoAsset | str) -> CreateInvoiceBuilder:
        return self.with_field("asset", value)

    def fiat(self, value: FiatCurrency | str) -> CreateInvoiceBuilder:
        return self.with_field("fiat", value)

    def accepted_assets(self, value: Any) -> CreateInvoiceBuilder:
        return self.with_field("accepted_assets", value)

    def description(self, value: str) -> CreateInvoiceBuilder:
        return self.with_field("description", value)

    def hidden_message(self, value: str) -> CreateInvoiceBuilder:
        return self.with_field("hidden_message", value)

    def paid_button(self, name: PayButtonName | str, url: str) -> CreateInvoiceBuilder:
        """Define nome e URL do botão pós-pagamento de uma vez."""
        return self.with_field("paid_btn_name", name).with_field("paid_btn_url", url)

    def payload(self, value: str) -> CreateInvoiceBuilder:
        return self.with_field("payload", value)

    def allow_comments(self, value: bool) -> CreateInvoiceBuilder:
        return self.with_field("allow_comments", value)

    def allow_anonymous(self, value: bool) -> CreateInvoiceBuilder:
        return self.with_field("allow_anonymous", value)

    def expires_in(self, seconds: int) -> CreateInvoiceBuilder:
        return self.with_field("expires_in", seconds)

    def _needs_exchange_rates(self) -> bool:
        return "asset" in self._values

    def _check_exchange_rates(
        self,
        exchange_rates: list[ExchangeRateLike],
    ) -> list[ValidationError]:
        asset = self._values.get("asset")
        if asset is None:
            return []
        return usd_amount_range(self._values["amount"], asset, exchange_rates)


class GetInvoicesBuilder(RequestBuilder[GetInvoicesRequest]):
    """Builder de getInvoices (todos os filtros opcionais)."""

    request_model = GetInvoicesRequest
    fields = (
        FieldSpec("asset", to_enum(CryptoAsset, _CURRENCY)),
        FieldSpec("fiat", to_enum(FiatCurrency, _CURRENCY)),
        FieldSpec("invoice_ids", to_id_list),
        FieldSpec("status", to_enum(InvoiceStatus)),
        *PAGINATION_FIELDS,
    )

    def asset(self, value: CryptoAsset | str) -> GetInvoicesBuilder:
        return self.with_field("asset", value)

    def fiat(self, value: FiatCurrency | str) -> GetInvoicesBuilder:
        return self.with_field("fiat", value)

    def invoice_ids(self, value: Any) -> GetInvoicesBuilder:
        return self.with_field("invoice_ids", value)

    def status(self, value: InvoiceStatus | str) -> GetInvoicesBuilder:
        return self.with_field("status", value)

    def offset(self, value: int) -> GetInvoicesBuilder:
        return self.with_field("offset", value)

    def count(self, value: int) -> GetInvoicesBuilder:
        return self.with_field("count", value)


class DeleteInvoiceBuilder(RequestBuilder[DeleteInvoiceRequest]):
    """Builder de deleteInvoice."""

    request_model = DeleteInvoiceRequest
    fields = (
        FieldSpec("invoice_id", to_int, (Range(0, min_exclusive=True),), slot="invoice_id"),
    )

    def invoice_id(self, value: int) -> DeleteInvoiceBuilder:
        return self.with_field("invoice_id", value)
