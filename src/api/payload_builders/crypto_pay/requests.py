"""Operation Requests: requests validados, prontos para envio.

Instâncias só devem ser obtidas via `finalize()` dos builders.
Valores monetários serializam como string decimal (nunca float) e
listas de IDs/ativos como string separada por vírgula, conforme a API.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_validator

from api.connectors.crypto_pay.models import (
    AppStats,
    Check,
    CheckPage,
    Invoice,
    InvoicePage,
    Transfer,
    TransferPage,
)
from app.constants.crypto_pay import (
    ApiMethod,
    CheckStatus,
    CryptoAsset,
    CurrencyType,
    FiatCurrency,
    InvoiceStatus,
    PayButtonName,
)

Amount = Annotated[
    Decimal,
    PlainSerializer(lambda value: format(value, "f"), return_type=str, when_used="json"),
]
IdList = Annotated[
    tuple[int, ...],
    PlainSerializer(lambda ids: ",".join(str(i) for i in ids), return_type=str, when_used="json"),
]
AssetList = Annotated[
    tuple[CryptoAsset, ...],
    PlainSerializer(
        lambda assets: ",".join(asset.value for asset in assets),
        return_type=str,
        when_used="json",
    ),
]


class OperationRequest(BaseModel):
    """Base dos requests: imutável e ciente do método remoto."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_method: ClassVar[ApiMethod]
    response_type: ClassVar[Any]

    def to_params(self) -> dict[str, Any]:
        """Serializa para os nomes de campo da API, omitindo ausentes."""
        return self.model_dump(mode="json", exclude_none=True)


class CreateInvoiceRequest(OperationRequest):
    """createInvoice."""

    api_method: ClassVar[ApiMethod] = ApiMethod.CREATE_INVOICE
    response_type: ClassVar[Any] = Invoice

    currency_type: CurrencyType = CurrencyType.CRYPTO
    asset: CryptoAsset | None = None
    fiat: FiatCurrency | None = None
    accepted_assets: AssetList | None = None
    amount: Amount
    description: str | None = None
    hidden_message: str | None = None
    paid_btn_name: PayButtonName | None = None
    paid_btn_url: str | None = None
    payload: str | None = None
    allow_comments: bool | None = None
    allow_anonymous: bool | None = None
    expires_in: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_currency_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and "currency_type" not in data:
            fiat = data.get("fiat")
            data = {
                **data,
                "currency_type": CurrencyType.FIAT if fiat is not None else CurrencyType.CRYPTO,
            }
        return data


class GetInvoicesRequest(OperationRequest):
    """getInvoices."""

    api_method: ClassVar[ApiMethod] = ApiMethod.GET_INVOICES
    response_type: ClassVar[Any] = InvoicePage

    asset: CryptoAsset | None = None
    fiat: FiatCurrency | None = None
    invoice_ids: IdList | None = None
    status: InvoiceStatus | None = None
    offset: int | None = None
    count: int | None = None


class DeleteInvoiceRequest(OperationRequest):
    """deleteInvoice."""

    api_method: ClassVar[ApiMethod] = ApiMethod.DELETE_INVOICE
    response_type: ClassVar[Any] = bool

    invoice_id: int


class TransferRequest(OperationRequest):
    """transfer."""

    api_method: ClassVar[ApiMethod] = ApiMethod.TRANSFER
    response_type: ClassVar[Any] = Transfer

    user_id: int
    asset: CryptoAsset
    amount: Amount
    spend_id: str
    comment: str | None = None
    disable_send_notification: bool | None = None


class GetTransfersRequest(OperationRequest):
    """getTransfers."""

    api_method: ClassVar[ApiMethod] = ApiMethod.GET_TRANSFERS
    response_type: ClassVar[Any] = TransferPage

    asset: CryptoAsset | None = None
    transfer_ids: IdList | None = None
    spend_id: str | None = None
    offset: int | None = None
    count: int | None = None


class CreateCheckRequest(OperationRequest):
    """createCheck."""

    api_method: ClassVar[ApiMethod] = ApiMethod.CREATE_CHECK
    response_type: ClassVar[Any] = Check

    asset: CryptoAsset
    amount: Amount
    pin_to_user_id: int | None = None
    pin_to_username: str | None = None


class GetChecksRequest(OperationRequest):
    """getChecks."""

    api_method: ClassVar[ApiMethod] = ApiMethod.GET_CHECKS
    response_type: ClassVar[Any] = CheckPage

    asset: CryptoAsset | None = None
    check_ids: IdList | None = None
    status: CheckStatus | None = None
    offset: int | None = None
    count: int | None = None


class DeleteCheckRequest(OperationRequest):
    """deleteCheck."""

    api_method: ClassVar[ApiMethod] = ApiMethod.DELETE_CHECK
    response_type: ClassVar[Any] = bool

    check_id: int


class GetStatsRequest(OperationRequest):
    """getStats."""

    api_method: ClassVar[ApiMethod] = ApiMethod.GET_STATS
    response_type: ClassVar[Any] = AppStats

    start_at: datetime | None = None
    end_at: datetime | None = None
