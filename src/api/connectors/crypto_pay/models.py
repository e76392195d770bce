"""Modelos de resposta da API Crypto Pay.

Registros simples de transferência de dados; campos extras enviados
pela API são ignorados. Códigos de ativo ficam como string para não
quebrar o parse quando a API passar a listar ativos novos.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from api.connectors.crypto_pay.errors import TransportError
from app.constants.crypto_pay import (
    CheckStatus,
    CurrencyType,
    InvoiceStatus,
    PayButtonName,
    TransferStatus,
    UpdateType,
)

logger = logging.getLogger(__name__)


class ApiEnvelope(BaseModel):
    """Envelope padrão de resposta: {ok, result, error}."""

    model_config = ConfigDict(extra="ignore")

    ok: bool
    result: Any = None
    error: str | dict[str, Any] | None = None
    error_code: int | None = None


class AppInfo(BaseModel):
    """Resposta de getMe."""

    model_config = ConfigDict(extra="ignore")

    app_id: int
    name: str
    payment_processing_bot_username: str
    webhook_endpoint: str | None = None


class Invoice(BaseModel):
    """Invoice (também embutida em updates de webhook)."""

    model_config = ConfigDict(extra="ignore")

    invoice_id: int
    hash: str
    currency_type: CurrencyType = CurrencyType.CRYPTO
    asset: str | None = None
    fiat: str | None = None
    amount: Decimal
    paid_asset: str | None = None
    paid_amount: Decimal | None = None
    paid_fiat_rate: Decimal | None = None
    accepted_assets: list[str] | None = None
    fee_asset: str | None = None
    fee_amount: Decimal | None = None
    bot_invoice_url: str = ""
    mini_app_invoice_url: str = ""
    web_app_invoice_url: str = ""
    description: str | None = None
    status: InvoiceStatus
    created_at: datetime
    paid_usd_rate: Decimal | None = None
    allow_comments: bool = False
    allow_anonymous: bool = False
    expiration_date: datetime | None = None
    paid_at: datetime | None = None
    paid_anonymously: bool | None = None
    comment: str | None = None
    hidden_message: str | None = None
    payload: str | None = None
    paid_btn_name: PayButtonName | None = None
    paid_btn_url: str | None = None

    @property
    def is_paid(self) -> bool:
        """Retorna True se a invoice foi paga."""
        return self.status == InvoiceStatus.PAID


class Check(BaseModel):
    """Check (voucher) criado pelo app."""

    model_config = ConfigDict(extra="ignore")

    check_id: int
    hash: str
    asset: str
    amount: Decimal
    bot_check_url: str
    status: CheckStatus
    created_at: datetime
    activated_at: datetime | None = None


class Transfer(BaseModel):
    """Transferência de saldo do app para um usuário."""

    model_config = ConfigDict(extra="ignore")

    transfer_id: int
    spend_id: str
    user_id: int
    asset: str
    amount: Decimal
    status: TransferStatus
    completed_at: datetime
    comment: str | None = None


class InvoicePage(BaseModel):
    """Resposta de getInvoices."""

    model_config = ConfigDict(extra="ignore")

    items: list[Invoice] = Field(default_factory=list)


class CheckPage(BaseModel):
    """Resposta de getChecks."""

    model_config = ConfigDict(extra="ignore")

    items: list[Check] = Field(default_factory=list)


class TransferPage(BaseModel):
    """Resposta de getTransfers."""

    model_config = ConfigDict(extra="ignore")

    items: list[Transfer] = Field(default_factory=list)


class Balance(BaseModel):
    """Saldo do app em um ativo."""

    model_config = ConfigDict(extra="ignore")

    currency_code: str
    available: Decimal
    onhold: Decimal = Decimal("0")


class ExchangeRate(BaseModel):
    """Cotação: 1 `source` = `rate` `target`."""

    model_config = ConfigDict(extra="ignore")

    is_valid: bool
    is_crypto: bool = False
    is_fiat: bool = False
    source: str
    target: str
    rate: Decimal


class Currency(BaseModel):
    """Moeda listada por getCurrencies."""

    model_config = ConfigDict(extra="ignore")

    is_blockchain: bool = False
    is_stablecoin: bool = False
    is_fiat: bool = False
    name: str
    code: str
    url: str | None = None
    decimals: int


class AppStats(BaseModel):
    """Estatísticas do app em um período."""

    model_config = ConfigDict(extra="ignore")

    volume: Decimal
    conversion: Decimal
    unique_users_count: int
    created_invoice_count: int
    paid_invoice_count: int
    start_at: datetime
    end_at: datetime


class Update(BaseModel):
    """Notificação recebida via webhook.

    A unicidade de `update_id` é garantida pelo store de dedupe,
    não pelo parser.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    update_id: int
    update_type: UpdateType
    request_date: datetime
    payload: Invoice


def parse_result(response_type: Any, result: Any, method: str) -> Any:
    """Converte o `result` bruto no tipo de resposta da operação.

    Args:
        response_type: Modelo ou tipo esperado (ex.: Invoice, list[Balance])
        result: Valor de `result` devolvido pelo transporte
        method: Método remoto (só para log)

    Raises:
        TransportError: `result` com formato inesperado ("invalid_result")
    """
    try:
        return TypeAdapter(response_type).validate_python(result)
    except PydanticValidationError as exc:
        logger.error("crypto_pay_result_invalid", extra={"method": method})
        raise TransportError("invalid_result") from exc
