"""Fachada do cliente Crypto Pay.

Dona do transporte compartilhado; entrega builders já associados a ele
e expõe as operações sem parâmetros.

Uso:
    async with CryptoPayClient.from_settings() as client:
        invoice = await client.create_invoice().amount("5").asset("TON").execute()
        balances = await client.get_balance()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.crypto_pay.http_client import (
    CryptoPayHttpClient,
    create_crypto_pay_http_client,
)
from api.connectors.crypto_pay.models import (
    AppInfo,
    Balance,
    Currency,
    ExchangeRate,
    parse_result,
)
from api.payload_builders.crypto_pay import (
    CreateCheckBuilder,
    CreateInvoiceBuilder,
    DeleteCheckBuilder,
    DeleteInvoiceBuilder,
    GetChecksBuilder,
    GetInvoicesBuilder,
    GetStatsBuilder,
    GetTransfersBuilder,
    TransferBuilder,
    execute_request,
)
from app.constants.crypto_pay import ApiMethod

if TYPE_CHECKING:
    from types import TracebackType

    from api.payload_builders.crypto_pay import OperationRequest
    from app.protocols.transport import TransportProtocol
    from config.settings import CryptoPaySettings

logger = logging.getLogger(__name__)


class CryptoPayClient:
    """Cliente de alto nível da API Crypto Pay.

    Args:
        transport: Transporte (CryptoPayHttpClient ou fake em testes)
    """

    def __init__(self, transport: TransportProtocol) -> None:
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: CryptoPaySettings | None = None) -> CryptoPayClient:
        """Cria cliente com transporte HTTP a partir das settings."""
        return cls(create_crypto_pay_http_client(settings))

    @property
    def transport(self) -> TransportProtocol:
        """Transporte compartilhado."""
        return self._transport

    # ──────────────────────────────────────────────────────────────
    # Builders associados ao transporte
    # ──────────────────────────────────────────────────────────────

    def create_invoice(self) -> CreateInvoiceBuilder:
        return CreateInvoiceBuilder(self._transport)

    def get_invoices(self) -> GetInvoicesBuilder:
        return GetInvoicesBuilder(self._transport)

    def delete_invoice(self, invoice_id: int) -> DeleteInvoiceBuilder:
        return DeleteInvoiceBuilder(self._transport).invoice_id(invoice_id)

    def transfer(self) -> TransferBuilder:
        return TransferBuilder(self._transport)

    def get_transfers(self) -> GetTransfersBuilder:
        return GetTransfersBuilder(self._transport)

    def create_check(self) -> CreateCheckBuilder:
        return CreateCheckBuilder(self._transport)

    def get_checks(self) -> GetChecksBuilder:
        return GetChecksBuilder(self._transport)

    def delete_check(self, check_id: int) -> DeleteCheckBuilder:
        return DeleteCheckBuilder(self._transport).check_id(check_id)

    def get_stats(self) -> GetStatsBuilder:
        return GetStatsBuilder(self._transport)

    # ──────────────────────────────────────────────────────────────
    # Operações sem parâmetros
    # ──────────────────────────────────────────────────────────────

    async def get_me(self) -> AppInfo:
        """Dados básicos do app (getMe)."""
        result = await self._transport.call(ApiMethod.GET_ME)
        return parse_result(AppInfo, result, ApiMethod.GET_ME.value)

    async def get_balance(self) -> list[Balance]:
        """Saldos do app por ativo (getBalance)."""
        result = await self._transport.call(ApiMethod.GET_BALANCE)
        return parse_result(list[Balance], result, ApiMethod.GET_BALANCE.value)

    async def get_exchange_rates(self) -> list[ExchangeRate]:
        """Cotações atuais (getExchangeRates)."""
        result = await self._transport.call(ApiMethod.GET_EXCHANGE_RATES)
        return parse_result(list[ExchangeRate], result, ApiMethod.GET_EXCHANGE_RATES.value)

    async def get_currencies(self) -> list[Currency]:
        """Moedas suportadas (getCurrencies)."""
        result = await self._transport.call(ApiMethod.GET_CURRENCIES)
        return parse_result(list[Currency], result, ApiMethod.GET_CURRENCIES.value)

    async def execute(self, request: OperationRequest) -> Any:
        """Envia um Operation Request já finalizado."""
        return await execute_request(self._transport, request)

    # ──────────────────────────────────────────────────────────────
    # Ciclo de vida
    # ──────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Fecha o transporte HTTP, quando aplicável."""
        if isinstance(self._transport, CryptoPayHttpClient):
            await self._transport.aclose()
            logger.debug("crypto_pay_client_closed")

    async def __aenter__(self) -> CryptoPayClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
