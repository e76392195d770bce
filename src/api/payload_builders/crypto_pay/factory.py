"""Factory para obter o builder correto por método da API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.payload_builders.crypto_pay.check import (
    CreateCheckBuilder,
    DeleteCheckBuilder,
    GetChecksBuilder,
)
from api.payload_builders.crypto_pay.invoice import (
    CreateInvoiceBuilder,
    DeleteInvoiceBuilder,
    GetInvoicesBuilder,
)
from api.payload_builders.crypto_pay.stats import GetStatsBuilder
from api.payload_builders.crypto_pay.transfer import GetTransfersBuilder, TransferBuilder
from app.constants.crypto_pay import ApiMethod

if TYPE_CHECKING:
    from api.payload_builders.crypto_pay.base import RequestBuilder
    from app.protocols.transport import TransportProtocol

# Mapeamento de método remoto para builder
_BUILDERS: dict[ApiMethod, type[RequestBuilder]] = {
    ApiMethod.CREATE_INVOICE: CreateInvoiceBuilder,
    ApiMethod.GET_INVOICES: GetInvoicesBuilder,
    ApiMethod.DELETE_INVOICE: DeleteInvoiceBuilder,
    ApiMethod.TRANSFER: TransferBuilder,
    ApiMethod.GET_TRANSFERS: GetTransfersBuilder,
    ApiMethod.CREATE_CHECK: CreateCheckBuilder,
    ApiMethod.GET_CHECKS: GetChecksBuilder,
    ApiMethod.DELETE_CHECK: DeleteCheckBuilder,
    ApiMethod.GET_STATS: GetStatsBuilder,
}


def get_request_builder(
    method: ApiMethod,
    transport: TransportProtocol | None = None,
) -> RequestBuilder:
    """Retorna um builder novo para o método.

    Args:
        method: Método remoto
        transport: Transporte para `execute()` (opcional)

    Raises:
        ValueError: Se o método não recebe parâmetros (ex.: getMe)
    """
    builder_cls = _BUILDERS.get(method)
    if builder_cls is None:
        raise ValueError(f"Método sem builder de parâmetros: {method}")
    return builder_cls(transport)
