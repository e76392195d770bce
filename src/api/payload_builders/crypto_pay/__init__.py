"""Builders de requests para a API Crypto Pay.

Cada operação com parâmetros tem um builder em estágios que valida
campos ao serem definidos e agrega erros na finalização.

Uso:
    from api.payload_builders.crypto_pay import CreateInvoiceBuilder

    request = (
        CreateInvoiceBuilder()
        .amount("10.50")
        .asset("USDT")
        .description("Pedido #42")
        .finalize()
    )
    params = request.to_params()  # {"amount": "10.50", "asset": "USDT", ...}
"""

from api.payload_builders.crypto_pay.base import (
    BuilderStage,
    FieldSpec,
    RequestBuilder,
    execute_request,
)
from api.payload_builders.crypto_pay.check import (
    CreateCheckBuilder,
    DeleteCheckBuilder,
    GetChecksBuilder,
)
from api.payload_builders.crypto_pay.errors import (
    BuilderConsumedError,
    BuilderNotReadyError,
    BuilderStateError,
    FieldAlreadySetError,
    UnknownFieldError,
)
from api.payload_builders.crypto_pay.factory import get_request_builder
from api.payload_builders.crypto_pay.invoice import (
    CreateInvoiceBuilder,
    DeleteInvoiceBuilder,
    GetInvoicesBuilder,
)
from api.payload_builders.crypto_pay.requests import (
    CreateCheckRequest,
    CreateInvoiceRequest,
    DeleteCheckRequest,
    DeleteInvoiceRequest,
    GetChecksRequest,
    GetInvoicesRequest,
    GetStatsRequest,
    GetTransfersRequest,
    OperationRequest,
    TransferRequest,
)
from api.payload_builders.crypto_pay.stats import GetStatsBuilder
from api.payload_builders.crypto_pay.transfer import GetTransfersBuilder, TransferBuilder

__all__ = [
    # Estados e erros
    "BuilderConsumedError",
    "BuilderNotReadyError",
    "BuilderStage",
    "BuilderStateError",
    # Builders
    "CreateCheckBuilder",
    # Requests
    "CreateCheckRequest",
    "CreateInvoiceBuilder",
    "CreateInvoiceRequest",
    "DeleteCheckBuilder",
    "DeleteCheckRequest",
    "DeleteInvoiceBuilder",
    "DeleteInvoiceRequest",
    "FieldAlreadySetError",
    "FieldSpec",
    "GetChecksBuilder",
    "GetChecksRequest",
    "GetInvoicesBuilder",
    "GetInvoicesRequest",
    "GetStatsBuilder",
    "GetStatsRequest",
    "GetTransfersBuilder",
    "GetTransfersRequest",
    "OperationRequest",
    "RequestBuilder",
    "TransferBuilder",
    "TransferRequest",
    "UnknownFieldError",
    "execute_request",
    "get_request_builder",
]
