"""Enums de domínio para a API Crypto Pay (CryptoBot)."""

from __future__ import annotations

from enum import StrEnum


class CryptoAsset(StrEnum):
    """Ativos cripto suportados pela API Crypto Pay."""

    USDT = "USDT"
    TON = "TON"
    BTC = "BTC"
    ETH = "ETH"
    LTC = "LTC"
    BNB = "BNB"
    TRX = "TRX"
    USDC = "USDC"
    DOGE = "DOGE"
    SEND = "SEND"
    JET = "JET"


class FiatCurrency(StrEnum):
    """Moedas fiduciárias aceitas em invoices do tipo fiat."""

    USD = "USD"
    EUR = "EUR"
    RUB = "RUB"
    BYN = "BYN"
    UAH = "UAH"
    GBP = "GBP"
    CNY = "CNY"
    KGS = "KGS"
    KZT = "KZT"
    UZS = "UZS"
    GEL = "GEL"
    TRY = "TRY"
    AMD = "AMD"
    THB = "THB"
    TJS = "TJS"
    INR = "INR"
    BRL = "BRL"
    IDR = "IDR"
    AZN = "AZN"
    AED = "AED"
    PLN = "PLN"
    ILS = "ILS"


class CurrencyType(StrEnum):
    """Tipo de moeda de uma invoice."""

    CRYPTO = "crypto"
    FIAT = "fiat"


class PayButtonName(StrEnum):
    """Rótulos aceitos para o botão exibido após o pagamento."""

    VIEW_ITEM = "viewItem"
    OPEN_CHANNEL = "openChannel"
    OPEN_BOT = "openBot"
    CALLBACK = "callback"


class InvoiceStatus(StrEnum):
    """Status de uma invoice."""

    ACTIVE = "active"
    PAID = "paid"
    EXPIRED = "expired"


class CheckStatus(StrEnum):
    """Status de um check."""

    ACTIVE = "active"
    ACTIVATED = "activated"


class TransferStatus(StrEnum):
    """Status de uma transferência."""

    COMPLETED = "completed"


class UpdateType(StrEnum):
    """Tipos de update entregues via webhook."""

    INVOICE_PAID = "invoice_paid"


class ApiMethod(StrEnum):
    """Métodos remotos da API Crypto Pay."""

    GET_ME = "getMe"
    CREATE_INVOICE = "createInvoice"
    DELETE_INVOICE = "deleteInvoice"
    GET_INVOICES = "getInvoices"
    CREATE_CHECK = "createCheck"
    DELETE_CHECK = "deleteCheck"
    GET_CHECKS = "getChecks"
    TRANSFER = "transfer"
    GET_TRANSFERS = "getTransfers"
    GET_BALANCE = "getBalance"
    GET_EXCHANGE_RATES = "getExchangeRates"
    GET_CURRENCIES = "getCurrencies"
    GET_STATS = "getStats"


# Verbo HTTP por método; ausentes usam GET.
HTTP_VERBS: dict[ApiMethod, str] = {
    ApiMethod.CREATE_INVOICE: "POST",
    ApiMethod.CREATE_CHECK: "POST",
    ApiMethod.TRANSFER: "POST",
    ApiMethod.DELETE_INVOICE: "DELETE",
    ApiMethod.DELETE_CHECK: "DELETE",
}
