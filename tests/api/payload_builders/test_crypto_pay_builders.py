"""Testes dos builders em estágios da API Crypto Pay.

Cobre: estágios, transições só de ida, handles consumidos, agregação de
erros na finalização, serialização e factory.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest

from api.connectors.crypto_pay.errors import TransportError
from api.connectors.crypto_pay.models import Invoice
from api.payload_builders.crypto_pay import (
    BuilderConsumedError,
    BuilderNotReadyError,
    BuilderStage,
    BuilderStateError,
    CreateCheckBuilder,
    CreateInvoiceBuilder,
    CreateInvoiceRequest,
    DeleteInvoiceBuilder,
    FieldAlreadySetError,
    GetInvoicesBuilder,
    GetStatsBuilder,
    TransferBuilder,
    UnknownFieldError,
    get_request_builder,
)
from api.validators.crypto_pay import (
    AggregateValidationError,
    ValidationError,
    ValidationErrorKind,
)
from app.constants.crypto_pay import ApiMethod, CryptoAsset, CurrencyType, FiatCurrency


class _Rate:
    def __init__(self, source: str, rate: str) -> None:
        self.source = source
        self.target = "USD"
        self.rate = Decimal(rate)


def _rate_result(source: str, rate: str) -> dict[str, Any]:
    return {"is_valid": True, "is_crypto": True, "source": source, "target": "USD", "rate": rate}


def _invoice_result(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "invoice_id": 528890,
        "hash": "IVDoTcNBYEfk",
        "currency_type": "crypto",
        "asset": "TON",
        "amount": "10.50",
        "bot_invoice_url": "https://t.me/CryptoBot?start=IVDoTcNBYEfk",
        "status": "active",
        "created_at": "2024-01-01T10:00:00.000Z",
    }
    data.update(overrides)
    return data


class TestBuilderStages:
    """Testes das transições de estágio."""

    def test_starts_unconfigured(self) -> None:
        """Builder novo com slots obrigatórios começa em UNCONFIGURED."""
        builder = CreateInvoiceBuilder()

        assert builder.stage is BuilderStage.UNCONFIGURED
        assert builder.missing_slots == ["amount", "currency"]

    def test_configuring_then_ready(self) -> None:
        """Preencher slots avança o estágio até READY."""
        builder = CreateInvoiceBuilder().amount("10.50")
        assert builder.stage is BuilderStage.CONFIGURING

        builder = builder.asset("TON")
        assert builder.stage is BuilderStage.READY
        assert builder.missing_slots == []

    def test_optional_only_builder_is_ready(self) -> None:
        """Listagens sem obrigatórios já nascem prontas."""
        assert GetInvoicesBuilder().stage is BuilderStage.READY

    def test_finalize_before_ready(self) -> None:
        """finalize antes de READY lista os slots faltantes."""
        builder = CreateInvoiceBuilder().amount("10")

        with pytest.raises(BuilderNotReadyError) as exc_info:
            builder.finalize()

        assert exc_info.value.missing == ["currency"]
        assert exc_info.value.kind is ValidationErrorKind.MISSING
        assert isinstance(exc_info.value, BuilderStateError)

    def test_not_ready_keeps_handle_usable(self) -> None:
        """Falha por slot ausente não consome o handle."""
        builder = CreateInvoiceBuilder().amount("10")

        with pytest.raises(BuilderNotReadyError):
            builder.finalize()

        request = builder.asset("TON").finalize()
        assert request.asset is CryptoAsset.TON


class TestBuilderTransitions:
    """Testes de with_field e handles consumidos."""

    def test_unknown_field(self) -> None:
        """Campo inexistente na operação é rejeitado."""
        with pytest.raises(UnknownFieldError) as exc_info:
            CreateInvoiceBuilder().with_field("spend_id", "x")

        assert exc_info.value.field == "spend_id"

    def test_field_cannot_be_set_twice(self) -> None:
        """Builders não retrocedem: campo já definido não muda."""
        builder = CreateInvoiceBuilder().description("a")

        with pytest.raises(FieldAlreadySetError):
            builder.description("b")

    def test_alternative_slot_cannot_be_filled_twice(self) -> None:
        """asset e fiat ocupam o mesmo slot de moeda."""
        builder = CreateInvoiceBuilder().asset("TON")

        with pytest.raises(FieldAlreadySetError) as exc_info:
            builder.fiat("USD")

        assert exc_info.value.field == "currency"

    def test_old_handle_is_consumed(self) -> None:
        """Handle anterior fica inutilizável após with_field."""
        first = CreateInvoiceBuilder()
        second = first.amount("1")

        assert first.consumed is True
        assert second.consumed is False
        with pytest.raises(BuilderConsumedError):
            first.asset("TON")
        with pytest.raises(BuilderConsumedError):
            first.finalize()

    def test_finalize_consumes_handle(self) -> None:
        """Um builder finalizado não pode ser reutilizado."""
        builder = CreateInvoiceBuilder().amount("1").asset("TON")
        builder.finalize()

        with pytest.raises(BuilderConsumedError):
            builder.finalize()

    def test_local_violation_is_immediate(self) -> None:
        """Restrição local falha já em with_field e o handle segue válido."""
        builder = CreateInvoiceBuilder()

        with pytest.raises(ValidationError) as exc_info:
            builder.amount("0")

        assert exc_info.value.field == "amount"
        assert exc_info.value.kind is ValidationErrorKind.RANGE
        assert builder.consumed is False
        assert builder.amount("5").stage is BuilderStage.CONFIGURING

    def test_currency_code_is_case_insensitive(self) -> None:
        """Código de ativo em minúsculas é aceito."""
        request = CreateInvoiceBuilder().amount("1").asset("ton").finalize()

        assert request.asset is CryptoAsset.TON


class TestFinalize:
    """Testes da finalização e da agregação de erros."""

    def test_amount_round_trip_preserves_representation(self) -> None:
        """Valor 10.50 chega ao request como "10.50", sem float."""
        request = CreateInvoiceBuilder().amount("10.50").asset("TON").finalize()

        assert isinstance(request, CreateInvoiceRequest)
        assert request.amount == Decimal("10.50")
        params = request.to_params()
        assert params["amount"] == "10.50"
        assert params["asset"] == "TON"
        assert params["currency_type"] == "crypto"
        assert "description" not in params

    def test_float_amount_uses_shortest_representation(self) -> None:
        """Float 0.1 vira "0.1" e não 0.1000000000000000055."""
        params = CreateInvoiceBuilder().amount(0.1).asset("TON").finalize().to_params()

        assert params["amount"] == "0.1"

    def test_fiat_invoice(self) -> None:
        """Invoice fiat define currency_type e serializa accepted_assets."""
        request = (
            CreateInvoiceBuilder()
            .amount("25")
            .fiat("usd")
            .accepted_assets(["TON", "USDT"])
            .finalize()
        )

        assert request.currency_type is CurrencyType.FIAT
        params = request.to_params()
        assert params["fiat"] == "USD"
        assert params["accepted_assets"] == "TON,USDT"

    def test_precision_names_amount_field(self) -> None:
        """10.505 USD excede 2 casas e o erro cita o campo amount."""
        builder = CreateInvoiceBuilder().amount("10.505").fiat(FiatCurrency.USD)

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert exc_info.value.fields == ["amount"]
        assert exc_info.value.errors[0].kind is ValidationErrorKind.CURRENCY

    def test_precision_checked_on_long_amounts(self) -> None:
        """Nove casas em BTC são rejeitadas mesmo com 29 dígitos significativos."""
        builder = CreateInvoiceBuilder().amount("12345678901234567890.123456789").asset("BTC")

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert exc_info.value.fields == ["amount"]

    def test_all_violations_are_reported(self) -> None:
        """Finalização não para no primeiro erro."""
        builder = (
            CreateInvoiceBuilder()
            .amount("10.505")
            .fiat("USD")
            .with_field("paid_btn_name", "viewItem")
        )

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert set(exc_info.value.fields) == {"paid_btn_url", "amount"}

    def test_accepted_assets_requires_fiat(self) -> None:
        """accepted_assets com invoice cripto é inválido."""
        builder = CreateInvoiceBuilder().amount("1").asset("TON").accepted_assets(["USDT"])

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert exc_info.value.fields == ["accepted_assets"]

    def test_paid_button(self) -> None:
        """Botão pós-pagamento define nome e URL juntos."""
        params = (
            CreateInvoiceBuilder()
            .amount("1")
            .asset("TON")
            .paid_button("openBot", "https://t.me/example_bot")
            .finalize()
            .to_params()
        )

        assert params["paid_btn_name"] == "openBot"
        assert params["paid_btn_url"] == "https://t.me/example_bot"

    def test_paid_button_rejects_scheme(self) -> None:
        """URL do botão precisa de http(s)."""
        with pytest.raises(ValidationError) as exc_info:
            CreateInvoiceBuilder().paid_button("openBot", "tg://resolve")

        assert exc_info.value.field == "paid_btn_url"

    def test_usd_range_with_exchange_rates(self) -> None:
        """Valor abaixo de 1 USD é rejeitado quando há cotações."""
        builder = CreateInvoiceBuilder().amount("0.1").asset("TON")

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize(exchange_rates=[_Rate("TON", "2.5")])

        assert exc_info.value.fields == ["amount"]

    def test_usd_range_skipped_without_rates(self) -> None:
        """Sem cotações a checagem em USD não é aplicada."""
        request = CreateInvoiceBuilder().amount("0.1").asset("TON").finalize()

        assert request.amount == Decimal("0.1")


class TestOtherBuilders:
    """Testes dos demais builders."""

    def test_transfer_requires_spend_id(self) -> None:
        """transfer exige user_id, asset, amount e spend_id."""
        builder = TransferBuilder().user_id(1).asset("USDT").amount("5")

        assert builder.missing_slots == ["spend_id"]
        params = builder.spend_id("order-1").comment("obrigado").finalize().to_params()
        assert params == {
            "user_id": 1,
            "asset": "USDT",
            "amount": "5",
            "spend_id": "order-1",
            "comment": "obrigado",
        }

    def test_transfer_spend_id_length(self) -> None:
        """spend_id acima de 64 caracteres é RANGE."""
        with pytest.raises(ValidationError) as exc_info:
            TransferBuilder().spend_id("x" * 65)

        assert exc_info.value.kind is ValidationErrorKind.RANGE

    def test_transfer_precision(self) -> None:
        """USDT aceita no máximo 6 casas."""
        builder = TransferBuilder().user_id(1).asset("USDT").amount("1.0000001").spend_id("s")

        with pytest.raises(AggregateValidationError):
            builder.finalize()

    def test_check_pin_is_exclusive(self) -> None:
        """Check não pode ser fixado por ID e username ao mesmo tempo."""
        builder = (
            CreateCheckBuilder()
            .asset("TON")
            .amount("1")
            .pin_to_user_id(10)
            .pin_to_username("alice")
        )

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert exc_info.value.fields == ["pin_to_username"]

    def test_get_invoices_serializes_lists(self) -> None:
        """IDs viram string separada por vírgula."""
        params = GetInvoicesBuilder().invoice_ids([1, 2, 3]).count(10).finalize().to_params()

        assert params == {"invoice_ids": "1,2,3", "count": 10}

    def test_get_invoices_count_range(self) -> None:
        """count fora de 1..1000 é RANGE."""
        with pytest.raises(ValidationError) as exc_info:
            GetInvoicesBuilder().count(1001)

        assert exc_info.value.field == "count"

    def test_stats_date_order(self) -> None:
        """end_at anterior a start_at é rejeitado na finalização."""
        now = datetime.now(UTC)
        builder = (
            GetStatsBuilder()
            .start_at(now - timedelta(days=1))
            .end_at(now - timedelta(days=2))
        )

        with pytest.raises(AggregateValidationError) as exc_info:
            builder.finalize()

        assert exc_info.value.fields == ["end_at"]

    def test_delete_invoice_requires_id(self) -> None:
        """deleteInvoice tem invoice_id como slot obrigatório."""
        builder = DeleteInvoiceBuilder()

        assert builder.stage is BuilderStage.UNCONFIGURED
        assert builder.invoice_id(7).finalize().to_params() == {"invoice_id": 7}


class TestExecute:
    """Testes do envio pelo transporte."""

    @pytest.mark.asyncio
    async def test_execute_sends_params_and_parses_result(self) -> None:
        """execute repassa método e parâmetros e converte a resposta."""
        transport = AsyncMock()
        transport.call.return_value = _invoice_result()

        builder = CreateInvoiceBuilder(transport).amount("10.50").asset("TON")
        invoice = await builder.execute(exchange_rates=[_Rate("TON", "2.5")])

        assert isinstance(invoice, Invoice)
        assert invoice.invoice_id == 528890
        transport.call.assert_awaited_once_with(
            ApiMethod.CREATE_INVOICE,
            {"currency_type": "crypto", "asset": "TON", "amount": "10.50"},
        )

    @pytest.mark.asyncio
    async def test_execute_fetches_exchange_rates(self) -> None:
        """Sem cotações informadas, execute busca getExchangeRates antes do envio."""
        responses = {
            ApiMethod.GET_EXCHANGE_RATES: [_rate_result("TON", "2.5")],
            ApiMethod.CREATE_INVOICE: _invoice_result(),
        }
        transport = AsyncMock()
        transport.call.side_effect = lambda method, params=None: responses[method]

        invoice = await CreateInvoiceBuilder(transport).amount("10.50").asset("TON").execute()

        assert invoice.invoice_id == 528890
        assert [call.args[0] for call in transport.call.await_args_list] == [
            ApiMethod.GET_EXCHANGE_RATES,
            ApiMethod.CREATE_INVOICE,
        ]

    @pytest.mark.asyncio
    async def test_execute_rejects_amount_over_usd_limit(self) -> None:
        """Limite em USD é aplicado com as cotações buscadas; nada é enviado."""
        transport = AsyncMock()
        transport.call.return_value = [_rate_result("TON", "2.5")]

        builder = TransferBuilder(transport).user_id(1).asset("TON").amount("20000").spend_id("s")
        with pytest.raises(AggregateValidationError) as exc_info:
            await builder.execute()

        assert exc_info.value.fields == ["amount"]
        transport.call.assert_awaited_once_with(ApiMethod.GET_EXCHANGE_RATES)

    @pytest.mark.asyncio
    async def test_execute_fiat_invoice_skips_rates(self) -> None:
        """Invoice em fiat não depende de cotações."""
        transport = AsyncMock()
        transport.call.return_value = _invoice_result(currency_type="fiat", fiat="USD", asset=None)

        await CreateInvoiceBuilder(transport).amount("5").fiat("USD").execute()

        transport.call.assert_awaited_once()
        assert transport.call.await_args.args[0] is ApiMethod.CREATE_INVOICE

    @pytest.mark.asyncio
    async def test_execute_not_ready_does_not_fetch_rates(self) -> None:
        """Builder incompleto falha antes de qualquer chamada remota."""
        transport = AsyncMock()

        with pytest.raises(BuilderNotReadyError):
            await CreateCheckBuilder(transport).asset("TON").execute()

        transport.call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_result_shape_is_transport_error(self) -> None:
        """Resultado em formato inesperado vira TransportError, não erro do pydantic."""
        transport = AsyncMock()
        transport.call.return_value = {"unexpected": True}

        with pytest.raises(TransportError, match="invalid_result"):
            await TransferBuilder(transport).user_id(1).asset("TON").amount("1").spend_id(
                "x"
            ).execute(exchange_rates=[_Rate("TON", "2.5")])

    @pytest.mark.asyncio
    async def test_execute_without_transport(self) -> None:
        """Builder criado sem transporte não pode executar."""
        builder = CreateInvoiceBuilder().amount("1").asset("TON")

        with pytest.raises(BuilderStateError):
            await builder.execute()

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self) -> None:
        """Erros do transporte chegam inalterados ao chamador."""
        transport = AsyncMock()
        transport.call.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await DeleteInvoiceBuilder(transport).invoice_id(1).execute()


class TestFactory:
    """Testes da factory de builders."""

    def test_returns_new_builder(self) -> None:
        """Cada chamada devolve um builder novo."""
        first = get_request_builder(ApiMethod.CREATE_INVOICE)
        second = get_request_builder(ApiMethod.CREATE_INVOICE)

        assert isinstance(first, CreateInvoiceBuilder)
        assert first is not second

    def test_parameterless_method(self) -> None:
        """getMe não tem builder de parâmetros."""
        with pytest.raises(ValueError, match="getMe"):
            get_request_builder(ApiMethod.GET_ME)
