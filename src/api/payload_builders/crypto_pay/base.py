"""Protocolo em estágios dos builders de request.

Cada builder declara seus campos (`FieldSpec`) e as regras entre campos.
O estágio é derivado dos slots obrigatórios preenchidos:

    UNCONFIGURED -> CONFIGURING -> READY

As transições são só de ida: um campo (ou slot) preenchido não pode ser
redefinido. `with_field` devolve um novo handle e consome o anterior;
qualquer chamada posterior no handle antigo levanta BuilderConsumedError.
`finalize` só é aceito em READY e agrega todos os erros encontrados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar

from api.connectors.crypto_pay.models import ExchangeRate, parse_result
from api.payload_builders.crypto_pay.errors import (
    BuilderConsumedError,
    BuilderNotReadyError,
    BuilderStateError,
    FieldAlreadySetError,
    UnknownFieldError,
)
from api.payload_builders.crypto_pay.requests import OperationRequest
from api.validators.crypto_pay.constraints import Range, validate
from api.validators.crypto_pay.errors import AggregateValidationError, ValidationError
from api.validators.crypto_pay.limits import MAX_COUNT, MIN_COUNT
from api.validators.crypto_pay.normalizers import to_int
from app.constants.crypto_pay import ApiMethod

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from api.validators.crypto_pay.constraints import Constraint
    from api.validators.crypto_pay.cross_field import CrossFieldRule, ExchangeRateLike
    from app.protocols.transport import TransportProtocol

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=OperationRequest)


class BuilderStage(StrEnum):
    """Estágio de construção do builder."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaração de um campo da operação.

    Attributes:
        name: Nome do campo na API
        normalize: Conversão de entrada (levanta ValidationError FORMAT)
        constraints: Restrições locais checadas imediatamente
        slot: Slot obrigatório preenchido por este campo (None = opcional).
            Campos alternativos compartilham o mesmo slot (ex.: asset/fiat).
    """

    name: str
    normalize: Callable[[str, Any], Any]
    constraints: tuple[Constraint, ...] = ()
    slot: str | None = None

    def apply(self, value: Any) -> Any:
        """Normaliza e valida o valor; devolve o valor canônico."""
        normalized = self.normalize(self.name, value)
        for constraint in self.constraints:
            validate(self.name, normalized, constraint)
        return normalized


# Campos de paginação compartilhados pelas listagens
PAGINATION_FIELDS = (
    FieldSpec("offset", to_int, (Range(0),)),
    FieldSpec("count", to_int, (Range(MIN_COUNT, MAX_COUNT),)),
)


async def execute_request(transport: TransportProtocol, request: OperationRequest) -> Any:
    """Envia um request já validado e converte o resultado no tipo de resposta.

    O request vai inalterado ao transporte e erros do transporte são
    propagados sem tratamento.

    Raises:
        TransportError: Falha do transporte ou `result` em formato inesperado
    """
    result = await transport.call(request.api_method, request.to_params())
    return parse_result(request.response_type, result, request.api_method.value)


class RequestBuilder(Generic[RequestT]):
    """Base dos builders por operação."""

    request_model: ClassVar[type[OperationRequest]]
    fields: ClassVar[tuple[FieldSpec, ...]] = ()
    rules: ClassVar[tuple[CrossFieldRule, ...]] = ()

    def __init__(self, transport: TransportProtocol | None = None) -> None:
        self._transport = transport
        self._values: dict[str, Any] = {}
        self._consumed = False

    # ──────────────────────────────────────────────────────────────
    # Estado
    # ──────────────────────────────────────────────────────────────

    @classmethod
    def operation(cls) -> str:
        """Nome do método remoto (usado em mensagens de erro)."""
        return cls.request_model.api_method.value

    @classmethod
    def required_slots(cls) -> tuple[str, ...]:
        """Slots obrigatórios na ordem de declaração."""
        return tuple(dict.fromkeys(spec.slot for spec in cls.fields if spec.slot))

    @property
    def values(self) -> Mapping[str, Any]:
        """Cópia dos campos já preenchidos (normalizados)."""
        return dict(self._values)

    @property
    def missing_slots(self) -> list[str]:
        """Slots obrigatórios ainda não preenchidos."""
        filled = self._filled_slots()
        return [slot for slot in self.required_slots() if slot not in filled]

    @property
    def stage(self) -> BuilderStage:
        """Estágio atual derivado dos slots preenchidos."""
        if not self.missing_slots:
            return BuilderStage.READY
        if not self._values:
            return BuilderStage.UNCONFIGURED
        return BuilderStage.CONFIGURING

    @property
    def consumed(self) -> bool:
        """True se o handle já foi consumido."""
        return self._consumed

    def _filled_slots(self) -> set[str]:
        specs = self._specs()
        return {specs[name].slot for name in self._values if specs[name].slot}

    @classmethod
    def _specs(cls) -> dict[str, FieldSpec]:
        return {spec.name: spec for spec in cls.fields}

    def _ensure_active(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(
                f"builder de {self.operation()} já consumido; use o handle retornado"
            )

    # ──────────────────────────────────────────────────────────────
    # Transições
    # ──────────────────────────────────────────────────────────────

    def with_field(self, name: str, value: Any) -> Self:
        """Define um campo e devolve o próximo handle.

        Restrições locais são checadas imediatamente. Em caso de
        ValidationError o handle atual continua utilizável.

        Raises:
            BuilderConsumedError: Handle já consumido
            UnknownFieldError: Campo não existe na operação
            FieldAlreadySetError: Campo ou slot já preenchido
            ValidationError: Valor viola restrição local
        """
        self._ensure_active()
        spec = self._specs().get(name)
        if spec is None:
            raise UnknownFieldError(self.operation(), name)
        if name in self._values:
            raise FieldAlreadySetError(name)
        if spec.slot and spec.slot in self._filled_slots():
            raise FieldAlreadySetError(spec.slot)

        normalized = spec.apply(value)

        successor = type(self)(self._transport)
        successor._values = {**self._values, name: normalized}
        self._consumed = True
        return successor

    def finalize(
        self,
        exchange_rates: Iterable[ExchangeRateLike] | None = None,
    ) -> RequestT:
        """Consome o builder e devolve o Operation Request validado.

        Args:
            exchange_rates: Cotações opcionais para checar o valor em USD

        Raises:
            BuilderConsumedError: Handle já consumido
            BuilderNotReadyError: Slots obrigatórios ausentes
            AggregateValidationError: Todas as violações encontradas
        """
        self._ensure_active()
        missing = self.missing_slots
        if missing:
            raise BuilderNotReadyError(missing)
        self._consumed = True

        errors = self._collect_errors(exchange_rates)
        if errors:
            logger.debug(
                "builder_validation_failed",
                extra={
                    "operation": self.operation(),
                    "fields": [err.field for err in errors],
                },
            )
            raise AggregateValidationError(errors)

        request = self.request_model.model_validate(self._values)
        return request  # type: ignore[return-value]

    async def execute(
        self,
        exchange_rates: Iterable[ExchangeRateLike] | None = None,
    ) -> Any:
        """Finaliza e envia o request pelo transporte associado.

        Operações com limite em USD buscam as cotações atuais (getExchangeRates)
        antes da finalização quando `exchange_rates` não é informado.

        Raises:
            BuilderStateError: Builder criado sem transporte
            BuilderNotReadyError: Slots obrigatórios ausentes
            AggregateValidationError: Violações encontradas na finalização
            TransportError: Falha ao buscar cotações ou ao enviar o request
        """
        if self._transport is None:
            raise BuilderStateError(f"builder de {self.operation()} sem transporte associado")
        if exchange_rates is None and self._needs_exchange_rates():
            self._ensure_active()
            missing = self.missing_slots
            if missing:
                raise BuilderNotReadyError(missing)
            exchange_rates = await self._fetch_exchange_rates(self._transport)
        request = self.finalize(exchange_rates)
        return await execute_request(self._transport, request)

    async def _fetch_exchange_rates(self, transport: TransportProtocol) -> list[ExchangeRate]:
        method = ApiMethod.GET_EXCHANGE_RATES
        result = await transport.call(method)
        return parse_result(list[ExchangeRate], result, method.value)

    # ──────────────────────────────────────────────────────────────
    # Validação na finalização
    # ──────────────────────────────────────────────────────────────

    def _collect_errors(
        self,
        exchange_rates: Iterable[ExchangeRateLike] | None,
    ) -> list[ValidationError]:
        errors: list[ValidationError] = []
        specs = self._specs()
        for name, value in self._values.items():
            try:
                specs[name].apply(value)
            except ValidationError as exc:
                errors.append(exc)
        for rule in self.rules:
            errors.extend(rule(self._values))
        if exchange_rates is not None:
            errors.extend(self._check_exchange_rates(list(exchange_rates)))
        return errors

    def _needs_exchange_rates(self) -> bool:
        """True se `_check_exchange_rates` se aplica aos valores atuais."""
        return False

    def _check_exchange_rates(
        self,
        exchange_rates: list[ExchangeRateLike],
    ) -> list[ValidationError]:
        """Checagens que dependem de cotações; padrão: nenhuma."""
        return []
