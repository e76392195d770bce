"""Pipeline de ingestão de webhooks Crypto Pay.

Fluxo por envelope (cada transição só avança):

    RECEIVED -> SIGNATURE_CHECKED -> PARSED -> DEDUP_CHECKED
             -> DISPATCHED -> COMPLETED

REJECTED é terminal e alcançável a partir da assinatura (401), do parse
(400) e da expiração (400). A assinatura é verificada sobre os bytes
brutos antes de qualquer parse. O update_id é gravado no store de dedupe
antes do dispatch (check-and-set atômico), então duas entregas
concorrentes do mesmo update disparam os handlers uma única vez.

Uso:
    pipeline = WebhookPipeline(secret=token, dedupe=MemoryDedupeStore())
    pipeline.register(notify_user)
    result = await pipeline.process(signature, raw_body)
    return result.status_code
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from api.connectors.crypto_pay.signature import SIGNATURE_HEADER
from api.connectors.crypto_pay.webhook.receive import (
    ExpiredUpdateError,
    InvalidPayloadError,
    InvalidSignatureError,
    ensure_not_expired,
    ensure_valid_signature,
    parse_update,
)
from app.observability.metrics import record_latency, record_webhook_outcome
from app.use_cases.crypto_pay.handlers import HandlerFailurePolicy, HandlerRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.update_handler import UpdateHandlerProtocol
    from app.use_cases.crypto_pay.errors import HandlerError
    from app.use_cases.crypto_pay.handlers import HandlerCallable

logger = logging.getLogger(__name__)

# Retenção padrão do dedupe: cobre a janela de reentrega do CryptoBot
DEFAULT_DEDUPE_TTL_SECONDS = 86400


class PipelineState(StrEnum):
    """Estados de um envelope no pipeline."""

    RECEIVED = "received"
    SIGNATURE_CHECKED = "signature_checked"
    PARSED = "parsed"
    DEDUP_CHECKED = "dedup_checked"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"
    REJECTED = "rejected"


class PipelineOutcome(StrEnum):
    """Resumo do processamento para a camada HTTP."""

    REJECTED_SIGNATURE = "rejected_signature"
    REJECTED_PAYLOAD = "rejected_payload"
    REJECTED_EXPIRED = "rejected_expired"
    DUPLICATE = "duplicate"
    DISPATCHED = "dispatched"
    DISPATCHED_WITH_ERRORS = "dispatched_with_errors"
    HANDLER_FAILED = "handler_failed"


_STATUS_CODES: dict[PipelineOutcome, int] = {
    PipelineOutcome.REJECTED_SIGNATURE: 401,
    PipelineOutcome.REJECTED_PAYLOAD: 400,
    PipelineOutcome.REJECTED_EXPIRED: 400,
    PipelineOutcome.DUPLICATE: 200,
    PipelineOutcome.DISPATCHED: 200,
    PipelineOutcome.DISPATCHED_WITH_ERRORS: 200,
    PipelineOutcome.HANDLER_FAILED: 500,
}

_REJECTIONS = frozenset(
    {
        PipelineOutcome.REJECTED_SIGNATURE,
        PipelineOutcome.REJECTED_PAYLOAD,
        PipelineOutcome.REJECTED_EXPIRED,
    }
)


@dataclass(frozen=True, slots=True)
class WebhookEnvelope:
    """Entrega HTTP bruta: consumida uma vez pelo pipeline e descartada."""

    raw_body: bytes
    signature: str | None
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Resultado do pipeline para um envelope.

    Attributes:
        outcome: Resumo (rejeição, duplicado ou dispatch)
        update_id: ID do update (None quando rejeitado antes do parse)
        succeeded: Índices dos handlers executados com sucesso
        handler_error: Falhas de handlers conforme a política
        reason: Motivo curto da rejeição (sem detalhes do payload)
    """

    outcome: PipelineOutcome
    update_id: int | None = None
    succeeded: tuple[int, ...] = ()
    handler_error: HandlerError | None = None
    reason: str | None = None

    @property
    def state(self) -> PipelineState:
        """Estado terminal do envelope."""
        if self.outcome in _REJECTIONS:
            return PipelineState.REJECTED
        return PipelineState.COMPLETED

    @property
    def status_code(self) -> int:
        """Status HTTP sugerido."""
        return _STATUS_CODES[self.outcome]

    @property
    def ok(self) -> bool:
        """True para duplicado ou dispatch concluído (2xx)."""
        return self.status_code < 400


class WebhookPipeline:
    """Autentica, parseia, deduplica e despacha updates do webhook."""

    def __init__(
        self,
        *,
        secret: str,
        dedupe: AsyncDedupeProtocol,
        policy: HandlerFailurePolicy = HandlerFailurePolicy.COLLECT_ALL,
        dedupe_ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS,
        expiration_seconds: int | None = None,
    ) -> None:
        """Inicializa o pipeline.

        Args:
            secret: Token do app usado na assinatura
            dedupe: Store de dedupe com check-and-set atômico
            policy: Política de falha dos handlers
            dedupe_ttl_seconds: Retenção dos update_ids vistos
            expiration_seconds: Idade máxima do update (None = sem checagem)

        Raises:
            ValueError: Se secret estiver vazio
        """
        if not secret:
            raise ValueError("secret é obrigatório para verificar webhooks")
        self._secret = secret
        self._dedupe = dedupe
        self._policy = HandlerFailurePolicy(policy)
        self._dedupe_ttl = dedupe_ttl_seconds
        self._expiration_seconds = expiration_seconds
        self._registry = HandlerRegistry()

    @property
    def policy(self) -> HandlerFailurePolicy:
        """Política de falha configurada."""
        return self._policy

    @property
    def handler_names(self) -> list[str]:
        """Handlers na ordem de registro."""
        return self._registry.names

    def register(
        self,
        handler: UpdateHandlerProtocol | HandlerCallable,
        name: str | None = None,
    ) -> None:
        """Registra handler; permitido apenas antes do primeiro envelope.

        Raises:
            RegistrationClosedError: Processamento já iniciado
        """
        self._registry.register(handler, name)

    async def handle_request(
        self,
        headers: Mapping[str, str],
        raw_body: bytes,
    ) -> PipelineResult:
        """Variante que lê a assinatura do mapeamento de headers (sem caixa)."""
        signature = next(
            (value for key, value in headers.items() if key.lower() == SIGNATURE_HEADER),
            None,
        )
        return await self.process(signature, raw_body)

    async def process(self, signature: str | None, raw_body: bytes) -> PipelineResult:
        """Processa uma entrega (valor do header + corpo bruto)."""
        return await self.process_envelope(WebhookEnvelope(raw_body, signature))

    async def process_envelope(self, envelope: WebhookEnvelope) -> PipelineResult:
        """Conduz o envelope pelos estágios do pipeline."""
        self._registry.close()
        started = time.perf_counter()
        result = await self._run(envelope)
        elapsed_ms = (time.perf_counter() - started) * 1000
        record_latency("webhook_pipeline", "process", elapsed_ms)
        record_webhook_outcome(result.outcome.value, result.update_id, result.status_code)
        return result

    async def _run(self, envelope: WebhookEnvelope) -> PipelineResult:
        # RECEIVED -> SIGNATURE_CHECKED
        try:
            ensure_valid_signature(self._secret, envelope.raw_body, envelope.signature)
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_rejected",
                extra={"reason": str(exc), "payload_size": len(envelope.raw_body)},
            )
            return PipelineResult(PipelineOutcome.REJECTED_SIGNATURE, reason=str(exc))

        # SIGNATURE_CHECKED -> PARSED
        try:
            update = parse_update(envelope.raw_body)
        except InvalidPayloadError as exc:
            logger.warning("webhook_rejected", extra={"reason": str(exc)})
            return PipelineResult(PipelineOutcome.REJECTED_PAYLOAD, reason=str(exc))

        if self._expiration_seconds:
            try:
                ensure_not_expired(update, self._expiration_seconds, now=envelope.received_at)
            except ExpiredUpdateError as exc:
                logger.warning(
                    "webhook_rejected",
                    extra={"reason": str(exc), "update_id": update.update_id},
                )
                return PipelineResult(
                    PipelineOutcome.REJECTED_EXPIRED,
                    update_id=update.update_id,
                    reason=str(exc),
                )

        # PARSED -> DEDUP_CHECKED (grava antes do dispatch)
        if await self._dedupe.seen(dedupe_key(update.update_id), self._dedupe_ttl):
            logger.info("webhook_duplicate", extra={"update_id": update.update_id})
            return PipelineResult(PipelineOutcome.DUPLICATE, update_id=update.update_id)

        # DEDUP_CHECKED -> DISPATCHED -> COMPLETED
        report = await self._registry.dispatch(update, self._policy)
        if report.error is None:
            outcome = PipelineOutcome.DISPATCHED
        elif self._policy is HandlerFailurePolicy.STOP_ON_FIRST_ERROR:
            outcome = PipelineOutcome.HANDLER_FAILED
        else:
            outcome = PipelineOutcome.DISPATCHED_WITH_ERRORS

        logger.info(
            "webhook_dispatched",
            extra={
                "update_id": update.update_id,
                "outcome": outcome.value,
                "handlers_ok": len(report.succeeded),
                "handlers_failed": len(report.error.failures) if report.error else 0,
            },
        )
        return PipelineResult(
            outcome,
            update_id=update.update_id,
            succeeded=report.succeeded,
            handler_error=report.error,
        )


def dedupe_key(update_id: int) -> str:
    """Chave de dedupe de um update."""
    return f"update:{update_id}"
