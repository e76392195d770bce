"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import ValidationError as PydanticValidationError

from api.connectors.crypto_pay.models import Update
from api.connectors.crypto_pay.signature import verify_signature


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidPayloadError(WebhookRequestError):
    """Payload malformado: JSON inválido, tipo de update desconhecido ou campos ausentes."""


class ExpiredUpdateError(WebhookRequestError):
    """Update mais antigo que a janela de expiração configurada."""


def ensure_valid_signature(
    secret: str | bytes,
    raw_body: bytes,
    signature: str | None,
) -> None:
    """Valida a assinatura do corpo bruto.

    Raises:
        InvalidSignatureError: Header ausente, malformado ou divergente
    """
    if not verify_signature(secret, raw_body, signature):
        raise InvalidSignatureError("invalid_signature")


def parse_update(raw_body: bytes) -> Update:
    """Converte o corpo bruto em Update tipado.

    Só deve ser chamado após a verificação de assinatura.

    Args:
        raw_body: Corpo bruto da requisição

    Raises:
        InvalidPayloadError: Se o corpo não for um Update válido

    Returns:
        Update parseado
    """
    if not raw_body:
        raise InvalidPayloadError("empty_body")
    try:
        return Update.model_validate_json(raw_body)
    except PydanticValidationError as exc:
        raise InvalidPayloadError("invalid_update") from exc


def ensure_not_expired(
    update: Update,
    expiration_seconds: int,
    now: datetime | None = None,
) -> None:
    """Rejeita updates cuja `request_date` excede a janela de expiração.

    Args:
        update: Update parseado
        expiration_seconds: Idade máxima em segundos
        now: Instante de referência (padrão: agora, UTC)

    Raises:
        ExpiredUpdateError: Se o update estiver expirado
    """
    reference = now or datetime.now(UTC)
    request_date = update.request_date
    if request_date.tzinfo is None:
        request_date = request_date.replace(tzinfo=UTC)
    if reference - request_date > timedelta(seconds=expiration_seconds):
        raise ExpiredUpdateError("update_expired")
