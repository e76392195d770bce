"""Testes de parse e expiração de updates do webhook."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from api.connectors.crypto_pay.webhook import (
    ExpiredUpdateError,
    InvalidPayloadError,
    InvalidSignatureError,
    compute_signature,
    ensure_not_expired,
    ensure_valid_signature,
    parse_update,
)
from app.constants.crypto_pay import InvoiceStatus, UpdateType


def _update_body(**overrides: Any) -> bytes:
    data: dict[str, Any] = {
        "update_id": 42,
        "update_type": "invoice_paid",
        "request_date": "2024-01-01T10:00:00.000Z",
        "payload": {
            "invoice_id": 528890,
            "hash": "IVDoTcNBYEfk",
            "currency_type": "crypto",
            "asset": "TON",
            "amount": "10.50",
            "paid_asset": "TON",
            "paid_amount": "10.50",
            "status": "paid",
            "created_at": "2024-01-01T09:00:00.000Z",
            "paid_at": "2024-01-01T09:59:00.000Z",
            "payload": "order-1",
            "unknown_field": "ignorado",
        },
    }
    data.update(overrides)
    return json.dumps(data).encode("utf-8")


class TestParseUpdate:
    """Testes de parse_update."""

    def test_parses_invoice_paid(self) -> None:
        """Update invoice_paid vira modelo tipado com a invoice."""
        update = parse_update(_update_body())

        assert update.update_id == 42
        assert update.update_type is UpdateType.INVOICE_PAID
        assert update.payload.status is InvoiceStatus.PAID
        assert update.payload.is_paid is True
        assert str(update.payload.amount) == "10.50"
        assert update.request_date.tzinfo is not None

    def test_unknown_update_type(self) -> None:
        """Tipo de update desconhecido é payload inválido."""
        with pytest.raises(InvalidPayloadError, match="invalid_update"):
            parse_update(_update_body(update_type="invoice_refunded"))

    @pytest.mark.parametrize("body", [b"not json", b"[]", b'{"update_id": 1}'])
    def test_malformed_body(self, body: bytes) -> None:
        """JSON inválido ou campos ausentes geram InvalidPayloadError."""
        with pytest.raises(InvalidPayloadError):
            parse_update(body)

    def test_empty_body(self) -> None:
        """Corpo vazio é rejeitado."""
        with pytest.raises(InvalidPayloadError, match="empty_body"):
            parse_update(b"")


class TestEnsureValidSignature:
    """Testes de ensure_valid_signature."""

    def test_valid(self) -> None:
        """Assinatura correta não levanta."""
        body = _update_body()
        ensure_valid_signature("token", body, compute_signature("token", body))

    def test_invalid(self) -> None:
        """Assinatura divergente levanta InvalidSignatureError."""
        with pytest.raises(InvalidSignatureError):
            ensure_valid_signature("token", _update_body(), "00" * 32)


class TestEnsureNotExpired:
    """Testes da janela de expiração."""

    def test_recent_update(self) -> None:
        """Update dentro da janela é aceito."""
        update = parse_update(_update_body())
        now = datetime(2024, 1, 1, 10, 5, tzinfo=UTC)

        ensure_not_expired(update, 600, now=now)

    def test_expired_update(self) -> None:
        """Update mais antigo que a janela é rejeitado."""
        update = parse_update(_update_body())
        now = datetime(2024, 1, 1, 10, 0, tzinfo=UTC) + timedelta(seconds=601)

        with pytest.raises(ExpiredUpdateError):
            ensure_not_expired(update, 600, now=now)
