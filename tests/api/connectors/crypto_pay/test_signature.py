"""Testes da verificação de assinatura de webhooks Crypto Pay."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from api.connectors.crypto_pay.signature import compute_signature, verify_signature

SECRET = "s3cr3t"
BODY = b'{"a":1}'


def _expected(secret: str, body: bytes) -> str:
    key = hashlib.sha256(secret.encode("utf-8")).digest()
    return hmac.new(key, body, hashlib.sha256).hexdigest()


class TestComputeSignature:
    """Testes do cálculo da assinatura."""

    def test_key_is_sha256_of_secret(self) -> None:
        """Chave HMAC é SHA-256 do token, não o token em si."""
        assert compute_signature(SECRET, BODY) == _expected(SECRET, BODY)
        naive = hmac.new(SECRET.encode(), BODY, hashlib.sha256).hexdigest()
        assert compute_signature(SECRET, BODY) != naive

    def test_accepts_bytes_secret(self) -> None:
        """Segredo em bytes equivale ao mesmo segredo em str."""
        assert compute_signature(SECRET.encode(), BODY) == compute_signature(SECRET, BODY)


class TestVerifySignature:
    """Testes da verificação."""

    def test_valid_signature(self) -> None:
        """Assinatura correta é aceita."""
        assert verify_signature(SECRET, BODY, _expected(SECRET, BODY)) is True

    def test_uppercase_hex_is_accepted(self) -> None:
        """Hex em maiúsculas representa os mesmos bytes."""
        assert verify_signature(SECRET, BODY, _expected(SECRET, BODY).upper()) is True

    def test_single_byte_body_change(self) -> None:
        """Qualquer byte alterado no corpo invalida a assinatura."""
        signature = _expected(SECRET, BODY)

        for index in range(len(BODY)):
            mutated = bytearray(BODY)
            mutated[index] ^= 0x01
            assert verify_signature(SECRET, bytes(mutated), signature) is False

    def test_single_char_signature_change(self) -> None:
        """Qualquer dígito alterado na assinatura é rejeitado."""
        signature = _expected(SECRET, BODY)

        for index in range(len(signature)):
            replacement = "0" if signature[index] != "0" else "1"
            mutated = signature[:index] + replacement + signature[index + 1 :]
            assert verify_signature(SECRET, BODY, mutated) is False

    def test_wrong_secret(self) -> None:
        """Assinatura gerada com outro token é rejeitada."""
        assert verify_signature(SECRET, BODY, _expected("outro", BODY)) is False

    @pytest.mark.parametrize("signature", [None, "", "zz-not-hex", "abc"])
    def test_missing_or_malformed_header(self, signature: str | None) -> None:
        """Header ausente ou malformado retorna False sem exceção."""
        assert verify_signature(SECRET, BODY, signature) is False

    def test_empty_secret_or_body(self) -> None:
        """Sem segredo ou sem corpo não há assinatura válida."""
        assert verify_signature("", BODY, _expected("", BODY)) is False
        assert verify_signature(SECRET, b"", _expected(SECRET, b"")) is False
