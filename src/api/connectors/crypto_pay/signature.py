"""Verificação de assinatura HMAC-SHA256 de webhooks Crypto Pay.

Esquema do CryptoBot: a chave HMAC é SHA-256(token do app), não o token
em si. A assinatura é calculada sobre os bytes brutos do corpo, antes de
qualquer parse JSON.
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_HEADER = "crypto-pay-api-signature"


def compute_signature(secret: str | bytes, raw_body: bytes) -> str:
    """Calcula a assinatura hex esperada para um corpo.

    Args:
        secret: Token/segredo do app
        raw_body: Corpo bruto da requisição

    Returns:
        HMAC-SHA256 em hex (minúsculo)
    """
    secret_bytes = secret.encode("utf-8") if isinstance(secret, str) else secret
    key = hashlib.sha256(secret_bytes).digest()
    return hmac.new(key, raw_body, hashlib.sha256).hexdigest()


def verify_signature(
    secret: str | bytes,
    raw_body: bytes,
    provided_signature: str | None,
) -> bool:
    """Valida a assinatura do header `crypto-pay-api-signature`.

    Nunca levanta exceção: entradas vazias ou hex malformado retornam False.
    A comparação é em tempo constante.

    Args:
        secret: Token/segredo do app
        raw_body: Corpo bruto da requisição
        provided_signature: Valor do header (hex)

    Returns:
        True se assinatura válida
    """
    if not secret or not raw_body or not provided_signature:
        return False

    try:
        provided = bytes.fromhex(provided_signature.strip())
    except ValueError:
        return False

    expected = bytes.fromhex(compute_signature(secret, raw_body))
    return hmac.compare_digest(expected, provided)
