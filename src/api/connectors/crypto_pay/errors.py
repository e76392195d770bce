"""Erros do transporte e da API Crypto Pay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class TransportError(Exception):
    """Falha de rede/HTTP sem dados sensíveis.

    Propagada ao chamador sem retry automático.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiError(TransportError):
    """Resposta com `ok: false` da API."""

    def __init__(self, code: int, name: str, status_code: int | None = None) -> None:
        super().__init__(f"Crypto Pay API error: {name} ({code})", status_code)
        self.code = code
        self.name = name


class NoResultError(ApiError):
    """Resposta `ok: true` sem campo `result`."""

    def __init__(self, status_code: int | None = None) -> None:
        super().__init__(0, "NO_RESULT", status_code)


@dataclass(frozen=True)
class ApiErrorDetail:
    """Erro extraído do envelope de resposta."""

    code: int
    name: str


def parse_api_error(envelope_error: Any, error_code: int | None) -> ApiErrorDetail:
    """Extrai código e nome do erro do envelope.

    A API já usou tanto `{"error": {"code": 401, "name": "..."}}` quanto
    `{"error": "...", "error_code": 401}`.

    Args:
        envelope_error: Valor do campo `error`
        error_code: Valor do campo `error_code` (se presente)

    Returns:
        ApiErrorDetail com valores padrão quando ausentes
    """
    if isinstance(envelope_error, dict):
        return ApiErrorDetail(
            code=int(envelope_error.get("code", error_code or 0)),
            name=str(envelope_error.get("name", "UNKNOWN")),
        )
    return ApiErrorDetail(code=error_code or 0, name=str(envelope_error or "UNKNOWN"))
