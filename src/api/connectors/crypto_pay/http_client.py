"""Cliente HTTP para a API Crypto Pay.

Comportamentos:
- Header de autenticação `Crypto-Pay-API-Token` em toda chamada
- Verbo HTTP por método (GET/POST/DELETE), parâmetros como JSON
- Parse do envelope {ok, result, error}
- Logging estruturado sem token, corpo ou dados de usuário
- Sem retry automático: erros de transporte vão direto ao chamador

Um único httpx.AsyncClient é compartilhado; o cliente não guarda estado
por request e pode ser usado por várias tasks ao mesmo tempo.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from api.connectors.crypto_pay.errors import (
    ApiError,
    NoResultError,
    TransportError,
    parse_api_error,
)
from api.connectors.crypto_pay.models import ApiEnvelope
from app.constants.crypto_pay import HTTP_VERBS, ApiMethod
from app.observability.metrics import record_api_call, record_latency
from config.settings.crypto_pay import MAINNET_API_BASE_URL

if TYPE_CHECKING:
    from types import TracebackType

    from config.settings import CryptoPaySettings

logger: logging.Logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "Crypto-Pay-API-Token"


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = MAINNET_API_BASE_URL
    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class CryptoPayHttpClient:
    """Transporte httpx para a API Crypto Pay (implementa TransportProtocol)."""

    def __init__(
        self,
        api_token: str,
        config: HttpClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Inicializa o transporte.

        Args:
            api_token: Token do app no CryptoBot
            config: Configuração HTTP
            http_client: AsyncClient externo (o chamador continua dono dele)

        Raises:
            ValueError: Se api_token estiver vazio
        """
        if not api_token or not api_token.strip():
            raise ValueError(
                "api_token é obrigatório. Verifique se CRYPTO_PAY_API_TOKEN está configurado."
            )
        self._config = config or HttpClientConfig()
        self._headers = {**self._config.default_headers, API_TOKEN_HEADER: api_token}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            verify=self._config.verify_ssl,
        )

    @property
    def base_url(self) -> str:
        """URL base em uso."""
        return self._config.base_url

    async def call(
        self,
        method: ApiMethod,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Chama um método da API e devolve o campo `result`.

        Args:
            method: Método remoto
            params: Parâmetros já serializados (opcional)

        Returns:
            Valor bruto de `result`

        Raises:
            TransportError: Falha de rede, status HTTP ou resposta inválida
            ApiError: Resposta com `ok: false`
            NoResultError: Resposta sem `result`
        """
        url = f"{self._config.base_url.rstrip('/')}/{method.value}"
        verb = HTTP_VERBS.get(method, "GET")
        started = time.perf_counter()
        try:
            response = await self._client.request(
                verb,
                url,
                json=params or None,
                headers=self._headers,
                timeout=self._config.timeout_seconds,
            )
            result = self._process_response(response, method)
        except httpx.TimeoutException as exc:
            logger.warning("crypto_pay_http_timeout", extra={"method": method.value})
            record_api_call(method.value, success=False, error_name="http_timeout")
            raise TransportError("http_timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning("crypto_pay_http_connection_error", extra={"method": method.value})
            record_api_call(method.value, success=False, error_name="http_connection_error")
            raise TransportError("http_connection_error") from exc
        except TransportError as exc:
            error_name = exc.name if isinstance(exc, ApiError) else str(exc)
            record_api_call(method.value, success=False, error_name=error_name)
            raise
        finally:
            record_latency("crypto_pay_http", method.value, (time.perf_counter() - started) * 1000)

        record_api_call(method.value, success=True)
        return result

    def _process_response(self, response: httpx.Response, method: ApiMethod) -> Any:
        """Processa o envelope de resposta."""
        status_code = response.status_code
        try:
            envelope = ApiEnvelope.model_validate(response.json())
        except (json.JSONDecodeError, PydanticValidationError) as exc:
            logger.error(
                "crypto_pay_response_invalid",
                extra={"method": method.value, "status_code": status_code},
            )
            if status_code >= 400:
                raise TransportError("http_status_error", status_code=status_code) from exc
            raise TransportError("invalid_response", status_code=status_code) from exc

        if not envelope.ok:
            detail = parse_api_error(envelope.error, envelope.error_code)
            logger.warning(
                "crypto_pay_api_error",
                extra={
                    "method": method.value,
                    "status_code": status_code,
                    "error_code": detail.code,
                    "error_name": detail.name,
                },
            )
            raise ApiError(detail.code, detail.name, status_code=status_code)

        if status_code >= 400:
            raise TransportError("http_status_error", status_code=status_code)

        if envelope.result is None:
            raise NoResultError(status_code=status_code)

        logger.debug(
            "crypto_pay_request_ok",
            extra={"method": method.value, "status_code": status_code},
        )
        return envelope.result

    async def aclose(self) -> None:
        """Fecha o AsyncClient se ele foi criado por esta instância."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> CryptoPayHttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_crypto_pay_http_client(
    settings: CryptoPaySettings | None = None,
) -> CryptoPayHttpClient:
    """Factory para criar o transporte com config do ambiente.

    Args:
        settings: CryptoPaySettings opcional. Se None, carrega do ambiente.

    Returns:
        Transporte HTTP configurado.
    """
    # Import local para evitar dependência circular
    from config.settings import get_crypto_pay_settings

    crypto_pay = settings or get_crypto_pay_settings()
    config = HttpClientConfig(
        base_url=crypto_pay.resolved_base_url,
        timeout_seconds=crypto_pay.request_timeout_seconds,
    )
    return CryptoPayHttpClient(crypto_pay.api_token, config=config)
