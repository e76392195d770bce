"""Settings da API Crypto Pay (CryptoBot).

Configurações de autenticação, rede, timeouts e webhook.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

MAINNET_API_BASE_URL = "https://pay.crypt.bot/api"
TESTNET_API_BASE_URL = "https://testnet-pay.crypt.bot/api"

Network = Literal["mainnet", "testnet"]
HandlerFailurePolicyName = Literal["collect_all", "stop_on_first_error"]


@dataclass(frozen=True)
class CryptoPaySettings:
    """Configurações da integração Crypto Pay.

    Attributes:
        api_token: Token do app (segredo)
        network: Rede alvo (mainnet|testnet), define a URL padrão
        api_base_url: URL base explícita (sobrepõe `network`)
        request_timeout_seconds: Timeout por request
        webhook_secret: Segredo de assinatura do webhook (padrão: api_token)
        handler_failure_policy: Política de falha dos handlers do webhook
        webhook_expiration_seconds: Idade máxima de um update (0 = desabilitado)
    """

    api_token: str = ""
    network: Network = "mainnet"
    api_base_url: str = ""
    request_timeout_seconds: float = 30.0
    webhook_secret: str = ""
    handler_failure_policy: HandlerFailurePolicyName = "collect_all"
    webhook_expiration_seconds: int = 600

    @property
    def resolved_base_url(self) -> str:
        """URL base efetiva."""
        if self.api_base_url:
            return self.api_base_url
        return TESTNET_API_BASE_URL if self.network == "testnet" else MAINNET_API_BASE_URL

    @property
    def signing_secret(self) -> str:
        """Segredo usado na verificação de assinatura do webhook."""
        return self.webhook_secret or self.api_token

    def validate(self) -> list[str]:
        """Valida configurações Crypto Pay.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.api_token:
            errors.append("CRYPTO_PAY_API_TOKEN não configurado")

        if self.network not in ("mainnet", "testnet"):
            errors.append(f"CRYPTO_PAY_NETWORK inválido: {self.network}")

        if self.api_base_url and not self.api_base_url.startswith("https://"):
            errors.append("CRYPTO_PAY_API_BASE_URL deve usar https://")

        if self.request_timeout_seconds <= 0:
            errors.append("CRYPTO_PAY_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.handler_failure_policy not in ("collect_all", "stop_on_first_error"):
            errors.append(
                f"CRYPTO_PAY_HANDLER_FAILURE_POLICY inválida: {self.handler_failure_policy}"
            )

        if self.webhook_expiration_seconds < 0:
            errors.append("CRYPTO_PAY_WEBHOOK_EXPIRATION_SECONDS deve ser >= 0")

        return errors


def _load_crypto_pay_from_env() -> CryptoPaySettings:
    """Carrega CryptoPaySettings de variáveis de ambiente."""
    network_str = os.getenv("CRYPTO_PAY_NETWORK", "mainnet").lower()
    network: Network = "testnet" if network_str == "testnet" else "mainnet"
    policy_str = os.getenv("CRYPTO_PAY_HANDLER_FAILURE_POLICY", "collect_all").lower()
    policy: HandlerFailurePolicyName = (
        "stop_on_first_error" if policy_str == "stop_on_first_error" else "collect_all"
    )
    return CryptoPaySettings(
        api_token=os.getenv("CRYPTO_PAY_API_TOKEN", ""),
        network=network,
        api_base_url=os.getenv("CRYPTO_PAY_API_BASE_URL", ""),
        request_timeout_seconds=float(os.getenv("CRYPTO_PAY_REQUEST_TIMEOUT_SECONDS", "30")),
        webhook_secret=os.getenv("CRYPTO_PAY_WEBHOOK_SECRET", ""),
        handler_failure_policy=policy,
        webhook_expiration_seconds=int(os.getenv("CRYPTO_PAY_WEBHOOK_EXPIRATION_SECONDS", "600")),
    )


@lru_cache(maxsize=1)
def get_crypto_pay_settings() -> CryptoPaySettings:
    """Retorna instância cacheada de CryptoPaySettings."""
    return _load_crypto_pay_from_env()
