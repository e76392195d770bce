"""Testes das settings do cliente Crypto Pay."""

from __future__ import annotations

import pytest

from config.settings import (
    MAINNET_API_BASE_URL,
    TESTNET_API_BASE_URL,
    BaseSettings,
    CryptoPaySettings,
    DedupeSettings,
    get_base_settings,
    get_crypto_pay_settings,
    get_dedupe_settings,
)


class TestCryptoPaySettings:
    """Testes de CryptoPaySettings."""

    def test_defaults(self) -> None:
        """Padrões: mainnet, collect_all, expiração de 10 minutos."""
        settings = CryptoPaySettings()

        assert settings.resolved_base_url == MAINNET_API_BASE_URL
        assert settings.handler_failure_policy == "collect_all"
        assert settings.webhook_expiration_seconds == 600
        assert settings.validate() == ["CRYPTO_PAY_API_TOKEN não configurado"]

    def test_testnet_and_explicit_url(self) -> None:
        """URL explícita sobrepõe a rede."""
        assert CryptoPaySettings(network="testnet").resolved_base_url == TESTNET_API_BASE_URL
        explicit = CryptoPaySettings(network="testnet", api_base_url="https://proxy.local/api")
        assert explicit.resolved_base_url == "https://proxy.local/api"

    def test_signing_secret_falls_back_to_token(self) -> None:
        """Sem segredo dedicado, assina com o token do app."""
        assert CryptoPaySettings(api_token="tok").signing_secret == "tok"
        assert CryptoPaySettings(api_token="tok", webhook_secret="wh").signing_secret == "wh"

    def test_validate_collects_errors(self) -> None:
        """Todos os problemas são reportados juntos."""
        settings = CryptoPaySettings(
            api_token="tok",
            api_base_url="http://inseguro",
            request_timeout_seconds=0,
            webhook_expiration_seconds=-1,
        )

        errors = settings.validate()

        assert len(errors) == 3
        assert any("https://" in error for error in errors)

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Carrega variáveis CRYPTO_PAY_*."""
        monkeypatch.setenv("CRYPTO_PAY_API_TOKEN", "1234:AA")
        monkeypatch.setenv("CRYPTO_PAY_NETWORK", "TESTNET")
        monkeypatch.setenv("CRYPTO_PAY_REQUEST_TIMEOUT_SECONDS", "5.5")
        monkeypatch.setenv("CRYPTO_PAY_HANDLER_FAILURE_POLICY", "stop_on_first_error")
        monkeypatch.setenv("CRYPTO_PAY_WEBHOOK_EXPIRATION_SECONDS", "0")

        settings = get_crypto_pay_settings()

        assert settings.api_token == "1234:AA"
        assert settings.network == "testnet"
        assert settings.request_timeout_seconds == 5.5
        assert settings.handler_failure_policy == "stop_on_first_error"
        assert settings.webhook_expiration_seconds == 0
        assert settings.validate() == []


class TestBaseAndDedupeSettings:
    """Testes de BaseSettings e DedupeSettings."""

    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """prod/stage são aceitos como apelidos."""
        monkeypatch.setenv("ENVIRONMENT", "prod")

        assert get_base_settings().is_production is True

    def test_redis_backend_requires_url(self) -> None:
        """Backend redis sem REDIS_URL é inválido."""
        dedupe = DedupeSettings(backend="redis")

        assert dedupe.validate(BaseSettings()) == [
            "DEDUPE_BACKEND=redis requer REDIS_URL configurado"
        ]
        assert dedupe.validate(BaseSettings(redis_url="redis://localhost:6379/0")) == []

    def test_dedupe_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Carrega DEDUPE_* do ambiente."""
        monkeypatch.setenv("DEDUPE_BACKEND", "REDIS")
        monkeypatch.setenv("DEDUPE_TTL_SECONDS", "3600")

        dedupe = get_dedupe_settings()

        assert dedupe.backend == "redis"
        assert dedupe.ttl_seconds == 3600
