"""Testes do bootstrap: validação de settings e factories."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from app import bootstrap
from app.bootstrap import dependencies, validate_runtime_settings
from app.infra.stores import MemoryDedupeStore, RedisDedupeStore
from app.use_cases.crypto_pay import HandlerFailurePolicy
from config.settings import CryptoPaySettings, DedupeSettings


class TestValidateRuntimeSettings:
    """Testes de validate_runtime_settings."""

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Em development configuração incompleta não bloqueia."""
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.delenv("CRYPTO_PAY_API_TOKEN", raising=False)

        validate_runtime_settings()

    def test_production_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Em production configuração inválida impede o boot."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("CRYPTO_PAY_API_TOKEN", raising=False)
        monkeypatch.setenv("DEDUPE_BACKEND", "redis")
        monkeypatch.delenv("REDIS_URL", raising=False)

        with pytest.raises(RuntimeError) as exc_info:
            validate_runtime_settings()

        message = str(exc_info.value)
        assert "crypto_pay: CRYPTO_PAY_API_TOKEN não configurado" in message
        assert "dedupe: DEDUPE_BACKEND=redis requer REDIS_URL" in message

    def test_production_valid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Configuração completa passa em production."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CRYPTO_PAY_API_TOKEN", "1234:AA")
        monkeypatch.setenv("DEDUPE_BACKEND", "redis")
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

        validate_runtime_settings()


class TestFactories:
    """Testes das factories de dependências."""

    def test_memory_dedupe_store(self) -> None:
        """Backend memory usa o limite configurado."""
        store = dependencies.create_dedupe_store(DedupeSettings(backend="memory", max_entries=10))

        assert isinstance(store, MemoryDedupeStore)

    def test_redis_dedupe_store(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Backend redis usa o cliente assíncrono compartilhado."""
        fake_client = MagicMock()
        monkeypatch.setattr(dependencies, "create_async_redis_client", lambda: fake_client)

        store = dependencies.create_dedupe_store(DedupeSettings(backend="redis"))

        assert isinstance(store, RedisDedupeStore)

    def test_webhook_pipeline_from_settings(self) -> None:
        """Política e segredo vêm das settings."""
        settings = CryptoPaySettings(
            api_token="1234:AA",
            handler_failure_policy="stop_on_first_error",
            webhook_expiration_seconds=0,
        )

        pipeline = dependencies.create_webhook_pipeline(
            MemoryDedupeStore(),
            settings=settings,
            dedupe_settings=DedupeSettings(),
        )

        assert pipeline.policy is HandlerFailurePolicy.STOP_ON_FIRST_ERROR
        assert pipeline.handler_names == []

    def test_webhook_pipeline_requires_secret(self) -> None:
        """Sem token nem segredo dedicado não há pipeline."""
        with pytest.raises(ValueError):
            dependencies.create_webhook_pipeline(
                MemoryDedupeStore(),
                settings=CryptoPaySettings(),
                dedupe_settings=DedupeSettings(),
            )

    @pytest.mark.asyncio
    async def test_crypto_pay_client_from_settings(self) -> None:
        """Fachada criada a partir das settings e fechada ao final."""
        client = dependencies.create_crypto_pay_client(
            CryptoPaySettings(api_token="1234:AA", network="testnet")
        )

        await client.aclose()

    def test_singletons_are_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_webhook_pipeline devolve sempre a mesma instância."""
        monkeypatch.setenv("CRYPTO_PAY_API_TOKEN", "1234:AA")
        monkeypatch.setenv("DEDUPE_BACKEND", "memory")
        bootstrap.get_webhook_pipeline.cache_clear()
        bootstrap.get_dedupe_store.cache_clear()

        try:
            assert bootstrap.get_webhook_pipeline() is bootstrap.get_webhook_pipeline()
        finally:
            bootstrap.get_webhook_pipeline.cache_clear()
            bootstrap.get_dedupe_store.cache_clear()

    @pytest.mark.asyncio
    async def test_client_singleton(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_crypto_pay_client reaproveita o mesmo transporte."""
        monkeypatch.setenv("CRYPTO_PAY_API_TOKEN", "1234:AA")
        bootstrap.get_crypto_pay_client.cache_clear()

        client = bootstrap.get_crypto_pay_client()
        try:
            assert bootstrap.get_crypto_pay_client() is client
        finally:
            await client.aclose()
            bootstrap.get_crypto_pay_client.cache_clear()


class TestInitializeLogging:
    """Testes de inicialização de logging."""

    def test_initialize_test_app_sets_debug(self) -> None:
        """initialize_test_app configura DEBUG no root logger."""
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        try:
            bootstrap.initialize_test_app()
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
        finally:
            root.handlers = handlers
            root.setLevel(level)
